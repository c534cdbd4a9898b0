# directory post_processing.py
"""
Emotion post-processing pipeline.

    room list -> RoomGraph -> pattern budget -> greedy optimizer
              -> optional-room filler -> per-room metadata snapshot

Runs once per generated level, synchronously, and always produces a result.
"""
import random
from typing import List, Optional

from appraisal import AppraisalProfile, WeightedSquaredDistance
from appraisal_aggregate import AppraisalAggregate
from emotion_targets import GetEmotionTarget, GetEmotionWeights
from greedy_optimizer import RunGreedyOptimization, OptimizationRun
from level_config import ValidateSettings
from level_utils import LogLevelEvent
from optional_filler import FillOptionalRooms
from pattern_budget import CreatePatternBudget
from room_graph import BuildRoomGraph, RoomGraph, RoomRole


class EmotionRoomMetadata:
    """
    Read-only snapshot of one room handed to the scene layer.
    Holds copies only; nothing here points back into the RoomGraph.
    """

    def __init__(self, room_id, room_name, level_emotion, appraisal: AppraisalProfile, applied_patterns,
                 is_on_critical_path=False, has_next_critical=False, next_critical_direction=None):
        self.room_id = room_id
        self.room_name = room_name
        self.level_emotion = level_emotion
        self.appraisal = appraisal.copy()
        self.applied_patterns = tuple(applied_patterns)
        self.is_on_critical_path = is_on_critical_path
        self.has_next_critical = has_next_critical
        self.next_critical_direction = tuple(next_critical_direction) if next_critical_direction else None

    def to_dict(self):
        return {
            "room_id": self.room_id,
            "room_name": self.room_name,
            "level_emotion": self.level_emotion.value,
            "appraisal": self.appraisal.to_dict(),
            "applied_patterns": [p.name for p in self.applied_patterns],
            "is_on_critical_path": self.is_on_critical_path,
            "has_next_critical": self.has_next_critical,
            "next_critical_direction": list(self.next_critical_direction) if self.next_critical_direction else None,
        }

    def __repr__(self):
        return f"<EmotionRoomMetadata {self.room_id} patterns={[p.name for p in self.applied_patterns]}>"


def ExportRoomMetadata(graph: RoomGraph, emotion) -> List[EmotionRoomMetadata]:
    return [
        EmotionRoomMetadata(
            room_id=node.id,
            room_name=node.name,
            level_emotion=emotion,
            appraisal=node.appraisal,
            applied_patterns=node.applied_patterns,
            is_on_critical_path=node.is_on_critical_path,
            has_next_critical=node.has_next_critical,
            next_critical_direction=node.next_critical_direction,
        )
        for node in graph
    ]


class PostProcessingResult:
    def __init__(self, emotion, graph: RoomGraph, settings, desired_budget=None, remaining_budget=None,
                 run: Optional[OptimizationRun] = None, filled_count=0, metadata=None):
        self.emotion = emotion
        self.graph = graph
        self.settings = settings
        self.target = GetEmotionTarget(emotion)
        self.weights = GetEmotionWeights(emotion)
        self.desired_budget = dict(desired_budget or {})
        self.remaining_budget = dict(remaining_budget or {})
        self.run = run if run is not None else OptimizationRun()
        self.filled_count = filled_count
        self.metadata = list(metadata or [])

    @property
    def state(self):
        return self.run.state

    def final_average(self) -> AppraisalProfile:
        return AppraisalAggregate(self.graph.nodes).average()

    def final_distance(self) -> float:
        return WeightedSquaredDistance(self.final_average(), self.target.center, self.weights)

    def total_applied(self) -> int:
        return sum(len(node.applied_patterns) for node in self.graph)

    def to_dict(self):
        return {
            "emotion": self.emotion.value,
            "state": self.state,
            "desired_budget": {p.name: c for p, c in self.desired_budget.items()},
            "remaining_budget": {p.name: c for p, c in self.remaining_budget.items()},
            "filled_count": self.filled_count,
            "final_distance": self.final_distance(),
            "run": self.run.to_dict(),
            "rooms": [m.to_dict() for m in self.metadata],
        }


def RunPostProcessing(room_instances, settings=None, rng=None, verbose=False) -> PostProcessingResult:
    """Run the whole pass over one generated level."""
    settings = ValidateSettings(settings or {})
    emotion = settings["target_emotion"]
    max_per_room = settings["max_patterns_per_room"]

    if rng is None:
        rng = random.Random(settings["seed"])

    # 1) Room graph
    graph = BuildRoomGraph(room_instances, settings)
    if len(graph) == 0:
        LogLevelEvent("WARNING", "No rooms found in level - skipping emotion post-processing.")
        return PostProcessingResult(emotion, graph, settings)

    # 2) Target and weights
    target = GetEmotionTarget(emotion)
    weights = GetEmotionWeights(emotion)

    # 3) Budget over pattern-eligible rooms
    eligible_count = len(graph.with_role(RoomRole.PATTERN_ELIGIBLE))
    budget = CreatePatternBudget(
        emotion,
        eligible_count,
        max_per_room,
        desired_budgets=settings["desired_budgets"],
        reference_patterns_per_room=settings["reference_patterns_per_room"],
        scale_desired_to_cap=settings["scale_desired_to_cap"],
        verbose=verbose,
    )
    desired_budget = dict(budget)

    # 4) Greedy optimization
    run = RunGreedyOptimization(
        graph, target.center, weights, budget,
        max_patterns_per_room=max_per_room,
        max_iterations=settings["max_iterations"],
        verbose=verbose,
    )

    # 5) Leftovers onto optional rooms
    filled = 0
    if settings["fill_optional_rooms"]:
        filled = FillOptionalRooms(
            graph, budget, max_per_room, rng,
            max_sweeps=settings["filler_max_sweeps"],
            verbose=verbose,
        )

    # 6) Snapshot for the scene layer
    metadata = ExportRoomMetadata(graph, emotion)

    return PostProcessingResult(
        emotion, graph, settings,
        desired_budget=desired_budget,
        remaining_budget=budget,
        run=run,
        filled_count=filled,
        metadata=metadata,
    )

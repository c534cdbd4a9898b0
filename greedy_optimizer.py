# directory greedy_optimizer.py
"""
Greedy pattern allocation.

Each iteration scans every (room, pattern) pair that is still possible,
scores the level average it would produce against the target center and
commits the single best improvement. There is no backtracking: this is a
hill climber, not an optimal solver.
"""
from appraisal import WeightedSquaredDistance
from appraisal_aggregate import AppraisalAggregate
from pattern_library import AppraisalPatternType
from room_graph import RoomRole
from level_utils import LogRoomEvent, LogLevelEvent


class OptimizerState:
    IDLE = 'IDLE'
    ITERATING = 'ITERATING'
    CONVERGED = 'CONVERGED'
    EXHAUSTED = 'EXHAUSTED'


# A level's final room offers no reward, no hint toward a next room and no rest point
TERMINAL_EXCLUDED_PATTERNS = frozenset({
    AppraisalPatternType.Rewards,
    AppraisalPatternType.ClearSignposting,
    AppraisalPatternType.SafeHaven,
})


def IsPatternAllowed(node, pattern, graph) -> bool:
    if node.is_terminal() and pattern in TERMINAL_EXCLUDED_PATTERNS:
        return False

    if pattern == AppraisalPatternType.SafeHaven and node.is_on_critical_path:
        for neighbor in (graph.previous_critical(node), graph.next_critical(node)):
            if neighbor is not None and neighbor.has_pattern(AppraisalPatternType.SafeHaven):
                return False

    return True


class OptimizationRun:
    """Outcome of one greedy pass."""

    def __init__(self, initial_distance=0.0):
        self.state = OptimizerState.IDLE
        self.iterations = 0
        self.initial_distance = initial_distance
        self.final_distance = initial_distance
        self.distance_history = [initial_distance]
        # (node_id, pattern, improvement)
        self.steps = []

    def to_dict(self):
        return {
            "state": self.state,
            "iterations": self.iterations,
            "initial_distance": self.initial_distance,
            "final_distance": self.final_distance,
            "distance_history": list(self.distance_history),
            "steps": [(node_id, pattern.name, improvement) for node_id, pattern, improvement in self.steps],
        }

    def __repr__(self):
        return (f"<OptimizationRun state={self.state} iterations={self.iterations} "
                f"distance={self.initial_distance:.3f}->{self.final_distance:.3f}>")


def _find_best_candidate(graph, aggregate, budget, target_center, weights, current_distance,
                         max_patterns_per_room):
    best = None
    best_improvement = 0.0

    for node in graph.with_role(RoomRole.PATTERN_ELIGIBLE):
        if not node.can_accept_pattern(max_patterns_per_room):
            continue

        in_aggregate = aggregate.includes(node)

        for pattern in sorted(budget):
            if budget[pattern] <= 0:
                continue
            if node.has_pattern(pattern):
                continue
            if not IsPatternAllowed(node, pattern, graph):
                continue

            if in_aggregate:
                candidate_profile = node.preview_pattern(pattern)
                candidate_avg = aggregate.propose(node.appraisal, candidate_profile)
                new_distance = WeightedSquaredDistance(candidate_avg, target_center, weights)
            else:
                new_distance = current_distance

            improvement = current_distance - new_distance
            if improvement > best_improvement:
                best_improvement = improvement
                best = (node, pattern, new_distance)

    return best, best_improvement


def RunGreedyOptimization(graph, target_center, weights, budget, max_patterns_per_room=2,
                          max_iterations=50, verbose=False):
    """
    Assign patterns to pattern-eligible rooms so the average appraisal of the
    critical path moves toward `target_center`.

    Mutates room appraisals, room pattern lists and `budget` in place.
    Returns an OptimizationRun.
    """
    aggregate = AppraisalAggregate(graph.nodes)
    current_distance = WeightedSquaredDistance(aggregate.average(), target_center, weights)
    run = OptimizationRun(current_distance)

    if len(graph) == 0:
        run.state = OptimizerState.CONVERGED
        return run

    run.state = OptimizerState.ITERATING

    for _ in range(max_iterations):
        best, improvement = _find_best_candidate(
            graph, aggregate, budget, target_center, weights, current_distance, max_patterns_per_room
        )

        if best is None:
            run.state = OptimizerState.CONVERGED
            break

        node, pattern, new_distance = best

        old_profile = node.appraisal.copy()
        node.apply_pattern(pattern)
        aggregate.commit(old_profile, node.appraisal)
        budget[pattern] -= 1

        current_distance = new_distance
        run.iterations += 1
        run.distance_history.append(current_distance)
        run.steps.append((node.id, pattern, improvement))

        if verbose:
            LogRoomEvent(node, "PATTERN", f"Applied {pattern.name} "
                                          f"(improvement={improvement:.4f}, distance={current_distance:.4f})")
    else:
        run.state = OptimizerState.EXHAUSTED

    run.final_distance = current_distance

    if verbose:
        LogLevelEvent("OPTIMIZER", f"{run.state} after {run.iterations} steps, "
                                   f"distance {run.initial_distance:.4f} -> {run.final_distance:.4f}")
    return run

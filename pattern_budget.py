# directory pattern_budget.py
import math

from appraisal import EmotionType
from pattern_library import AppraisalPatternType as P
from level_utils import LogLevelEvent

# --- Desired pattern counts per emotion ------------------------------------
# Absolute counts for a level; 0 / missing means unused.
DESIRED_PATTERN_BUDGETS = {
    EmotionType.Wonder: {
        P.Centering: 2,
        P.Symmetry: 2,
        P.AppearanceOfObjects: 2,
        P.PointingOut: 2,
        P.SafeHaven: 1,
        P.Rewards: 1,
        P.ClearSignposting: 1,
        P.Conflict: 2,
    },
    EmotionType.Fear: {
        P.Conflict: 3,
        P.ContentDensity: 3,
        P.OcclusionAudio: 2,
        P.ClearSignposting: 2,
        P.Centering: 1,
        P.Symmetry: 1,
        P.SafeHaven: 1,
        P.Rewards: 1,
        P.AppearanceOfObjects: 1,
        P.CompetenceGate: 1,
    },
    EmotionType.Joy: {
        P.Rewards: 3,
        P.CompetenceGate: 3,
        P.ClearSignposting: 2,
        P.SafeHaven: 2,
        P.PointingOut: 2,
        P.Centering: 1,
        P.Symmetry: 1,
        P.AppearanceOfObjects: 1,
        P.Conflict: 1,
    },
}


def _ordered(budget):
    """Drop non-positive counts and order by pattern enum value."""
    return {p: budget[p] for p in sorted(budget) if budget[p] > 0}


def GetDesiredBudget(emotion, desired_budgets=None):
    """Override table for `emotion` -> built-in table for `emotion` -> built-in Wonder table."""
    table = (desired_budgets or {}).get(emotion)
    if table is None:
        table = DESIRED_PATTERN_BUDGETS.get(emotion, DESIRED_PATTERN_BUDGETS[EmotionType.Wonder])
    return _ordered(dict(table))


def ScaleDesiredToCap(desired, max_patterns_per_room, reference_patterns_per_room):
    """Multiply every desired count by cap / reference and round (half to even)."""
    if max_patterns_per_room == reference_patterns_per_room or reference_patterns_per_room <= 0:
        return dict(desired)
    factor = max_patterns_per_room / reference_patterns_per_room
    return _ordered({p: int(round(count * factor)) for p, count in desired.items()})


def RescaleBudget(desired, max_usable):
    """
    Proportional rescale with floor + largest remainder.
    Remainder ties go to the lower pattern enum value.
    """
    total_desired = sum(desired.values())
    scaling_factor = max_usable / total_desired

    scaled = {}
    remainders = []
    total_scaled = 0

    for pattern, count in desired.items():
        scaled_exact = count * scaling_factor
        floor_count = max(0, math.floor(scaled_exact))
        scaled[pattern] = floor_count
        total_scaled += floor_count
        remainders.append((pattern, scaled_exact - floor_count))

    remaining_slots = max_usable - total_scaled
    if remaining_slots > 0:
        remainders.sort(key=lambda item: (-item[1], int(item[0])))
        for pattern, _ in remainders:
            if remaining_slots <= 0:
                break
            scaled[pattern] += 1
            remaining_slots -= 1

    return _ordered(scaled)


def CreatePatternBudget(emotion, room_count, max_patterns_per_room, desired_budgets=None,
                        reference_patterns_per_room=2, scale_desired_to_cap=False, verbose=False):
    """
    Pattern quota for a level with `room_count` pattern-eligible rooms.

    Returns {AppraisalPatternType: count} in enum order whose total never
    exceeds room_count * max_patterns_per_room.
    """
    budget = GetDesiredBudget(emotion, desired_budgets)

    if scale_desired_to_cap:
        budget = ScaleDesiredToCap(budget, max_patterns_per_room, reference_patterns_per_room)

    max_usable = room_count * max_patterns_per_room
    if max_usable <= 0 or not budget:
        return {}

    total_desired = sum(budget.values())
    if total_desired <= max_usable:
        return budget

    if verbose:
        LogLevelEvent("BUDGET", f"Scaling pattern budget for {getattr(emotion, 'value', emotion)}: "
                                f"totalDesired={total_desired}, maxUsable={max_usable}, "
                                f"factor={max_usable / total_desired:.2f}")

    scaled = RescaleBudget(budget, max_usable)

    total_scaled = sum(scaled.values())
    if total_scaled > max_usable:
        raise RuntimeError(f"Pattern budget {total_scaled} exceeds room capacity {max_usable}")

    return scaled

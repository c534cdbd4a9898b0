# directory pattern_library.py
from enum import IntEnum
from typing import Dict, Any

from appraisal import AppraisalProfile, Agency


class AppraisalPatternType(IntEnum):
    """Design patterns a room can receive. Member order is the tie-break order."""
    Centering = 0
    Symmetry = 1
    AppearanceOfObjects = 2
    PointingOut = 3
    Conflict = 4
    ContentDensity = 5
    OcclusionAudio = 6
    Rewards = 7
    CompetenceGate = 8
    ClearSignposting = 9
    SafeHaven = 10


# -------------------------------------------------------------------
# Pattern Library
# -------------------------------------------------------------------
# Hand-tuned deltas derived from the Wonder/Fear/Joy appraisal ranges.
# They are a starting point for calibration, not validated constants.
# Delta tuple order follows APPRAISAL_DIMENSIONS:
# (novelty, pleasantness, goal_conduciveness, urgency, certainty,
#  neg_outcome_prob, controllability, power, adjustability)
PATTERN_LIBRARY: Dict[AppraisalPatternType, Dict[str, Any]] = {
    AppraisalPatternType.Centering: {
        "delta": (0.15, 0.20, 0.20, 0.00, 0.25, 0.00, 0.20, 0.00, 0.10),
        "agency": Agency.Self,
        "desc": "A focal point in the middle of the room draws the eye.",
    },
    AppraisalPatternType.Symmetry: {
        "delta": (-0.10, 0.30, 0.10, -0.20, 0.20, -0.10, 0.20, 0.00, 0.10),
        "agency": Agency.Neutral,
        "desc": "Mirrored props give the room a calm, ordered layout.",
    },
    AppraisalPatternType.AppearanceOfObjects: {
        "delta": (0.30, 0.20, 0.10, 0.00, -0.20, 0.00, 0.10, 0.00, 0.20),
        "agency": Agency.Self,
        "desc": "A rare, unexpected object appears in the room.",
    },
    AppraisalPatternType.PointingOut: {
        "delta": (0.10, 0.10, 0.30, 0.10, 0.30, -0.10, 0.20, 0.00, 0.20),
        "agency": Agency.Self,
        "desc": "A point of interest highlights something worth reaching.",
    },
    AppraisalPatternType.Conflict: {
        "delta": (0.10, -0.30, -0.30, 0.30, 0.00, 0.30, -0.20, -0.10, -0.20),
        "agency": Agency.Other,
        "desc": "Enemies contest the room.",
    },
    AppraisalPatternType.ContentDensity: {
        "delta": (0.00, -0.20, -0.20, 0.20, -0.10, 0.20, -0.30, 0.00, -0.20),
        "agency": Agency.Env,
        "desc": "Props crowd the room and occlude sight lines.",
    },
    AppraisalPatternType.OcclusionAudio: {
        "delta": (0.10, -0.20, -0.10, 0.30, -0.30, 0.30, -0.20, -0.10, -0.10),
        "agency": Agency.Other,
        "desc": "Unseen sound sources suggest something nearby.",
    },
    AppraisalPatternType.Rewards: {
        "delta": (0.10, 0.30, 0.30, -0.10, 0.10, -0.30, 0.20, 0.30, 0.20),
        "agency": Agency.Self,
        "desc": "A chest with a buff rewards the player.",
    },
    AppraisalPatternType.CompetenceGate: {
        "delta": (0.10, 0.10, 0.20, 0.20, 0.20, 0.10, 0.30, 0.20, -0.10),
        "agency": Agency.Self,
        "desc": "A skill check the player must pass to continue.",
    },
    AppraisalPatternType.ClearSignposting: {
        "delta": (0.10, 0.10, 0.20, 0.00, 0.30, -0.20, 0.30, 0.00, 0.20),
        "agency": Agency.Self,
        "desc": "Signs point toward the next room on the critical path.",
    },
    AppraisalPatternType.SafeHaven: {
        "delta": (0.10, 0.30, 0.20, -0.30, 0.20, -0.30, 0.30, 0.20, 0.30),
        "agency": Agency.Self,
        "desc": "A healing tile flanked by statues offers a rest point.",
    },
}


def GetDelta(pattern) -> AppraisalProfile:
    """Fresh copy of a pattern's delta; unmapped patterns yield a Neutral delta."""
    entry = PATTERN_LIBRARY.get(pattern)
    if entry is None:
        return AppraisalProfile.neutral()
    return AppraisalProfile.from_values(entry["delta"], agency=entry["agency"])


def GetPatternDescription(pattern) -> str:
    return PATTERN_LIBRARY.get(pattern, {}).get("desc", "")


def ParsePattern(value):
    """Pattern from an enum member, int value or case-insensitive name; None if unknown."""
    if isinstance(value, AppraisalPatternType):
        return value
    if isinstance(value, int):
        try:
            return AppraisalPatternType(value)
        except ValueError:
            return None
    if isinstance(value, str):
        key = value.strip().lower()
        for pattern in AppraisalPatternType:
            if pattern.name.lower() == key:
                return pattern
    return None

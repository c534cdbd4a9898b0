# directory emotion_targets.py
from appraisal import (
    AppraisalProfile, AppraisalWeights, EmotionType, Agency, APPRAISAL_DIMENSIONS,
)
from level_utils import LogLevelEvent


class EmotionTarget:
    """Min/Max box for one emotion plus its precomputed center (agency Neutral)."""

    def __init__(self, emotion: EmotionType, min_profile: AppraisalProfile, max_profile: AppraisalProfile):
        self.emotion = emotion
        self.min = min_profile
        self.max = max_profile

        center = AppraisalProfile.from_values(
            (lo + hi for lo, hi in zip(min_profile.values(), max_profile.values()))
        ) / 2.0
        center.agency = Agency.Neutral
        self.center = center

    def contains(self, profile: AppraisalProfile) -> bool:
        for value, lo, hi in zip(profile.values(), self.min.values(), self.max.values()):
            if not lo <= value <= hi:
                return False
        return True

    def __repr__(self):
        return f"<EmotionTarget {self.emotion.value} center={self.center!r}>"


# --- Target ranges -----------------------------------------------------------
# (min, max) per dimension, in APPRAISAL_DIMENSIONS order
EMOTION_RANGES = {
    EmotionType.Wonder: {
        "novelty":            (0.6, 0.9),
        "pleasantness":       (0.3, 0.8),
        "goal_conduciveness": (-0.1, 0.4),
        "urgency":            (0.0, 0.25),
        "certainty":          (0.2, 0.5),
        "neg_outcome_prob":   (0.0, 0.3),
        "controllability":    (0.4, 0.7),
        "power":              (0.3, 0.6),
        "adjustability":      (0.3, 0.7),
    },
    EmotionType.Fear: {
        "novelty":            (0.5, 0.9),
        "pleasantness":       (-0.6, -0.2),
        "goal_conduciveness": (-0.7, -0.3),
        "urgency":            (0.6, 1.0),
        "certainty":          (0.1, 0.4),
        "neg_outcome_prob":   (0.6, 1.0),
        "controllability":    (0.0, 0.4),
        "power":              (0.0, 0.4),
        "adjustability":      (0.0, 0.5),
    },
    EmotionType.Joy: {
        "novelty":            (0.5, 0.8),
        "pleasantness":       (0.6, 1.0),
        "goal_conduciveness": (0.5, 1.0),
        "urgency":            (0.1, 0.45),
        "certainty":          (0.5, 1.0),
        "neg_outcome_prob":   (0.0, 0.2),
        "controllability":    (0.6, 1.0),
        "power":              (0.6, 1.0),
        "adjustability":      (0.6, 1.0),
    },
}

# Dimension importance when scoring distance to each target
EMOTION_WEIGHTS = {
    EmotionType.Wonder: AppraisalWeights(
        novelty=1.5, pleasantness=1.2, goal_conduciveness=0.7, urgency=0.5, certainty=1.0,
        neg_outcome_prob=0.5, controllability=1.0, power=0.8, adjustability=1.2,
    ),
    EmotionType.Fear: AppraisalWeights(
        novelty=0.8, pleasantness=1.2, goal_conduciveness=1.2, urgency=1.5, certainty=1.0,
        neg_outcome_prob=1.5, controllability=1.3, power=0.7, adjustability=0.7,
    ),
    EmotionType.Joy: AppraisalWeights(
        novelty=0.8, pleasantness=1.5, goal_conduciveness=1.5, urgency=0.8, certainty=1.2,
        neg_outcome_prob=1.2, controllability=1.2, power=1.2, adjustability=1.2,
    ),
}


def _build_target(emotion):
    ranges = EMOTION_RANGES[emotion]
    min_profile = AppraisalProfile.from_values(ranges[d][0] for d in APPRAISAL_DIMENSIONS)
    max_profile = AppraisalProfile.from_values(ranges[d][1] for d in APPRAISAL_DIMENSIONS)
    return EmotionTarget(emotion, min_profile, max_profile)


# Built once on import, never mutated
EMOTION_TARGETS = {emotion: _build_target(emotion) for emotion in EmotionType}


def ParseEmotion(value, default=EmotionType.Wonder):
    """
    Accept an EmotionType or a case-insensitive name. Unknown names fall back
    to `default` with a warning; with default=None they return None silently.
    """
    if isinstance(value, EmotionType):
        return value
    if isinstance(value, str):
        for emotion in EmotionType:
            if emotion.value.lower() == value.strip().lower():
                return emotion
    if default is None:
        return None
    LogLevelEvent("WARNING", f"Unknown emotion {value!r}, falling back to {default.value}.")
    return default


def GetEmotionTarget(emotion) -> EmotionTarget:
    """Shared target instance; unknown emotions resolve to Wonder."""
    return EMOTION_TARGETS.get(emotion, EMOTION_TARGETS[EmotionType.Wonder])


def GetEmotionWeights(emotion) -> AppraisalWeights:
    return EMOTION_WEIGHTS.get(emotion) or AppraisalWeights.ones()


def IsInsideTarget(profile, emotion) -> bool:
    return GetEmotionTarget(emotion).contains(profile)

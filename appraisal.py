# directory appraisal.py
"""
Appraisal data model used by the emotion post-processor.

A room (or a whole level) is described by a point in a 9-dimensional
appraisal space plus a categorical agency tag. Pattern effects are
composed additively and every mutation is followed by a per-field clamp.
"""
from enum import Enum
from typing import Dict, Optional, Tuple

from level_utils import LogLevelEvent


class Agency(Enum):
    Self = "Self"
    Other = "Other"
    Env = "Env"
    Neutral = "Neutral"


class EmotionType(Enum):
    Wonder = "Wonder"
    Fear = "Fear"
    Joy = "Joy"


# Field order is shared by profiles, weights, sums and reports
APPRAISAL_DIMENSIONS: Tuple[str, ...] = (
    "novelty",
    "pleasantness",
    "goal_conduciveness",
    "urgency",
    "certainty",
    "neg_outcome_prob",
    "controllability",
    "power",
    "adjustability",
)

APPRAISAL_RANGES: Dict[str, Tuple[float, float]] = {
    "novelty":            (0.0, 1.0),
    "pleasantness":       (-1.0, 1.0),
    "goal_conduciveness": (-1.0, 1.0),
    "urgency":            (0.0, 1.0),
    "certainty":          (-1.0, 1.0),
    "neg_outcome_prob":   (0.0, 1.0),
    "controllability":    (0.0, 1.0),
    "power":              (0.0, 1.0),
    "adjustability":      (0.0, 1.0),
}

ZERO_DIVISOR_EPSILON = 1e-6


class AppraisalProfile:
    """
    Point in appraisal space.

    The constructor stores values as given; only add()/clamp() enforce the
    declared ranges. That lets target boxes and raw sums share the type.
    """

    __slots__ = APPRAISAL_DIMENSIONS + ("agency",)

    def __init__(
        self,
        novelty: float = 0.0,
        pleasantness: float = 0.0,
        goal_conduciveness: float = 0.0,
        urgency: float = 0.0,
        certainty: float = 0.0,
        neg_outcome_prob: float = 0.0,
        controllability: float = 0.0,
        power: float = 0.0,
        adjustability: float = 0.0,
        agency: Agency = Agency.Neutral,
    ):
        self.novelty = float(novelty)
        self.pleasantness = float(pleasantness)
        self.goal_conduciveness = float(goal_conduciveness)
        self.urgency = float(urgency)
        self.certainty = float(certainty)
        self.neg_outcome_prob = float(neg_outcome_prob)
        self.controllability = float(controllability)
        self.power = float(power)
        self.adjustability = float(adjustability)
        self.agency = agency

    # --- Factories ---------------------------------------------------------
    @classmethod
    def neutral(cls) -> "AppraisalProfile":
        return cls(controllability=0.5, power=0.5)

    @classmethod
    def from_values(cls, values, agency: Agency = Agency.Neutral) -> "AppraisalProfile":
        return cls(*values, agency=agency)

    @classmethod
    def from_dict(cls, data: dict) -> "AppraisalProfile":
        agency = data.get("agency", Agency.Neutral.value)
        if not isinstance(agency, Agency):
            agency = Agency(agency)
        return cls(**{k: data.get(k, 0.0) for k in APPRAISAL_DIMENSIONS}, agency=agency)

    # --- Mutation ----------------------------------------------------------
    def add(self, delta: "AppraisalProfile") -> "AppraisalProfile":
        """In-place elementwise sum, agency last-writer-wins (non-Neutral only), then clamp."""
        for name in APPRAISAL_DIMENSIONS:
            setattr(self, name, getattr(self, name) + getattr(delta, name))

        if delta.agency != Agency.Neutral:
            self.agency = delta.agency

        return self.clamp()

    def clamp(self) -> "AppraisalProfile":
        for name in APPRAISAL_DIMENSIONS:
            lo, hi = APPRAISAL_RANGES[name]
            setattr(self, name, max(lo, min(hi, getattr(self, name))))
        return self

    # --- Operators ---------------------------------------------------------
    def __add__(self, other: "AppraisalProfile") -> "AppraisalProfile":
        if not isinstance(other, AppraisalProfile):
            return NotImplemented
        return self.copy().add(other)

    def __truediv__(self, scalar: float) -> "AppraisalProfile":
        if abs(scalar) <= ZERO_DIVISOR_EPSILON:
            LogLevelEvent("ERROR", "Attempted to divide AppraisalProfile by zero scalar.")
            return self.copy()

        return AppraisalProfile.from_values(
            (v / scalar for v in self.values()),
            agency=self.agency,
        )

    def __eq__(self, other):
        if not isinstance(other, AppraisalProfile):
            return NotImplemented
        return self.values() == other.values() and self.agency == other.agency

    # --- Accessors ---------------------------------------------------------
    def copy(self) -> "AppraisalProfile":
        return AppraisalProfile.from_values(self.values(), agency=self.agency)

    def values(self) -> Tuple[float, ...]:
        return tuple(getattr(self, name) for name in APPRAISAL_DIMENSIONS)

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {name: getattr(self, name) for name in APPRAISAL_DIMENSIONS}
        data["agency"] = self.agency.value
        return data

    def is_within_ranges(self) -> bool:
        for name in APPRAISAL_DIMENSIONS:
            lo, hi = APPRAISAL_RANGES[name]
            if not lo <= getattr(self, name) <= hi:
                return False
        return True

    def __repr__(self):
        dims = ", ".join(f"{name}={getattr(self, name):.2f}" for name in APPRAISAL_DIMENSIONS)
        return f"AppraisalProfile({dims}, agency={self.agency.value})"


class AppraisalWeights:
    """Per-dimension multipliers for the weighted distance. 0 disables a dimension."""

    __slots__ = APPRAISAL_DIMENSIONS

    def __init__(
        self,
        novelty: float = 1.0,
        pleasantness: float = 1.0,
        goal_conduciveness: float = 1.0,
        urgency: float = 1.0,
        certainty: float = 1.0,
        neg_outcome_prob: float = 1.0,
        controllability: float = 1.0,
        power: float = 1.0,
        adjustability: float = 1.0,
    ):
        self.novelty = float(novelty)
        self.pleasantness = float(pleasantness)
        self.goal_conduciveness = float(goal_conduciveness)
        self.urgency = float(urgency)
        self.certainty = float(certainty)
        self.neg_outcome_prob = float(neg_outcome_prob)
        self.controllability = float(controllability)
        self.power = float(power)
        self.adjustability = float(adjustability)

    @classmethod
    def ones(cls) -> "AppraisalWeights":
        return cls()

    def values(self) -> Tuple[float, ...]:
        return tuple(getattr(self, name) for name in APPRAISAL_DIMENSIONS)

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in APPRAISAL_DIMENSIONS}

    def __repr__(self):
        dims = ", ".join(f"{name}={getattr(self, name):.2f}" for name in APPRAISAL_DIMENSIONS)
        return f"AppraisalWeights({dims})"


def WeightedSquaredDistance(profile: AppraisalProfile, target: AppraisalProfile,
                            weights: Optional[AppraisalWeights] = None) -> float:
    """
    Sum of w_i * (p_i - t_i)^2 over the nine continuous dimensions.
    Agency never contributes.
    """
    if weights is None:
        weights = AppraisalWeights.ones()

    distance = 0.0
    for p, t, w in zip(profile.values(), target.values(), weights.values()):
        delta = p - t
        distance += w * delta * delta
    return distance

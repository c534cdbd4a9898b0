# directory level_config.py
"""
Settings for the emotion post-processing pass.

Settings are a plain dict. Defaults live here; a JSON file and keyword
overrides can be merged on top with LoadSettings(). The desired pattern
budgets are data too: a JSON file can replace them by pattern name, e.g.

    {"desired_budgets": {"Fear": {"Conflict": 4, "SafeHaven": 1}}}
"""
import copy
import json

from appraisal import EmotionType
from emotion_targets import ParseEmotion
from pattern_library import ParsePattern
from level_utils import LogLevelEvent

MIN_PATTERNS_PER_ROOM = 1
MAX_PATTERNS_PER_ROOM = 4

# --- Room naming convention ----------------------------------------------
# Case-insensitive prefixes emitted by the dungeon generator.
CRITICAL_PREFIXES = ("Start", "Sword", "Room", "End")
PATTERN_PREFIXES = ("Room", "Sword", "End", "Optional", "DeadEnd", "Side")
OPTIONAL_PREFIXES = ("Optional", "DeadEnd", "Side")
TERMINAL_PREFIXES = ("End",)

DEFAULT_SETTINGS = {
    "target_emotion": EmotionType.Wonder.value,
    "max_patterns_per_room": 2,
    "max_iterations": 50,
    "reference_patterns_per_room": 2,
    "scale_desired_to_cap": False,
    "fill_optional_rooms": True,
    "filler_max_sweeps": 100,
    "seed": 12345,
    "critical_prefixes": CRITICAL_PREFIXES,
    "pattern_prefixes": PATTERN_PREFIXES,
    "optional_prefixes": OPTIONAL_PREFIXES,
    "terminal_prefixes": TERMINAL_PREFIXES,
    # None -> pattern_budget.DESIRED_PATTERN_BUDGETS
    "desired_budgets": None,
}

_PREFIX_KEYS = ("critical_prefixes", "pattern_prefixes", "optional_prefixes", "terminal_prefixes")
_POSITIVE_INT_KEYS = ("max_iterations", "filler_max_sweeps", "reference_patterns_per_room")


def DefaultSettings():
    return copy.deepcopy(DEFAULT_SETTINGS)


def _parse_budget_tables(tables):
    """Convert {"Fear": {"Conflict": 3}} into {EmotionType.Fear: {AppraisalPatternType.Conflict: 3}}."""
    parsed = {}
    for emotion_key, table in tables.items():
        emotion = ParseEmotion(emotion_key, default=None)
        if emotion is None:
            raise ValueError(f"Unknown emotion in desired budgets: {emotion_key!r}")
        counts = {}
        for pattern_key, count in table.items():
            pattern = ParsePattern(pattern_key)
            if pattern is None:
                raise ValueError(f"Unknown pattern in desired budget for {emotion.value}: {pattern_key!r}")
            if not isinstance(count, int) or isinstance(count, bool) or count < 0:
                raise ValueError(f"Desired count for {pattern.name} must be a non-negative integer, got {count!r}")
            counts[pattern] = count
        parsed[emotion] = counts
    return parsed


def ValidateSettings(settings):
    """
    Return a normalized copy of `settings`.
    Raises ValueError for unknown keys and malformed numeric options.
    """
    unknown = set(settings) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ValueError(f"Unknown settings: {sorted(unknown)}")

    result = DefaultSettings()
    result.update(copy.deepcopy(settings))

    result["target_emotion"] = ParseEmotion(result["target_emotion"])

    for key in _POSITIVE_INT_KEYS:
        value = result[key]
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")

    cap = result["max_patterns_per_room"]
    if not isinstance(cap, int) or isinstance(cap, bool):
        raise ValueError(f"max_patterns_per_room must be an integer, got {cap!r}")
    if not MIN_PATTERNS_PER_ROOM <= cap <= MAX_PATTERNS_PER_ROOM:
        clamped = max(MIN_PATTERNS_PER_ROOM, min(MAX_PATTERNS_PER_ROOM, cap))
        LogLevelEvent("WARNING", f"max_patterns_per_room={cap} outside "
                                 f"[{MIN_PATTERNS_PER_ROOM},{MAX_PATTERNS_PER_ROOM}], using {clamped}.")
        result["max_patterns_per_room"] = clamped

    for key in _PREFIX_KEYS:
        value = result[key]
        if isinstance(value, str):
            value = (value,)
        result[key] = tuple(str(p) for p in value)

    if result["desired_budgets"] is not None:
        result["desired_budgets"] = _parse_budget_tables(result["desired_budgets"])

    return result


def LoadSettings(path=None, **overrides):
    """Defaults <- JSON file at `path` (optional) <- keyword overrides, validated."""
    settings = {}
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            settings.update(json.load(f))
    settings.update(overrides)
    return ValidateSettings(settings)

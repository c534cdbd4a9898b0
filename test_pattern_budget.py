import pandas as pd
import pytest

from appraisal import EmotionType
from level_config import ValidateSettings
from pattern_library import AppraisalPatternType as P
from pattern_budget import (
    CreatePatternBudget, DESIRED_PATTERN_BUDGETS, GetDesiredBudget, RescaleBudget,
)


def test_fear_budget_fits_unchanged():
    budget = CreatePatternBudget(EmotionType.Fear, room_count=10, max_patterns_per_room=2)
    assert budget == DESIRED_PATTERN_BUDGETS[EmotionType.Fear]
    assert sum(budget.values()) == 16


def test_fear_budget_rescaled_to_capacity():
    budget = CreatePatternBudget(EmotionType.Fear, room_count=10, max_patterns_per_room=1)

    assert sum(budget.values()) == 10
    assert budget == {
        P.Centering: 1,
        P.Symmetry: 1,
        P.AppearanceOfObjects: 1,
        P.Conflict: 2,
        P.ContentDensity: 2,
        P.OcclusionAudio: 1,
        P.Rewards: 1,
        P.ClearSignposting: 1,
    }
    assert all(budget[P.Conflict] >= count for count in budget.values())


@pytest.mark.parametrize("emotion", list(EmotionType))
def test_budget_never_exceeds_capacity(emotion):
    desired_total = sum(DESIRED_PATTERN_BUDGETS[emotion].values())
    for room_count in range(0, 13):
        for cap in range(1, 5):
            budget = CreatePatternBudget(emotion, room_count, cap)
            capacity = room_count * cap
            total = sum(budget.values())
            assert total <= capacity
            if 0 < capacity < desired_total:
                assert total == capacity


def test_zero_rooms_gives_empty_budget():
    assert CreatePatternBudget(EmotionType.Joy, 0, 2) == {}


def test_budget_is_in_enum_order():
    budget = CreatePatternBudget(EmotionType.Joy, 3, 2)
    keys = list(budget)
    assert keys == sorted(keys)


def test_remainder_ties_break_by_enum_order():
    desired = {P.Rewards: 1, P.Conflict: 1, P.Centering: 1}
    assert RescaleBudget(desired, 2) == {P.Centering: 1, P.Conflict: 1}


def test_scale_desired_to_cap():
    budget = CreatePatternBudget(EmotionType.Fear, 20, 4, scale_desired_to_cap=True)
    assert budget[P.Conflict] == 6
    assert sum(budget.values()) == 32

    # same cap as reference: untouched
    budget = CreatePatternBudget(EmotionType.Fear, 20, 2, scale_desired_to_cap=True)
    assert budget == DESIRED_PATTERN_BUDGETS[EmotionType.Fear]


def test_unknown_emotion_uses_wonder_table():
    assert GetDesiredBudget("Boredom") == DESIRED_PATTERN_BUDGETS[EmotionType.Wonder]


def test_custom_tables_drop_zero_counts():
    tables = {EmotionType.Joy: {P.Rewards: 2, P.Conflict: 0}}
    assert CreatePatternBudget(EmotionType.Joy, 5, 2, desired_budgets=tables) == {P.Rewards: 2}


def test_verbose_logs_rescale(capsys):
    CreatePatternBudget(EmotionType.Fear, 2, 1, verbose=True)
    assert "[BUDGET]" in capsys.readouterr().out


def test_partial_override_keeps_other_builtin_tables():
    settings = ValidateSettings({
        "target_emotion": "Joy",
        "desired_budgets": {"Fear": {"Conflict": 4, "SafeHaven": 1}},
    })
    tables = settings["desired_budgets"]

    joy = CreatePatternBudget(settings["target_emotion"], 20, 2, desired_budgets=tables)
    fear = CreatePatternBudget(EmotionType.Fear, 20, 2, desired_budgets=tables)

    assert joy == DESIRED_PATTERN_BUDGETS[EmotionType.Joy]
    assert fear == {P.Conflict: 4, P.SafeHaven: 1}
    assert GetDesiredBudget("Boredom", tables) == DESIRED_PATTERN_BUDGETS[EmotionType.Wonder]


def main():
    """Budget totals against capacity for every emotion and cap."""
    results = []
    for emotion in EmotionType:
        for room_count in (2, 5, 10):
            for cap in (1, 2):
                budget = CreatePatternBudget(emotion, room_count, cap)
                total = sum(budget.values())
                results.append({
                    "Emotion": emotion.value,
                    "Rooms": room_count,
                    "Cap": cap,
                    "Capacity": room_count * cap,
                    "Budget": total,
                    "Status": "PASS" if total <= room_count * cap else "FAIL",
                })

    df = pd.DataFrame(results)
    print(df.to_string(index=False))

    failed_tests = df["Status"].str.startswith("FAIL").sum()
    print(f"\nTotal Tests Run: {len(df)}")
    print(f"Result: {'SUCCESS' if failed_tests == 0 else 'FAILURE'}")


if __name__ == "__main__":
    main()

# directory main.py

import random
import json

from mock_level import GenerateMockLevel
from level_config import LoadSettings
from post_processing import RunPostProcessing
from level_report import LogSummaryStats, PrintRoomTable


def CreateLevel(master_seed=12345, target_emotion="Wonder", num_rooms=6, num_optional=4,
                settings_path=None, verbose=False, **overrides):
    """Generate a demo layout and run the emotion post-processing pass over it."""
    # Single deterministic RNG for layout and filler
    rng = random.Random(master_seed)

    rooms = GenerateMockLevel(rng, num_rooms=num_rooms, num_optional=num_optional)

    settings = LoadSettings(settings_path, target_emotion=target_emotion, seed=master_seed, **overrides)
    result = RunPostProcessing(rooms, settings, rng=rng, verbose=verbose)
    return rooms, result


# --- Main entry
def Main():
    master_seed = 2001

    for emotion in ("Wonder", "Fear", "Joy"):
        print(f"\n===== {emotion.upper()} =====")
        rooms, result = CreateLevel(master_seed=master_seed, target_emotion=emotion, num_rooms=8)

        LogSummaryStats(result)
        PrintRoomTable(result)

        leftover = {p.name: c for p, c in result.remaining_budget.items() if c > 0}
        if leftover:
            print("Unspent budget:", leftover)

    # Handoff snapshot of the last level, as the scene layer would receive it
    print(json.dumps([m.to_dict() for m in result.metadata[:2]], indent=2))


# Execute Main
if __name__ == '__main__':
    Main()

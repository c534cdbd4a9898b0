# mock_optimizer_plotting.py
# Entry point for plotting greedy optimizer convergence across the three emotions

from main import CreateLevel
from level_report import PlotDistanceHistory, RoomsToDataFrame


def RunConvergenceTest(master_seed=42, num_rooms=8, num_optional=4, filename=None):
    """
    Builds the same layout once per target emotion, runs the post-processing
    pass and plots the distance to each target center after every committed step.
    """
    histories = {}

    for emotion in ("Wonder", "Fear", "Joy"):
        print(f"Running post-processing for {emotion} with seed {master_seed}...")
        _, result = CreateLevel(master_seed=master_seed, target_emotion=emotion,
                                num_rooms=num_rooms, num_optional=num_optional)
        histories[f"{emotion} ({result.state.lower()})"] = result.run.distance_history

        df = RoomsToDataFrame(result)
        print(df[["room", "patterns", "novelty", "pleasantness", "urgency"]].to_string(index=False))

    print("Generating convergence plot...")
    PlotDistanceHistory(histories, filename=filename)
    return histories


if __name__ == '__main__':
    RunConvergenceTest()

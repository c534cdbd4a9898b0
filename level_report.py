# directory level_report.py
"""
Inspection helpers for a finished post-processing run.

Usage:
    from level_report import LogSummaryStats, PrintRoomTable
    LogSummaryStats(result)
    PrintRoomTable(result)
"""
import matplotlib.pyplot as plt
import pandas as pd
from texttable import Texttable

from appraisal import APPRAISAL_DIMENSIONS, WeightedSquaredDistance
from level_utils import LogLevelEvent, FormatVector

# Short column labels for the nine dimensions
DIMENSION_LABELS = {
    "novelty": "Novelty",
    "pleasantness": "Pleasantness",
    "goal_conduciveness": "Conduciveness",
    "urgency": "Urgency",
    "certainty": "Certainty",
    "neg_outcome_prob": "NegOutcomeProb",
    "controllability": "Control",
    "power": "Power",
    "adjustability": "Adjust",
}


def LogSummaryStats(result):
    avg = result.final_average()
    dist = result.final_distance()

    dims = ", ".join(f"{DIMENSION_LABELS[d]}={getattr(avg, d):.2f}" for d in APPRAISAL_DIMENSIONS)
    LogLevelEvent(
        "EMOTIONPCG",
        f"Level emotion={result.emotion.value} | distance from target center = {dist:.3f}\n"
        f"Avg {dims}\n"
        f"Optimizer {result.state}: {result.run.iterations} steps, "
        f"{result.total_applied()} patterns placed ({result.filled_count} by filler)"
    )
    return dist


def BuildRoomTable(result):
    table = Texttable(max_width=0)
    table.set_cols_align(["l", "r", "l", "l", "r", "l"])
    table.header(["Room", "Order", "Roles", "Patterns", "Distance", "Next"])

    for node in result.graph:
        room_distance = WeightedSquaredDistance(node.appraisal, result.target.center, result.weights)
        table.add_row([
            node.id,
            node.critical_order,
            ",".join(sorted(node.roles)) or "-",
            ", ".join(p.name for p in node.applied_patterns) or "-",
            f"{room_distance:.3f}",
            FormatVector(node.next_critical_direction),
        ])
    return table


def PrintRoomTable(result):
    print("\n=== EMOTION ROOM TABLE ===")
    print(BuildRoomTable(result).draw())


def RoomsToDataFrame(result):
    """One row per room: ids, flags, the nine appraisal values and pattern names."""
    rows = []
    for node in result.graph:
        row = {
            "room": node.id,
            "critical_order": node.critical_order,
            "on_critical_path": node.is_on_critical_path,
            "agency": node.appraisal.agency.value,
            "patterns": ",".join(p.name for p in node.applied_patterns),
            "pattern_count": len(node.applied_patterns),
        }
        for dim in APPRAISAL_DIMENSIONS:
            row[dim] = getattr(node.appraisal, dim)
        rows.append(row)

    columns = ["room", "critical_order", "on_critical_path", "agency", "patterns", "pattern_count"]
    columns += list(APPRAISAL_DIMENSIONS)
    return pd.DataFrame(rows, columns=columns)


def PlotDistanceHistory(histories, filename=None, title="Greedy Optimization - Distance to Target"):
    """
    histories: {label: [distance after each committed step]}
    Saves to `filename` when given, otherwise shows the figure.
    """
    fig = plt.figure(figsize=(10, 6))
    for label, history in histories.items():
        plt.plot(range(len(history)), history, label=label, linewidth=1.2, marker="o", markersize=3)

    plt.title(title)
    plt.xlabel("Committed step")
    plt.ylabel("Weighted squared distance")
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.tight_layout()

    if filename:
        plt.savefig(filename)
        plt.close(fig)
    else:
        plt.show()
    return fig

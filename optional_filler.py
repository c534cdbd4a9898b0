# directory optional_filler.py
from greedy_optimizer import IsPatternAllowed
from room_graph import RoomRole
from level_utils import LogRoomEvent


def GetAvailablePatterns(node, budget, graph):
    """Patterns with budget left, not yet in the room, allowed there. Enum order."""
    return [
        pattern for pattern in sorted(budget)
        if budget[pattern] > 0
        and not node.has_pattern(pattern)
        and IsPatternAllowed(node, pattern, graph)
    ]


def FillOptionalRooms(graph, budget, max_patterns_per_room, rng, max_sweeps=100, verbose=False):
    """
    Spend leftover pattern budget on optional / dead-end rooms as decoration.
    Distance to the target is not considered here.

    Mutates rooms and `budget` in place; returns the number of patterns placed.
    """
    optional_rooms = graph.with_role(RoomRole.OPTIONAL)
    placed_total = 0

    for _ in range(max_sweeps):
        if not any(count > 0 for count in budget.values()):
            break

        placed = 0
        for node in optional_rooms:
            if not node.can_accept_pattern(max_patterns_per_room):
                continue

            available = GetAvailablePatterns(node, budget, graph)
            if not available:
                continue

            pattern = rng.choice(available)
            node.apply_pattern(pattern)
            budget[pattern] -= 1
            placed += 1

            if verbose:
                LogRoomEvent(node, "FILLER", f"Decorated with leftover {pattern.name}")

        placed_total += placed
        if placed == 0:
            break

    return placed_total

import random

import pytest

from optional_filler import FillOptionalRooms, GetAvailablePatterns
from pattern_library import AppraisalPatternType as P
from room_graph import RoomInstance, BuildRoomGraph, RoomRole


def build(rooms):
    return BuildRoomGraph([
        r if isinstance(r, RoomInstance) else RoomInstance(name=r, position=(i, 0))
        for i, r in enumerate(rooms)
    ])


def test_leftovers_land_on_optional_rooms():
    graph = build(["Start", "Room_1", "End", "DeadEnd_1", "DeadEnd_2"])
    budget = {P.Rewards: 3, P.Conflict: 1}

    placed = FillOptionalRooms(graph, budget, max_patterns_per_room=2, rng=random.Random(0))

    # two rooms x two slots, one Rewards each at most
    assert placed == 3
    assert budget == {P.Rewards: 1, P.Conflict: 0}
    for node in graph.with_role(RoomRole.OPTIONAL):
        assert sorted(node.applied_patterns) == [P.Conflict, P.Rewards] or node.applied_patterns == [P.Rewards]
        assert len(set(node.applied_patterns)) == len(node.applied_patterns)


def test_critical_rooms_untouched():
    graph = build(["Start", "Room_1", "End", "Side_1"])
    FillOptionalRooms(graph, {P.Conflict: 5, P.Symmetry: 5}, 4, random.Random(1))
    for node in graph:
        if not node.is_optional():
            assert node.applied_patterns == []


def test_terminal_optional_room_respects_exclusions():
    graph = build([RoomInstance(name="Vault", roles=[RoomRole.OPTIONAL, RoomRole.TERMINAL])])
    budget = {P.SafeHaven: 2, P.Rewards: 1, P.ClearSignposting: 1}

    assert GetAvailablePatterns(graph.nodes[0], budget, graph) == []
    assert FillOptionalRooms(graph, budget, 4, random.Random(0)) == 0
    assert budget == {P.SafeHaven: 2, P.Rewards: 1, P.ClearSignposting: 1}


def test_available_patterns_are_in_enum_order():
    graph = build(["DeadEnd_1"])
    node = graph.nodes[0]
    node.apply_pattern(P.Symmetry)
    budget = {P.SafeHaven: 1, P.Symmetry: 1, P.Centering: 1, P.Conflict: 0}
    assert GetAvailablePatterns(node, budget, graph) == [P.Centering, P.SafeHaven]


def test_room_cap_respected():
    graph = build(["DeadEnd_1", "DeadEnd_2", "DeadEnd_3"])
    budget = {p: 5 for p in P}
    placed = FillOptionalRooms(graph, budget, 2, random.Random(7))
    assert placed == 6
    assert all(len(n.applied_patterns) == 2 for n in graph)


def test_single_sweep_places_one_per_room():
    graph = build(["DeadEnd_1", "DeadEnd_2"])
    budget = {p: 5 for p in P}
    assert FillOptionalRooms(graph, budget, 4, random.Random(7), max_sweeps=1) == 2


def test_same_seed_same_decoration():
    def run(seed):
        graph = build(["Room_1", "DeadEnd_1", "DeadEnd_2", "Optional_3"])
        FillOptionalRooms(graph, {p: 1 for p in P}, 2, random.Random(seed))
        return [n.applied_patterns for n in graph]

    assert run(99) == run(99)


@pytest.mark.parametrize("budget", [{}, {P.Conflict: 0}])
def test_nothing_to_spend(budget):
    graph = build(["DeadEnd_1"])
    assert FillOptionalRooms(graph, budget, 2, random.Random(0)) == 0
    assert graph.nodes[0].applied_patterns == []


def test_verbose_logs_each_placement(capsys):
    graph = build(["DeadEnd_1"])
    FillOptionalRooms(graph, {P.Rewards: 1}, 2, random.Random(0), verbose=True)
    assert "[FILLER]" in capsys.readouterr().out

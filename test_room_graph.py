import pytest

from appraisal import AppraisalProfile
from level_config import DefaultSettings
from pattern_library import AppraisalPatternType
from room_graph import RoomInstance, RoomRole, BuildRoomGraph, ResolveRoomName, ClassifyRoomRoles


def make_rooms(*specs):
    return [RoomInstance(name=name, position=pos) for name, pos in specs]


def test_display_name_fallbacks():
    rooms = [
        RoomInstance(name="Start"),
        RoomInstance(name="", template_name="CaveTemplate"),
        RoomInstance(),
    ]
    graph = BuildRoomGraph(rooms)

    assert [n.name for n in graph] == ["Start", "CaveTemplate", "Room_2"]
    assert [n.id for n in graph] == ["Start_0", "CaveTemplate_1", "Room_2_2"]
    assert ResolveRoomName(RoomInstance(template_name="T"), 5) == "T"


def test_prefix_roles_are_case_insensitive():
    settings = DefaultSettings()
    assert ClassifyRoomRoles("start", settings) == {RoomRole.CRITICAL}
    assert ClassifyRoomRoles("SWORD_hall", settings) == {RoomRole.CRITICAL, RoomRole.PATTERN_ELIGIBLE}
    assert ClassifyRoomRoles("EndBoss", settings) == {
        RoomRole.CRITICAL, RoomRole.PATTERN_ELIGIBLE, RoomRole.TERMINAL,
    }
    assert ClassifyRoomRoles("deadend_3", settings) == {RoomRole.PATTERN_ELIGIBLE, RoomRole.OPTIONAL}
    assert ClassifyRoomRoles("Corridor", settings) == frozenset()
    assert ClassifyRoomRoles("", settings) == frozenset()


def test_critical_order_follows_input_order():
    graph = BuildRoomGraph(make_rooms(
        ("Start", (0, 0)),
        ("DeadEnd_1", (0, 5)),
        ("Room_1", (10, 0)),
        ("Corridor", (12, 0)),
        ("End", (20, 0)),
    ))
    orders = {n.name: n.critical_order for n in graph}
    assert orders == {"Start": 0, "DeadEnd_1": -1, "Room_1": 1, "Corridor": -1, "End": 2}
    assert [n.name for n in graph.critical_path] == ["Start", "Room_1", "End"]


def test_next_critical_directions():
    graph = BuildRoomGraph(make_rooms(
        ("Start", (0, 0)),
        ("Room_1", (10, 0)),
        ("DeadEnd_1", (50, 50)),
        ("End", (10, 5)),
    ))
    start, room, dead_end, end = graph.nodes

    assert start.has_next_critical
    assert start.next_critical_direction == pytest.approx((1.0, 0.0, 0.0))
    assert room.next_critical_direction == pytest.approx((0.0, 1.0, 0.0))
    assert not end.has_next_critical and end.next_critical_direction is None
    assert not dead_end.has_next_critical


def test_direction_is_unit_length_in_3d():
    graph = BuildRoomGraph(make_rooms(("Start", (0, 0, 0)), ("End", (3, 4, 12))))
    d = graph.nodes[0].next_critical_direction
    assert sum(v * v for v in d) == pytest.approx(1.0)
    assert d == pytest.approx((3 / 13, 4 / 13, 12 / 13))


def test_coincident_positions_have_no_direction():
    graph = BuildRoomGraph(make_rooms(("Start", (4, 4)), ("End", (4, 4))))
    assert not graph.nodes[0].has_next_critical
    assert graph.nodes[0].next_critical_direction is None


def test_explicit_roles_override_names():
    rooms = [
        RoomInstance(name="Foyer", roles=[RoomRole.CRITICAL]),
        RoomInstance(name="Room_1", roles=[]),
        RoomInstance(name="Vault", roles=[RoomRole.CRITICAL, RoomRole.PATTERN_ELIGIBLE, RoomRole.TERMINAL]),
    ]
    graph = BuildRoomGraph(rooms)
    foyer, room, vault = graph.nodes

    assert foyer.is_on_critical_path and foyer.critical_order == 0
    assert not room.is_on_critical_path and room.critical_order == -1
    assert vault.is_terminal() and vault.critical_order == 1
    assert graph.with_role(RoomRole.PATTERN_ELIGIBLE) == [vault]


def test_neighbors_on_critical_path():
    graph = BuildRoomGraph(make_rooms(("Start", (0, 0)), ("Room_1", (1, 0)), ("End", (2, 0))))
    start, room, end = graph.nodes
    assert graph.previous_critical(start) is None
    assert graph.next_critical(start) is room
    assert graph.previous_critical(end) is room
    assert graph.next_critical(end) is None


def test_lookup_by_id_and_role():
    graph = BuildRoomGraph(make_rooms(("Start", (0, 0)), ("DeadEnd_1", (1, 0))))
    dead_end = graph.get("DeadEnd_1_1")

    assert dead_end is graph.nodes[1]
    assert dead_end.has_role(RoomRole.OPTIONAL)
    assert not dead_end.has_role(RoomRole.CRITICAL)
    assert graph.get("Missing_9") is None


def test_nodes_start_neutral_and_reject_duplicates():
    graph = BuildRoomGraph(make_rooms(("Room_1", (0, 0))))
    node = graph.nodes[0]
    assert node.appraisal == AppraisalProfile.neutral()
    assert node.applied_patterns == []

    node.apply_pattern(AppraisalPatternType.Conflict)
    assert node.has_pattern(AppraisalPatternType.Conflict)
    with pytest.raises(ValueError):
        node.apply_pattern(AppraisalPatternType.Conflict)
    assert node.applied_patterns == [AppraisalPatternType.Conflict]


def test_preview_does_not_mutate():
    node = BuildRoomGraph(make_rooms(("Room_1", (0, 0)))).nodes[0]
    preview = node.preview_pattern(AppraisalPatternType.Rewards)
    assert node.appraisal == AppraisalProfile.neutral()
    assert preview.power == pytest.approx(0.8)


def test_empty_graph():
    graph = BuildRoomGraph([])
    assert len(graph) == 0
    assert graph.critical_path == []

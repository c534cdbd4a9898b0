# directory room_graph.py
"""
Room Node Graph built from the dungeon generator's room list.

Each room instance becomes a RoomNode carrying its roles, its rank on the
critical path, the direction toward the next critical room and the mutable
appraisal/pattern state the optimizer works on.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from appraisal import AppraisalProfile
from pattern_library import GetDelta
from level_config import DefaultSettings
from level_utils import StartsWithAny, SubtractVectors, NormalizeVector, ToVector3


class RoomRole:
    CRITICAL = "critical"
    PATTERN_ELIGIBLE = "pattern_eligible"
    OPTIONAL = "optional"
    TERMINAL = "terminal"

    ALL = (CRITICAL, PATTERN_ELIGIBLE, OPTIONAL, TERMINAL)


class RoomInstance:
    """
    One room as emitted by the level generator.

    `roles` is optional. When given it is used as-is; otherwise roles are
    derived from the room name through the prefix convention.
    """

    def __init__(self, name: Optional[str] = None, template_name: Optional[str] = None,
                 position=(0.0, 0.0), roles: Optional[Iterable[str]] = None):
        self.name = name
        self.template_name = template_name
        self.position = position
        self.roles = None if roles is None else frozenset(roles)

    def __repr__(self):
        return f"RoomInstance(name={self.name!r}, template={self.template_name!r}, pos={self.position})"


class RoomNode:
    def __init__(self, node_id: str, name: str, index: int, roles=(), world_position=(0.0, 0.0, 0.0),
                 template_name: Optional[str] = None):
        self.id = node_id
        self.name = name
        self.index = index
        self.template_name = template_name
        self.roles = frozenset(roles)
        self.is_on_critical_path = RoomRole.CRITICAL in self.roles
        self.critical_order = -1
        self.world_position = ToVector3(world_position)
        self.has_next_critical = False
        self.next_critical_direction: Optional[Tuple[float, float, float]] = None
        self.appraisal = AppraisalProfile.neutral()
        self.applied_patterns: List = []

    # --- Roles -------------------------------------------------------------
    def has_role(self, role: str) -> bool:
        return role in self.roles

    def is_terminal(self) -> bool:
        return RoomRole.TERMINAL in self.roles

    def is_pattern_eligible(self) -> bool:
        return RoomRole.PATTERN_ELIGIBLE in self.roles

    def is_optional(self) -> bool:
        return RoomRole.OPTIONAL in self.roles

    # --- Patterns ----------------------------------------------------------
    def has_pattern(self, pattern) -> bool:
        return pattern in self.applied_patterns

    def can_accept_pattern(self, max_patterns: int) -> bool:
        return len(self.applied_patterns) < max_patterns

    def preview_pattern(self, pattern) -> AppraisalProfile:
        """Appraisal this room would have with `pattern` applied. Does not mutate."""
        return self.appraisal + GetDelta(pattern)

    def apply_pattern(self, pattern) -> AppraisalProfile:
        if pattern in self.applied_patterns:
            raise ValueError(f"Pattern {pattern!r} already applied to room {self.id}")
        self.appraisal.add(GetDelta(pattern))
        self.applied_patterns.append(pattern)
        return self.appraisal

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "index": self.index,
            "template_name": self.template_name,
            "roles": sorted(self.roles),
            "is_on_critical_path": self.is_on_critical_path,
            "critical_order": self.critical_order,
            "world_position": list(self.world_position),
            "has_next_critical": self.has_next_critical,
            "next_critical_direction": list(self.next_critical_direction) if self.next_critical_direction else None,
            "appraisal": self.appraisal.to_dict(),
            "applied_patterns": [p.name for p in self.applied_patterns],
        }

    def __repr__(self):
        return f"<RoomNode id={self.id} order={self.critical_order} patterns={[p.name for p in self.applied_patterns]}>"


class RoomGraph:
    """
    Node list plus a role index and the ordered critical path.
    Owned by a single post-processing run.
    """

    def __init__(self, nodes: List[RoomNode]):
        self.nodes = list(nodes)

        # role -> nodes, in node order
        self.role_index: Dict[str, List[RoomNode]] = defaultdict(list)

        # critical_order -> node
        self.by_order: Dict[int, RoomNode] = {}

        self.rebuild()

    def rebuild(self):
        self.role_index.clear()
        self.by_order.clear()

        for node in self.nodes:
            for role in node.roles:
                self.role_index[role].append(node)
            if node.critical_order >= 0:
                self.by_order[node.critical_order] = node

    # --- Query API -----------------------------------------------------------
    def with_role(self, role: str) -> List[RoomNode]:
        return list(self.role_index.get(role, ()))

    @property
    def critical_path(self) -> List[RoomNode]:
        return [self.by_order[k] for k in sorted(self.by_order)]

    def previous_critical(self, node: RoomNode) -> Optional[RoomNode]:
        if node.critical_order < 0:
            return None
        return self.by_order.get(node.critical_order - 1)

    def next_critical(self, node: RoomNode) -> Optional[RoomNode]:
        if node.critical_order < 0:
            return None
        return self.by_order.get(node.critical_order + 1)

    def get(self, node_id: str) -> Optional[RoomNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def __len__(self):
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def ResolveRoomName(room: RoomInstance, index: int) -> str:
    """Generator name -> template name -> Room_<index>."""
    if room.name:
        return room.name
    if room.template_name:
        return room.template_name
    return f"Room_{index}"


def ClassifyRoomRoles(name: str, settings) -> frozenset:
    roles = set()
    if StartsWithAny(name, settings["critical_prefixes"]):
        roles.add(RoomRole.CRITICAL)
    if StartsWithAny(name, settings["pattern_prefixes"]):
        roles.add(RoomRole.PATTERN_ELIGIBLE)
    if StartsWithAny(name, settings["optional_prefixes"]):
        roles.add(RoomRole.OPTIONAL)
    if StartsWithAny(name, settings["terminal_prefixes"]):
        roles.add(RoomRole.TERMINAL)
    return frozenset(roles)


def AssignCriticalDirections(graph: RoomGraph) -> RoomGraph:
    """
    For each consecutive pair on the critical path store the unit direction
    earlier -> later on the earlier room. The last critical room gets none.
    """
    path = graph.critical_path
    for node in path:
        node.has_next_critical = False
        node.next_critical_direction = None

    for current, following in zip(path, path[1:]):
        direction = NormalizeVector(SubtractVectors(following.world_position, current.world_position))
        if direction is None:
            continue
        current.has_next_critical = True
        current.next_critical_direction = direction

    return graph


def BuildRoomGraph(room_instances, settings=None) -> RoomGraph:
    """
    Build one RoomNode per room instance, in generator order.

    Critical rooms are ranked in the order they are emitted; the generator is
    expected to emit them in path order.
    """
    if settings is None:
        settings = DefaultSettings()

    nodes = []
    critical_counter = 0

    for index, room in enumerate(room_instances):
        name = ResolveRoomName(room, index)
        roles = room.roles if room.roles is not None else ClassifyRoomRoles(name, settings)

        node = RoomNode(
            node_id=f"{name}_{index}",
            name=name,
            index=index,
            roles=roles,
            world_position=room.position,
            template_name=room.template_name,
        )

        if node.is_on_critical_path:
            node.critical_order = critical_counter
            critical_counter += 1

        nodes.append(node)

    graph = RoomGraph(nodes)
    return AssignCriticalDirections(graph)

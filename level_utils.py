# directory level_utils.py
from math import sqrt

# Squared length below which a direction is treated as zero
MIN_DIRECTION_SQR_LENGTH = 1e-8


def ToVector3(position):
    """Pad a 2D/3D position (tuple, list or None) to an (x, y, z) float tuple."""
    if position is None:
        return (0.0, 0.0, 0.0)
    values = [float(v) for v in position][:3]
    while len(values) < 3:
        values.append(0.0)
    return tuple(values)


def SubtractVectors(a, b):
    a3 = ToVector3(a)
    b3 = ToVector3(b)
    return tuple(x - y for x, y in zip(a3, b3))


def SqrLength(vec):
    return sum(v * v for v in ToVector3(vec))


def NormalizeVector(vec, min_sqr_length=MIN_DIRECTION_SQR_LENGTH):
    """
    Return the unit vector of `vec`, or None when its length is negligible.
    """
    sqr = SqrLength(vec)
    if sqr <= min_sqr_length:
        return None
    length = sqrt(sqr)
    return tuple(v / length for v in ToVector3(vec))


def FormatVector(vec, digits=2):
    if vec is None:
        return "(N/A)"
    return "(" + ",".join(f"{v:.{digits}f}" for v in vec) + ")"


def StartsWithAny(name, prefixes):
    """Case-insensitive prefix check used by the room naming convention."""
    if not name:
        return False
    lowered = name.lower()
    return any(lowered.startswith(p.lower()) for p in prefixes if p)


def _get_room_info(node):
    """Helper to extract a standardized id and position string from a room node."""
    if node is None:
        return {"name": "Unknown", "pos": "(N/A)"}

    name = getattr(node, "id", None) or getattr(node, "name", None) or "Room"
    position = getattr(node, "world_position", None)
    if position is not None:
        x, y, _ = ToVector3(position)
        pos = f"({x:g},{y:g})"
    else:
        pos = "(N/A)"

    return {"name": name, "pos": pos}


def LogLevelEvent(event_type: str, message: str):
    """Level-wide log line. Output format: [EVENT_TYPE] message"""
    print(f"[{event_type.upper()}] {message}")


def LogRoomEvent(node, event_type: str, message: str, target_node=None):
    """
    Standardized logging function for room-driven events, handling optional target rooms.
    Output format: [EVENT_TYPE] Room Id (x,y) [-> Target Id (x,y)]: Message
    """
    source_info = _get_room_info(node)

    log_parts = [f"[{event_type.upper()}]", f"{source_info['name']} {source_info['pos']}"]

    if target_node is not None:
        target_info = _get_room_info(target_node)
        log_parts.append(f"-> {target_info['name']} {target_info['pos']}")

    log_parts.append(f": {message}")

    print(" ".join(log_parts))

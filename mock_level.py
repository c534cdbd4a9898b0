# directory mock_level.py
"""
Stand-in for the external dungeon generator.

Lays out a critical path Start -> Room_1 .. Room_n (one of them a Sword
room) -> End walking roughly east, with Perlin jitter on every position,
plus DeadEnd side rooms hanging off random path rooms.
"""
import math

from noise import pnoise2

from room_graph import RoomInstance


def GenerateMockLevel(rng, num_rooms=6, num_optional=4, spacing=10.0, scale=6.0, include_sword=True):
    """
    Emit RoomInstances in generator order (critical rooms in path order first).

    rng: an instance of random.Random for deterministic layouts
    num_rooms: critical-path length including Start and End (min 2)
    """
    num_rooms = max(2, num_rooms)
    seed_offset = rng.randint(0, 100000)

    names = ["Start"]
    middle = num_rooms - 2
    sword_slot = middle // 2 if include_sword and middle > 0 else -1
    for i in range(middle):
        names.append("Sword" if i == sword_slot else f"Room_{i + 1}")
    names.append("End")

    rooms = []
    heading = 0.0
    x, y = 0.0, 0.0
    for i, name in enumerate(names):
        # Heading drifts with noise so the path bends but keeps moving forward
        drift = pnoise2((i + seed_offset) / scale, seed_offset / scale, octaves=2)
        heading = max(-math.pi / 2.5, min(math.pi / 2.5, heading + drift))
        if i > 0:
            x += spacing * math.cos(heading)
            y += spacing * math.sin(heading)

        rooms.append(RoomInstance(
            name=name,
            template_name=f"{name.split('_')[0]}Template",
            position=(round(x, 3), round(y, 3)),
        ))

    path_positions = [r.position for r in rooms]
    for j in range(num_optional):
        anchor = path_positions[rng.randint(0, len(path_positions) - 1)]
        side = 1 if rng.random() < 0.5 else -1
        ox = pnoise2((j + seed_offset) / scale, (j - seed_offset) / scale, octaves=3) * spacing
        rooms.append(RoomInstance(
            name=f"DeadEnd_{j + 1}",
            template_name="DeadEndTemplate",
            position=(round(anchor[0] + ox, 3), round(anchor[1] + side * spacing * 0.8, 3)),
        ))

    return rooms

from __future__ import annotations

import math
import random

from config import MUSHROOM_COUNT, MUSHROOM_DISTANCE, MUSHROOM_SCALE, MUSHROOM_SPOTS
from core.geometry import circle, cylinder, sphere
from core.material import lambert_material
from core.mesh import Mesh
from core.object3d import Group
from world.noise import ground_height_at
from world.placement import sample_placements

STEM_HEIGHT = 1.0
CAP_RADIUS = 0.6
SPOT_RADIUS = 0.1
SPOT_SPREAD = 0.4  # max distance of a spot from the cap axis


def build_mushroom(rng: random.Random, spot_count: int = MUSHROOM_SPOTS) -> Group:
    """Stem, hemispherical cap and ``spot_count`` white spots lying on the cap."""
    mushroom = Group(name="mushroom")

    stem = Mesh(cylinder(0.15, 0.2, STEM_HEIGHT, 8), lambert_material(0xF0E6D2), name="stem")
    stem.position.y = STEM_HEIGHT / 2
    mushroom.add(stem)

    cap = Mesh(
        sphere(CAP_RADIUS, 16, 16, 0.0, math.tau, 0.0, math.pi / 2),
        lambert_material(0xC85A54),
        name="cap",
    )
    cap.position.y = STEM_HEIGHT
    mushroom.add(cap)

    spot_geometry = circle(SPOT_RADIUS, 8)
    spot_material = lambert_material(0xFFFFFF)
    for _ in range(spot_count):
        angle = rng.random() * math.tau
        radius = rng.random() * SPOT_SPREAD
        spot = Mesh(spot_geometry, spot_material, name="spot")
        spot.position.x = math.cos(angle) * radius
        spot.position.z = math.sin(angle) * radius
        # sit on the dome, a hair above it; a fixed y of 1.2..1.3 would bury
        # the spots inside the cap
        spot.position.y = STEM_HEIGHT + math.sqrt(CAP_RADIUS**2 - radius**2) + 0.01
        spot.rotation.x = -math.pi / 2 + (rng.random() - 0.5) * 0.5
        mushroom.add(spot)

    return mushroom


def scatter_mushrooms(rng: random.Random, count: int = MUSHROOM_COUNT) -> Group:
    patch = Group(name="mushrooms")
    for spec in sample_placements(
        rng,
        count,
        distance_range=MUSHROOM_DISTANCE,
        scale_range=MUSHROOM_SCALE,
        yaw_range=(0.0, math.tau),
    ):
        mushroom = build_mushroom(rng)
        mushroom.position = spec.position()
        mushroom.position.y = ground_height_at(mushroom.position.x, mushroom.position.z)
        mushroom.set_scalar_scale(spec.scale_jitter)
        mushroom.rotation.y = spec.yaw
        patch.add(mushroom)
    return patch

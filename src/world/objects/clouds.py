from __future__ import annotations

import random

from config import CLOUD_COUNT, CLOUD_DISTANCE, CLOUD_ELEVATION, CLOUD_SCALE, CLOUD_PUFFS
from core.geometry import sphere
from core.material import lambert_material
from core.mesh import Mesh
from core.object3d import Group
from world.placement import ring_placements


def build_cloud(rng: random.Random, puffs: int = CLOUD_PUFFS) -> Group:
    """A cloud is a loose cluster of translucent white spheres."""
    cloud = Group(name="cloud")
    material = lambert_material(0xFFFFFF, transparent=True, opacity=0.7)
    for _ in range(puffs):
        radius = 1.0 + rng.random()
        puff = Mesh(sphere(radius, 8, 8), material, name="puff")
        puff.position.x = (rng.random() - 0.5) * 3
        puff.position.y = (rng.random() - 0.5) * 1
        puff.position.z = (rng.random() - 0.5) * 2
        puff.set_scalar_scale(0.8 + rng.random() * 0.4)
        cloud.add(puff)
    return cloud


def build_cloud_ring(rng: random.Random, count: int = CLOUD_COUNT) -> Group:
    ring = Group(name="clouds")
    for spec in ring_placements(
        rng,
        count,
        distance_range=CLOUD_DISTANCE,
        elevation_range=CLOUD_ELEVATION,
        scale_range=CLOUD_SCALE,
    ):
        cloud = build_cloud(rng)
        cloud.position = spec.position()
        cloud.set_scalar_scale(spec.scale_jitter)
        ring.add(cloud)
    return ring

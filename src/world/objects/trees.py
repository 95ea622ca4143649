from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from config import (
    DECIDUOUS_COUNT,
    DECIDUOUS_DISTANCE,
    DECIDUOUS_SCALE,
    PINE_COUNT,
    PINE_DISTANCE,
    PINE_SCALE,
)
from core.geometry import cone, cylinder, sphere
from core.material import lambert_material
from core.mesh import Mesh
from core.object3d import Group
from world.noise import ground_height_at
from world.placement import sample_placements


@dataclass(frozen=True)
class TrunkSpec:
    radius_top: float
    radius_bottom: float
    height: float
    color: int
    segments: int = 8


@dataclass(frozen=True)
class FoliageBlob:
    x: float
    y: float
    z: float
    radius: float


@dataclass(frozen=True)
class ConeLayer:
    y: float
    radius: float
    height: float


DECIDUOUS_TRUNK = TrunkSpec(0.3, 0.5, 4.0, 0x4A3520)
DECIDUOUS_BLOBS = (
    FoliageBlob(0.0, 4.5, 0.0, 2.2),
    FoliageBlob(-0.8, 4.0, 0.5, 1.6),
    FoliageBlob(0.7, 4.2, -0.6, 1.8),
    FoliageBlob(0.0, 5.5, 0.0, 1.4),
)
DECIDUOUS_FOLIAGE_COLOR = 0x2D5016

PINE_TRUNK = TrunkSpec(0.25, 0.4, 5.0, 0x3D2817)
PINE_LAYERS = (
    ConeLayer(3.0, 2.0, 2.5),
    ConeLayer(4.5, 1.5, 2.0),
    ConeLayer(5.8, 1.0, 1.5),
    ConeLayer(6.8, 0.6, 1.2),
)
PINE_NEEDLE_COLOR = 0x1A4D2E


def _trunk(spec: TrunkSpec) -> Mesh:
    trunk = Mesh(
        cylinder(spec.radius_top, spec.radius_bottom, spec.height, spec.segments),
        lambert_material(spec.color),
        name="trunk",
    )
    trunk.position.y = spec.height / 2
    return trunk


def build_deciduous_tree(
    trunk: TrunkSpec = DECIDUOUS_TRUNK,
    blobs: Sequence[FoliageBlob] = DECIDUOUS_BLOBS,
    foliage_color: int = DECIDUOUS_FOLIAGE_COLOR,
) -> Group:
    tree = Group(name="deciduous_tree")
    tree.add(_trunk(trunk))
    material = lambert_material(foliage_color)
    for blob in blobs:
        tree.add(Mesh(sphere(blob.radius, 8, 8), material, (blob.x, blob.y, blob.z), name="foliage"))
    return tree


def build_pine_tree(
    trunk: TrunkSpec = PINE_TRUNK,
    layers: Sequence[ConeLayer] = PINE_LAYERS,
    needle_color: int = PINE_NEEDLE_COLOR,
) -> Group:
    tree = Group(name="pine_tree")
    tree.add(_trunk(trunk))
    material = lambert_material(needle_color)
    for layer in layers:
        tree.add(Mesh(cone(layer.radius, layer.height, 8), material, (0.0, layer.y, 0.0), name="foliage"))
    return tree


def scatter_trees(rng: random.Random) -> Group:
    """Deciduous trees and pines on the ring between the mushrooms and the rim."""
    forest = Group(name="trees")
    for builder, count, distance_range, scale_range in (
        (build_deciduous_tree, DECIDUOUS_COUNT, DECIDUOUS_DISTANCE, DECIDUOUS_SCALE),
        (build_pine_tree, PINE_COUNT, PINE_DISTANCE, PINE_SCALE),
    ):
        for spec in sample_placements(rng, count, distance_range=distance_range, scale_range=scale_range):
            tree = builder()
            tree.position = spec.position()
            tree.position.y = ground_height_at(tree.position.x, tree.position.z)
            tree.set_scalar_scale(spec.scale_jitter)
            forest.add(tree)
    return forest

"""Altars: stacked stone tiers around a turned column, crowned by a glowing crystal."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from config import (
    ALTAR_POSITIONS,
    CRYSTAL_HOVER,
    CRYSTAL_LIGHT_DISTANCE,
    CRYSTAL_LIGHT_INTENSITY,
    CRYSTAL_PALETTE,
)
from core.geometry import box, lathe, octahedron
from core.light import PointLight
from core.material import hex_to_rgb, phong_material
from core.mesh import Mesh
from core.object3d import Group
from world.animation import CrystalState
from world.noise import ground_height_at
from world.placement import fixed_placements


@dataclass(frozen=True)
class Tier:
    width: float
    height: float
    depth: float


@dataclass(frozen=True)
class ColumnSpec:
    base_radius: float = 0.5
    height: float = 4.0
    flutes: int = 8
    entasis: float = 0.08
    segments: int = 16

    def profile(self) -> list[tuple[float, float]]:
        """(r, y) outline of the column, foot to capital."""
        r0 = self.base_radius
        pts = [(r0 * 1.2, 0.0), (r0 * 1.1, 0.2), (r0, 0.4)]
        for i in range(self.flutes):
            t = i / (self.flutes - 1)
            pts.append((r0 + math.sin(t * math.pi) * self.entasis, 0.4 + t * (self.height - 1)))
        pts.append((r0 * 1.15, self.height - 0.3))
        pts.append((r0 * 1.3, self.height - 0.2))
        pts.append((r0 * 1.2, self.height))
        return pts


BASE_TIERS = (Tier(2.5, 0.3, 2.5), Tier(2.2, 0.3, 2.2), Tier(1.9, 0.3, 1.9))
TOP_TIERS = (Tier(2.0, 0.25, 2.0), Tier(1.7, 0.25, 1.7), Tier(1.4, 0.2, 1.4))
COLUMN = ColumnSpec()


class Altar(Group):
    """Altar root node; keeps handles on the parts the animator drives."""

    def __init__(self, *, name: str = "altar"):
        super().__init__(name=name)
        self.crystal: Optional[Group] = None
        self.crystal_light: Optional[PointLight] = None
        self.crystal_state: Optional[CrystalState] = None
        self.crystal_color: int = 0xFFFFFF


def build_crystal(rng: random.Random, palette: Sequence[int] = CRYSTAL_PALETTE) -> tuple[Group, int]:
    """Emissive octahedron in a hue drawn uniformly from ``palette``."""
    color = rng.choice(list(palette))
    material = phong_material(
        color,
        emissive=hex_to_rgb(color),
        emissive_intensity=0.6,
        shininess=100,
        transparent=True,
        opacity=0.9,
    )
    crystal = Group(name="crystal")
    crystal.add(Mesh(octahedron(0.5), material, name="crystal_gem"))
    return crystal, color


def _stack(altar: Group, tiers: Sequence[Tier], color: int, y: float, name: str) -> float:
    material = phong_material(color, shininess=30)
    for tier in tiers:
        block = Mesh(box(tier.width, tier.height, tier.depth), material, name=name)
        block.position.y = y + tier.height / 2
        altar.add(block)
        y += tier.height
    return y


def build_altar(
    rng: random.Random,
    base_tiers: Sequence[Tier] = BASE_TIERS,
    column: ColumnSpec = COLUMN,
    top_tiers: Sequence[Tier] = TOP_TIERS,
) -> Altar:
    altar = Altar()
    y = _stack(altar, base_tiers, 0xCCCCCC, 0.0, "base_tier")

    shaft = Mesh(lathe(column.profile(), column.segments), phong_material(0xF5F5DC, shininess=40), name="column")
    shaft.position.y = y
    altar.add(shaft)
    y += column.height

    y = _stack(altar, top_tiers, 0xD4A574, y, "top_tier")

    crystal, color = build_crystal(rng)
    hover = y + CRYSTAL_HOVER
    crystal.position.y = hover
    altar.add(crystal)

    light = PointLight(hex_to_rgb(color), CRYSTAL_LIGHT_INTENSITY, CRYSTAL_LIGHT_DISTANCE, name="crystal_light")
    light.position.y = hover
    altar.add(light)

    altar.crystal = crystal
    altar.crystal_light = light
    altar.crystal_color = color
    altar.crystal_state = CrystalState(base_height=hover, phase_offset=rng.random() * math.tau)
    return altar


def place_altars(rng: random.Random, positions: Sequence[tuple[float, float]] = ALTAR_POSITIONS) -> list[Altar]:
    altars = []
    for spec in fixed_placements(positions):
        altar = build_altar(rng)
        altar.position = spec.position()
        altar.position.y = ground_height_at(altar.position.x, altar.position.z)
        altars.append(altar)
    return altars

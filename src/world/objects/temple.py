"""Central temple: drum, dome, vesica piscis door and stained glass windows."""

from __future__ import annotations

import math
from dataclasses import dataclass

from core.geometry import circle, cylinder, extrude, sphere, torus, vesica_piscis
from core.material import hex_to_rgb, phong_material
from core.mesh import Mesh
from core.object3d import Group


@dataclass(frozen=True)
class WindowRing:
    """Windows evenly spread on a circle around the temple axis."""

    angles: tuple[float, ...]
    colors: tuple[int, ...]
    size: float
    radius: float
    height: float


GROUND_WINDOWS = WindowRing(
    angles=(math.pi / 2, math.pi, -math.pi / 2),
    colors=(0x3498DB, 0xE74C3C, 0xF39C12),
    size=0.8,
    radius=6.3,
    height=5.0,
)
DOME_WINDOWS = WindowRing(
    angles=(0.0, math.pi * 2 / 3, math.pi * 4 / 3),
    colors=(0x9B59B6, 0x1ABC9C, 0xE67E22),
    size=0.6,
    radius=4.5,
    height=9.0,
)


def build_vesica_door(radius: float = 1.5) -> Group:
    door = Group(name="door")
    panel = extrude(vesica_piscis(radius), depth=0.3, bevel_thickness=0.1, bevel_size=0.1, bevel_segments=3)
    door.add(Mesh(panel, phong_material(0x6B4423, shininess=20), name="door_panel"))
    # frame lies in the door plane, just proud of the panel; no quarter turn
    # about Y, which would stand the ring edge-on to the door
    frame = Mesh(torus(1.8, 0.15, 8, 32), phong_material(0x8B6914, shininess=50), name="door_frame")
    frame.position.z = 0.15
    door.add(frame)
    return door


def build_stained_glass_window(size: float, color: int) -> Group:
    window = Group(name="window")
    rgb = hex_to_rgb(color)
    glass = phong_material(
        color,
        transparent=True,
        opacity=0.7,
        double_sided=True,
        emissive=rgb,
        emissive_intensity=0.3,
        shininess=100,
    )
    window.add(Mesh(circle(size, 32), glass, name="glass"))
    window.add(Mesh(torus(size, 0.08, 8, 32), phong_material(0x8B6914, shininess=50), name="window_frame"))
    return window


def _place_windows(temple: Group, ring: WindowRing) -> None:
    for angle, color in zip(ring.angles, ring.colors):
        window = build_stained_glass_window(ring.size, color)
        window.position.x = math.cos(angle) * ring.radius
        window.position.y = ring.height
        window.position.z = math.sin(angle) * ring.radius
        temple.add(window)
        window.look_at((0.0, ring.height, 0.0))


def build_temple() -> Group:
    temple = Group(name="temple")

    base = Mesh(cylinder(6, 6.5, 8, 32), phong_material(0xD4A574, shininess=10), name="temple_base")
    base.position.y = 4
    temple.add(base)

    dome = Mesh(
        sphere(5, 32, 16, 0.0, math.tau, 0.0, math.pi / 2),
        phong_material(0xC85A54, shininess=30),
        name="dome",
    )
    dome.position.y = 8
    temple.add(dome)

    door = build_vesica_door()
    door.position.y = 2.5
    door.position.z = 6.5
    temple.add(door)

    _place_windows(temple, GROUND_WINDOWS)
    _place_windows(temple, DOME_WINDOWS)
    return temple

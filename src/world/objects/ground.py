"""Ground disc builder.

The disc is generated in its own (x, y) plane, displaced and colored by the
terrain noise, then laid flat: plane (x, y, h) becomes world (x, h, -y).
"""

from __future__ import annotations

import numpy as np

from config import GROUND_RADIUS, GROUND_SEGMENTS, GROUND_RINGS
from core.geometry import Geometry, compute_vertex_normals, polar_disc
from core.material import lambert_material
from core.mesh import Mesh
from world.noise import sample_surface_grid


class GroundDiscBuilder:
    def __init__(self, radius: float = GROUND_RADIUS, segments: int = GROUND_SEGMENTS, rings: int = GROUND_RINGS):
        self.radius = float(radius)
        self.segments = int(segments)
        self.rings = int(rings)

    def build_geometry(self) -> Geometry:
        plane, indices = polar_disc(self.radius, self.segments, self.rings)
        heights, colors = sample_surface_grid(plane)
        positions = np.column_stack([plane[:, 0], heights, -plane[:, 1]])
        return Geometry(
            positions=positions,
            indices=indices,
            normals=compute_vertex_normals(positions, indices),
            colors=colors,
        )

    def build(self) -> Mesh:
        material = lambert_material(0xFFFFFF, vertex_colors=True)
        return Mesh(self.build_geometry(), material, name="ground")


def build_ground(radius: float = GROUND_RADIUS, segments: int = GROUND_SEGMENTS, rings: int = GROUND_RINGS) -> Mesh:
    return GroundDiscBuilder(radius, segments, rings).build()

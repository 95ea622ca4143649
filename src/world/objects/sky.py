"""Sky dome: a large inward-facing sphere with a vertical color gradient."""

from __future__ import annotations

import numpy as np

from config import SKY_RADIUS
from core.geometry import sphere
from core.material import basic_material
from core.mesh import Mesh
from world.noise import sky_gradient


def build_sky(radius: float = SKY_RADIUS, width_segments: int = 32, height_segments: int = 32) -> Mesh:
    geometry = sphere(radius, width_segments, height_segments)
    geometry.colors = np.array([sky_gradient(float(y), radius) for y in geometry.positions[:, 1]], dtype=np.float32)
    # seen from inside; front faces are culled while drawing
    geometry.normals = -geometry.normals
    material = basic_material(0xFFFFFF, back_side=True, fog=False, vertex_colors=True)
    return Mesh(geometry, material, name="sky")

"""Mesh nodes and the VBO container they draw through.

``BatchedMesh`` holds interleaved vertex data and uploads it on first draw, so
building a ``Mesh`` never requires a live OpenGL context.
"""

from __future__ import annotations

import ctypes
from dataclasses import dataclass
from typing import Optional

import numpy as np
from OpenGL.GL import (
    glGenBuffers,
    glBindBuffer,
    glBufferData,
    glDeleteBuffers,
    glEnableClientState,
    glVertexPointer,
    glNormalPointer,
    glColorPointer,
    glDrawArrays,
    glDisableClientState,
    GL_ARRAY_BUFFER,
    GL_STATIC_DRAW,
    GL_FLOAT,
    GL_TRIANGLES,
    GL_VERTEX_ARRAY,
    GL_NORMAL_ARRAY,
    GL_COLOR_ARRAY,
)

from core.geometry import FLOATS_PER_VERTEX, Geometry
from core.material import Material
from core.object3d import Object3D


@dataclass
class BatchedMesh:
    vertex_data: np.ndarray
    vbo_vertices: Optional[int] = None

    @property
    def vertex_count(self) -> int:
        return int(self.vertex_data.shape[0])

    @property
    def uploaded(self) -> bool:
        return self.vbo_vertices is not None

    def upload(self) -> None:  # pragma: no cover - visual
        data = np.ascontiguousarray(self.vertex_data, dtype=np.float32)
        self.vbo_vertices = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo_vertices)
        glBufferData(GL_ARRAY_BUFFER, data.nbytes, data, GL_STATIC_DRAW)

    def release(self) -> None:  # pragma: no cover - visual
        if self.vbo_vertices is not None:
            glDeleteBuffers(1, [self.vbo_vertices])
            self.vbo_vertices = None

    def draw(self) -> None:  # pragma: no cover - visual
        if self.vertex_count == 0:
            return
        if self.vbo_vertices is None:
            self.upload()
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo_vertices)
        # [x, y, z, nx, ny, nz, r, g, b, a] = 10 floats per vertex
        stride = FLOATS_PER_VERTEX * 4

        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(3, GL_FLOAT, stride, None)
        glEnableClientState(GL_NORMAL_ARRAY)
        glNormalPointer(GL_FLOAT, stride, ctypes.c_void_p(3 * 4))
        glEnableClientState(GL_COLOR_ARRAY)
        glColorPointer(4, GL_FLOAT, stride, ctypes.c_void_p(6 * 4))

        glDrawArrays(GL_TRIANGLES, 0, self.vertex_count)

        glDisableClientState(GL_COLOR_ARRAY)
        glDisableClientState(GL_NORMAL_ARRAY)
        glDisableClientState(GL_VERTEX_ARRAY)
        glBindBuffer(GL_ARRAY_BUFFER, 0)


class Mesh(Object3D):
    """A primitive shape: geometry + material under a transform."""

    def __init__(self, geometry: Geometry, material: Material, position=None, rotation=None, scale=None, *, name: str = ""):
        super().__init__(position, rotation, scale, name=name)
        self.geometry = geometry
        self.material = material
        self._buffer: Optional[BatchedMesh] = None

    @property
    def buffer(self) -> BatchedMesh:
        if self._buffer is None:
            self._buffer = BatchedMesh(
                vertex_data=self.geometry.to_vertex_array(self.material.color, self.material.opacity)
            )
        return self._buffer

    def invalidate(self) -> None:
        """Drop baked vertex data after the material color/opacity changed."""
        if self._buffer is not None:
            self._buffer.release()
        self._buffer = None

    def draw(self, *, fog_enabled: bool = True) -> None:  # pragma: no cover - visual
        self.material.apply()
        self.buffer.draw()
        self.material.restore(fog_enabled=fog_enabled)

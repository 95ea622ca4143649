"""Scene-graph renderer on the fixed-function pipeline.

Meshes are collected with their accumulated world transforms, then drawn
opaque first and transparent last (back to front, depth writes off) so the
clouds, crystals and stained glass blend over what is behind them. Geometry
lives in per-mesh VBOs drawn via glDrawArrays(GL_TRIANGLES, ...).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from OpenGL.GL import (
    glClear,
    glClearColor,
    glEnable,
    glDisable,
    glFogi,
    glFogf,
    glFogfv,
    glHint,
    glShadeModel,
    glPushMatrix,
    glPopMatrix,
    glMultMatrixf,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_FOG,
    GL_FOG_MODE,
    GL_FOG_COLOR,
    GL_FOG_START,
    GL_FOG_END,
    GL_FOG_HINT,
    GL_LINEAR,
    GL_NICEST,
    GL_LIGHTING,
    GL_NORMALIZE,
    GL_SMOOTH,
)

from config import FOG_NEAR, FOG_FAR, SKY_BLUE
from core.light import LightRig
from core.material import hex_to_rgb
from core.mesh import Mesh
from core.object3d import Object3D

log = logging.getLogger(__name__)


@dataclass
class DrawItem:
    mesh: Mesh
    world: np.ndarray

    @property
    def position(self) -> np.ndarray:
        return self.world[:3, 3]


def collect_draw_list(root: Object3D, eye=None) -> tuple[list[DrawItem], list[DrawItem]]:
    """Visible meshes under ``root`` split into (opaque, transparent).

    Invisible nodes hide their whole subtree. Transparent items are sorted
    far to near from ``eye`` when one is given.
    """
    opaque: list[DrawItem] = []
    transparent: list[DrawItem] = []

    def visit(node: Object3D, parent_world: np.ndarray) -> None:
        if not node.visible:
            return
        world = parent_world @ node.local_matrix()
        if isinstance(node, Mesh):
            item = DrawItem(node, world)
            (transparent if node.material.is_transparent else opaque).append(item)
        for child in node.children:
            visit(child, world)

    base = root.parent.world_matrix() if root.parent is not None else np.eye(4)
    visit(root, base)
    if eye is not None:
        e = np.array((eye[0], eye[1], eye[2]))
        transparent.sort(key=lambda it: -float(np.sum((it.position - e) ** 2)))
    return opaque, transparent


class SceneRenderer:
    def __init__(self, *, clear_color: int = SKY_BLUE, fog_color: int = SKY_BLUE, fog_near: float = FOG_NEAR, fog_far: float = FOG_FAR):
        self.clear_color = hex_to_rgb(clear_color)
        self.fog_color = hex_to_rgb(fog_color)
        self.fog_near = fog_near
        self.fog_far = fog_far
        self.lights = LightRig()
        self.fog_enabled = True

    def setup(self) -> None:  # pragma: no cover - visual
        """One-time GL state; call after the context exists."""
        glShadeModel(GL_SMOOTH)
        glEnable(GL_NORMALIZE)
        glEnable(GL_LIGHTING)
        glFogi(GL_FOG_MODE, GL_LINEAR)
        glFogf(GL_FOG_START, self.fog_near)
        glFogf(GL_FOG_END, self.fog_far)
        glFogfv(GL_FOG_COLOR, (*self.fog_color, 1.0))
        glHint(GL_FOG_HINT, GL_NICEST)

    def render(self, root: Object3D, camera) -> None:  # pragma: no cover - visual
        glClearColor(*self.clear_color, 1.0)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        camera.apply()
        self.lights.apply(root)
        if self.fog_enabled:
            glEnable(GL_FOG)
        else:
            glDisable(GL_FOG)

        opaque, transparent = collect_draw_list(root, camera.position)
        for item in opaque:
            self._draw(item)
        for item in transparent:
            self._draw(item)
        glEnable(GL_LIGHTING)

    def _draw(self, item: DrawItem) -> None:  # pragma: no cover - visual
        glPushMatrix()
        # GL wants column-major
        glMultMatrixf(np.ascontiguousarray(item.world.T, dtype=np.float32))
        item.mesh.draw(fog_enabled=self.fog_enabled)
        glPopMatrix()

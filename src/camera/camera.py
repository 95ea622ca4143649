import math

import numpy as np
from pygame.math import Vector3
from OpenGL.GL import glMatrixMode, glLoadIdentity, GL_PROJECTION, GL_MODELVIEW
from OpenGL.GLU import gluPerspective, gluLookAt

from config import FOV, NEAR, FAR, WIDTH, HEIGHT


class Camera:
    """Perspective camera aimed at a target point.

    Keeps the same pygame ``Vector3`` API as the scene graph. View and
    projection matrices are also available as numpy arrays for non-GL callers.
    """

    def __init__(self, position=None, target=None, *, width=WIDTH, height=HEIGHT, fov=FOV, near=NEAR, far=FAR):
        self.position = Vector3(position) if position is not None else Vector3(30, 25, 30)
        self.target = Vector3(target) if target is not None else Vector3(0, 0, 0)
        self.up = Vector3(0, 1, 0)
        self.fov = float(fov)
        self.near = float(near)
        self.far = float(far)
        self.aspect = width / height if height else 1.0

    def look_at(self, target) -> None:
        self.target = Vector3(target)

    def set_aspect(self, width: int, height: int) -> None:
        self.aspect = width / max(1, height)

    # Orientation helpers ------------------------------------------------
    @property
    def forward(self) -> Vector3:
        d = self.target - self.position
        return d.normalize() if d.length_squared() > 0 else Vector3(0, 0, -1)

    @property
    def right(self) -> Vector3:
        r = self.forward.cross(self.up)
        return r.normalize() if r.length_squared() > 0 else Vector3(1, 0, 0)

    @property
    def camera_up(self) -> Vector3:
        return self.right.cross(self.forward)

    def distance(self) -> float:
        return (self.position - self.target).length()

    # Matrices -----------------------------------------------------------
    def view_matrix(self) -> np.ndarray:
        """World -> camera matrix (same as gluLookAt)."""
        f = np.array(self.forward)
        r = np.array(self.right)
        u = np.array(self.camera_up)
        eye = np.array(self.position)
        m = np.eye(4)
        m[0, :3] = r
        m[1, :3] = u
        m[2, :3] = -f
        m[:3, 3] = -m[:3, :3] @ eye
        return m

    def projection_matrix(self) -> np.ndarray:
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        n, fa = self.near, self.far
        m = np.zeros((4, 4))
        m[0, 0] = f / self.aspect
        m[1, 1] = f
        m[2, 2] = (fa + n) / (n - fa)
        m[2, 3] = 2.0 * fa * n / (n - fa)
        m[3, 2] = -1.0
        return m

    def apply(self) -> None:  # pragma: no cover - visual
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(self.fov, self.aspect, self.near, self.far)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        gluLookAt(
            self.position.x, self.position.y, self.position.z,
            self.target.x, self.target.y, self.target.z,
            self.up.x, self.up.y, self.up.z,
        )

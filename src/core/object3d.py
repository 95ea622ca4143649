"""Scene-graph transform nodes.

An ``Object3D`` exclusively owns its children: adding a node to a new parent
detaches it from the old one, and adding an ancestor is rejected, so the graph
is always a tree. Rotations are XYZ Euler angles in radians, composed as
``T * Rx * Ry * Rz * S`` (the same order glTranslate/glRotate/glScale apply).
"""

from __future__ import annotations

import math
from typing import Iterator, Optional

import numpy as np
from pygame.math import Vector3


def _vec(value, default=(0.0, 0.0, 0.0)) -> Vector3:
    return Vector3(value) if value is not None else Vector3(default)


def rotation_matrix(rx: float, ry: float, rz: float) -> np.ndarray:
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    Rx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    Ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    Rz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
    return Rx @ Ry @ Rz


def euler_xyz_from_matrix(m: np.ndarray) -> tuple[float, float, float]:
    """Inverse of :func:`rotation_matrix` for a pure rotation."""
    m13 = float(np.clip(m[0, 2], -1.0, 1.0))
    ry = math.asin(m13)
    if abs(m13) < 0.9999999:
        rx = math.atan2(-m[1, 2], m[2, 2])
        rz = math.atan2(-m[0, 1], m[0, 0])
    else:
        rx = math.atan2(m[2, 1], m[1, 1])
        rz = 0.0
    return rx, ry, rz


class Object3D:
    def __init__(self, position=None, rotation=None, scale=None, *, name: str = ""):
        self.name = name
        self.position = _vec(position)
        self.rotation = _vec(rotation)
        self.scale = _vec(scale, (1.0, 1.0, 1.0))
        self.visible = True
        self.parent: Optional[Object3D] = None
        self.children: list[Object3D] = []

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label} children={len(self.children)}>"

    # ------------------------------------------------------------------
    # Hierarchy
    # ------------------------------------------------------------------
    def add(self, *objects: "Object3D") -> "Object3D":
        for obj in objects:
            if obj is self or obj.is_ancestor_of(self):
                raise ValueError(f"cannot add {obj!r} under its own descendant")
            if obj.parent is not None:
                obj.parent.remove(obj)
            obj.parent = self
            self.children.append(obj)
        return self

    def remove(self, obj: "Object3D") -> None:
        self.children.remove(obj)
        obj.parent = None

    def is_ancestor_of(self, other: "Object3D") -> bool:
        node = other.parent
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def traverse(self) -> Iterator["Object3D"]:
        yield self
        for child in self.children:
            yield from child.traverse()

    def find(self, name: str) -> Optional["Object3D"]:
        return next((n for n in self.traverse() if n.name == name), None)

    def find_all(self, name: str) -> list["Object3D"]:
        return [n for n in self.traverse() if n.name == name]

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------
    def set_scalar_scale(self, s: float) -> None:
        self.scale = Vector3(s, s, s)

    def local_matrix(self) -> np.ndarray:
        m = np.eye(4)
        m[:3, :3] = rotation_matrix(self.rotation.x, self.rotation.y, self.rotation.z) * np.array(
            [self.scale.x, self.scale.y, self.scale.z]
        )
        m[:3, 3] = (self.position.x, self.position.y, self.position.z)
        return m

    def world_matrix(self) -> np.ndarray:
        if self.parent is None:
            return self.local_matrix()
        return self.parent.world_matrix() @ self.local_matrix()

    def world_position(self) -> Vector3:
        x, y, z = self.world_matrix()[:3, 3]
        return Vector3(float(x), float(y), float(z))

    def look_at(self, target) -> None:
        """Rotate so the local +Z axis points at ``target`` (world space)."""
        t = np.array([target[0], target[1], target[2], 1.0])
        if self.parent is not None:
            t = np.linalg.inv(self.parent.world_matrix()) @ t
        direction = t[:3] - np.array((self.position.x, self.position.y, self.position.z))
        length = np.linalg.norm(direction)
        if length < 1e-12:
            return
        z = direction / length
        up = np.array((0.0, 1.0, 0.0))
        x = np.cross(up, z)
        if np.linalg.norm(x) < 1e-9:
            # looking straight up/down: pick any horizontal axis
            x = np.cross(np.array((0.0, 0.0, 1.0)), z)
        x /= np.linalg.norm(x)
        y = np.cross(z, x)
        rx, ry, rz = euler_xyz_from_matrix(np.column_stack([x, y, z]))
        self.rotation = Vector3(rx, ry, rz)


class Group(Object3D):
    """Plain transform node used as the root of composite meshes."""

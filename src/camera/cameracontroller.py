"""OrbitController: mouse orbit / pan / zoom around a target with damping.

Left-drag rotates around the target, right-drag pans the target in the view
plane and the wheel dollies in/out. Input only accumulates deltas; ``update()``
(once per frame) eases them in by the damping factor, clamps distance and
polar angle, and re-aims the camera.
"""

from __future__ import annotations

import math

import pygame
from pygame.math import Vector3

from config import (
    ORBIT_DAMPING,
    ORBIT_MIN_DISTANCE,
    ORBIT_MAX_DISTANCE,
    ORBIT_MAX_POLAR,
    ORBIT_ROTATE_SPEED,
    ORBIT_ZOOM_STEP,
    HEIGHT,
)

_EPS = 1e-6


class OrbitController:
    def __init__(
        self,
        camera,
        *,
        target=None,
        damping: float = ORBIT_DAMPING,
        min_distance: float = ORBIT_MIN_DISTANCE,
        max_distance: float = ORBIT_MAX_DISTANCE,
        min_polar: float = 0.0,
        max_polar: float = ORBIT_MAX_POLAR,
        rotate_speed: float = ORBIT_ROTATE_SPEED,
        zoom_step: float = ORBIT_ZOOM_STEP,
        viewport_height: int = HEIGHT,
    ):
        self.camera = camera
        self.target = Vector3(target) if target is not None else Vector3(camera.target)
        self.damping = float(damping)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        self.min_polar = float(min_polar)
        self.max_polar = float(max_polar)
        self.rotate_speed = float(rotate_speed)
        self.zoom_step = float(zoom_step)
        self.viewport_height = int(viewport_height)
        self.enabled = True

        self._delta_azimuth = 0.0
        self._delta_polar = 0.0
        self._scale = 1.0
        self._pan_offset = Vector3(0, 0, 0)
        self._rotating = False
        self._panning = False

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def handle_event(self, event) -> None:
        if not self.enabled:
            return
        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                self._rotating = True
            elif event.button == 3:
                self._panning = True
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1:
                self._rotating = False
            elif event.button == 3:
                self._panning = False
        elif event.type == pygame.MOUSEMOTION:
            dx, dy = event.rel
            if self._rotating:
                self.rotate(dx, dy)
            elif self._panning:
                self.pan(dx, dy)
        elif event.type == pygame.MOUSEWHEEL:
            self.zoom(event.y)

    def rotate(self, dx_px: float, dy_px: float) -> None:
        """Queue a rotation from a mouse drag in pixels (full height == one turn)."""
        h = max(1, self.viewport_height)
        self._delta_azimuth -= 2.0 * math.pi * dx_px / h * self.rotate_speed
        self._delta_polar -= 2.0 * math.pi * dy_px / h * self.rotate_speed

    def pan(self, dx_px: float, dy_px: float) -> None:
        """Queue a pan so the ground under the cursor roughly follows the drag."""
        h = max(1, self.viewport_height)
        offset = self.camera.position - self.target
        target_distance = offset.length() * math.tan(math.radians(self.camera.fov / 2.0))
        left = -self.camera.right * (2.0 * dx_px * target_distance / h)
        up = self.camera.camera_up * (2.0 * dy_px * target_distance / h)
        self._pan_offset += left + up

    def zoom(self, steps: float) -> None:
        """Positive steps dolly in, negative steps dolly out."""
        self._scale *= self.zoom_step ** steps

    # ------------------------------------------------------------------
    # Per-frame
    # ------------------------------------------------------------------
    def spherical(self) -> tuple[float, float, float]:
        """(radius, azimuth, polar) of the camera around the target."""
        offset = self.camera.position - self.target
        radius = offset.length()
        if radius < _EPS:
            return 0.0, 0.0, 0.0
        azimuth = math.atan2(offset.x, offset.z)
        polar = math.acos(max(-1.0, min(1.0, offset.y / radius)))
        return radius, azimuth, polar

    def update(self, dt: float | None = None) -> bool:
        """Apply queued input. Returns True if the camera moved noticeably."""
        old_position = Vector3(self.camera.position)
        radius, azimuth, polar = self.spherical()

        k = self.damping if self.damping > 0 else 1.0
        azimuth += self._delta_azimuth * k
        polar += self._delta_polar * k
        polar = max(self.min_polar + _EPS, min(self.max_polar, polar))
        radius = max(self.min_distance, min(self.max_distance, radius * self._scale))

        self.target += self._pan_offset * k

        sin_p = math.sin(polar)
        offset = Vector3(
            radius * sin_p * math.sin(azimuth),
            radius * math.cos(polar),
            radius * sin_p * math.cos(azimuth),
        )
        self.camera.position = self.target + offset
        self.camera.look_at(self.target)

        if self.damping > 0:
            self._delta_azimuth *= 1.0 - self.damping
            self._delta_polar *= 1.0 - self.damping
            self._pan_offset *= 1.0 - self.damping
        else:
            self._delta_azimuth = 0.0
            self._delta_polar = 0.0
            self._pan_offset = Vector3(0, 0, 0)
        self._scale = 1.0

        return (self.camera.position - old_position).length_squared() > _EPS


__all__ = ["OrbitController"]

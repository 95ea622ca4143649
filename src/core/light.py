"""Light nodes and their binding onto the fixed-function light slots.

Lights live in the scene graph like any other node, so a point light parented
to an altar follows the altar's transform. ``LightRig.plan()`` resolves world
positions and GL slots without touching OpenGL; ``apply()`` pushes the plan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from OpenGL.GL import (
    glEnable,
    glDisable,
    glLightfv,
    glLightf,
    glLightModelfv,
    GL_LIGHT0,
    GL_POSITION,
    GL_DIFFUSE,
    GL_SPECULAR,
    GL_AMBIENT,
    GL_CONSTANT_ATTENUATION,
    GL_LINEAR_ATTENUATION,
    GL_QUADRATIC_ATTENUATION,
    GL_LIGHT_MODEL_AMBIENT,
)

from core.material import Color, hex_to_rgb
from core.object3d import Object3D

log = logging.getLogger(__name__)

MAX_LIGHTS = 8


class Light(Object3D):
    def __init__(self, color: int = 0xFFFFFF, intensity: float = 1.0, position=None, *, name: str = ""):
        super().__init__(position=position, name=name)
        self.color: Color = hex_to_rgb(color)
        self.intensity = float(intensity)

    @property
    def radiance(self) -> Color:
        k = self.intensity
        return (self.color[0] * k, self.color[1] * k, self.color[2] * k)


class AmbientLight(Light):
    pass


class DirectionalLight(Light):
    """Parallel light shining from ``position`` toward the origin."""


class HemisphereLight(Light):
    """Sky/ground gradient light.

    The fixed-function pipeline has no hemisphere model, so it is bound as an
    overhead directional light in the sky color plus half its intensity of
    ground color added to the global ambient term.
    """

    def __init__(self, sky_color: int, ground_color: int, intensity: float = 1.0, *, name: str = ""):
        super().__init__(sky_color, intensity, position=(0.0, 1.0, 0.0), name=name)
        self.ground_color: Color = hex_to_rgb(ground_color)


class PointLight(Light):
    def __init__(self, color: int | Color = 0xFFFFFF, intensity: float = 1.0, distance: float = 0.0, position=None, *, name: str = ""):
        super().__init__(0xFFFFFF, intensity, position=position, name=name)
        self.color = hex_to_rgb(color) if isinstance(color, int) else tuple(color)
        self.distance = float(distance)

    def attenuation(self) -> tuple[float, float, float]:
        """(constant, linear, quadratic) so the light fades to ~20% at ``distance``."""
        if self.distance <= 0:
            return 1.0, 0.0, 0.0
        return 1.0, 0.0, 4.0 / (self.distance * self.distance)


@dataclass
class LightBinding:
    slot: int
    light: Light
    position: tuple[float, float, float, float]
    diffuse: Color
    attenuation: tuple[float, float, float] = (1.0, 0.0, 0.0)


@dataclass
class LightPlan:
    ambient: Color
    bindings: list[LightBinding]


class LightRig:
    def __init__(self, max_lights: int = MAX_LIGHTS):
        self.max_lights = max_lights
        self._warned = False

    def plan(self, root: Object3D) -> LightPlan:
        ambient = [0.0, 0.0, 0.0]
        bindings: list[LightBinding] = []
        for node in root.traverse():
            if not isinstance(node, Light) or not _visible_in(node, root):
                continue
            if isinstance(node, AmbientLight):
                for i, c in enumerate(node.radiance):
                    ambient[i] += c
                continue
            if isinstance(node, HemisphereLight):
                for i, c in enumerate(node.ground_color):
                    ambient[i] += c * node.intensity * 0.5
            if len(bindings) >= self.max_lights:
                if not self._warned:
                    log.warning("More than %d lights in scene; extra lights ignored", self.max_lights)
                    self._warned = True
                continue
            p = node.world_position()
            if isinstance(node, PointLight):
                position = (p.x, p.y, p.z, 1.0)
                attenuation = node.attenuation()
            else:
                position = (p.x, p.y, p.z, 0.0)
                attenuation = (1.0, 0.0, 0.0)
            bindings.append(
                LightBinding(
                    slot=len(bindings),
                    light=node,
                    position=position,
                    diffuse=node.radiance,
                    attenuation=attenuation,
                )
            )
        return LightPlan(ambient=(ambient[0], ambient[1], ambient[2]), bindings=bindings)

    def apply(self, root: Object3D, plan: Optional[LightPlan] = None) -> LightPlan:  # pragma: no cover - visual
        """Bind lights; call with the view matrix loaded so positions are world space."""
        plan = plan or self.plan(root)
        glLightModelfv(GL_LIGHT_MODEL_AMBIENT, (*plan.ambient, 1.0))
        for b in plan.bindings:
            gl_light = GL_LIGHT0 + b.slot
            glEnable(gl_light)
            glLightfv(gl_light, GL_POSITION, b.position)
            glLightfv(gl_light, GL_DIFFUSE, (*b.diffuse, 1.0))
            glLightfv(gl_light, GL_SPECULAR, (*b.diffuse, 1.0))
            glLightfv(gl_light, GL_AMBIENT, (0.0, 0.0, 0.0, 1.0))
            c, l, q = b.attenuation
            glLightf(gl_light, GL_CONSTANT_ATTENUATION, c)
            glLightf(gl_light, GL_LINEAR_ATTENUATION, l)
            glLightf(gl_light, GL_QUADRATIC_ATTENUATION, q)
        for slot in range(len(plan.bindings), self.max_lights):
            glDisable(GL_LIGHT0 + slot)
        return plan


def _visible_in(node: Object3D, root: Object3D) -> bool:
    while node is not None:
        if not node.visible:
            return False
        if node is root:
            return True
        node = node.parent
    return True

"""Surface materials for the fixed-function pipeline.

Three shading models are supported: ``basic`` (unlit, flat color), ``lambert``
(diffuse only) and ``phong`` (diffuse + specular highlight). Color comes from
the per-vertex color array (GL_COLOR_MATERIAL), so ``apply()`` only needs to set
lighting, specular, emission, blending and fog state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from OpenGL.GL import (
    glEnable,
    glDisable,
    glBlendFunc,
    glDepthMask,
    glColorMaterial,
    glMaterialfv,
    glMaterialf,
    glLightModeli,
    glCullFace,
    GL_LIGHTING,
    GL_COLOR_MATERIAL,
    GL_FRONT_AND_BACK,
    GL_FRONT,
    GL_CULL_FACE,
    GL_AMBIENT_AND_DIFFUSE,
    GL_SPECULAR,
    GL_EMISSION,
    GL_SHININESS,
    GL_LIGHT_MODEL_TWO_SIDE,
    GL_BLEND,
    GL_SRC_ALPHA,
    GL_ONE_MINUS_SRC_ALPHA,
    GL_FOG,
    GL_TRUE,
    GL_FALSE,
)

Color = tuple[float, float, float]

SHADING_MODELS = ("basic", "lambert", "phong")


def hex_to_rgb(value: int) -> Color:
    """0xRRGGBB -> (r, g, b) floats in [0, 1]."""
    return (
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


def lerp_color(a: Color, b: Color, t: float) -> Color:
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


@dataclass
class Material:
    color: Color = (1.0, 1.0, 1.0)
    shading: str = "lambert"
    opacity: float = 1.0
    transparent: bool = False
    emissive: Color = (0.0, 0.0, 0.0)
    emissive_intensity: float = 1.0
    shininess: float = 30.0
    double_sided: bool = False
    back_side: bool = False
    fog: bool = True
    vertex_colors: bool = False
    specular: Color = field(default=(0.25, 0.25, 0.25))

    def __post_init__(self) -> None:
        if self.shading not in SHADING_MODELS:
            raise ValueError(f"unknown shading model {self.shading!r}")

    @property
    def is_transparent(self) -> bool:
        return self.transparent and self.opacity < 1.0

    @property
    def cull_face(self):
        """GL face culled while this material is bound, or None."""
        # inward-facing shells (the sky) are seen from inside
        return GL_FRONT if self.back_side else None

    # ------------------------------------------------------------------
    def apply(self) -> None:  # pragma: no cover - visual
        if self.cull_face is not None:
            glEnable(GL_CULL_FACE)
            glCullFace(self.cull_face)

        if self.shading == "basic":
            glDisable(GL_LIGHTING)
        else:
            glEnable(GL_LIGHTING)
            glEnable(GL_COLOR_MATERIAL)
            glColorMaterial(GL_FRONT_AND_BACK, GL_AMBIENT_AND_DIFFUSE)
            if self.shading == "phong":
                glMaterialfv(GL_FRONT_AND_BACK, GL_SPECULAR, (*self.specular, 1.0))
                glMaterialf(GL_FRONT_AND_BACK, GL_SHININESS, min(128.0, float(self.shininess)))
            else:
                glMaterialfv(GL_FRONT_AND_BACK, GL_SPECULAR, (0.0, 0.0, 0.0, 1.0))
            k = self.emissive_intensity
            glMaterialfv(
                GL_FRONT_AND_BACK,
                GL_EMISSION,
                (self.emissive[0] * k, self.emissive[1] * k, self.emissive[2] * k, 1.0),
            )
            two_side = self.double_sided or self.back_side
            glLightModeli(GL_LIGHT_MODEL_TWO_SIDE, GL_TRUE if two_side else GL_FALSE)

        if not self.fog:
            glDisable(GL_FOG)

        if self.is_transparent:
            glEnable(GL_BLEND)
            glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
            glDepthMask(GL_FALSE)

    def restore(self, *, fog_enabled: bool = True) -> None:  # pragma: no cover - visual
        if self.shading != "basic":
            glMaterialfv(GL_FRONT_AND_BACK, GL_EMISSION, (0.0, 0.0, 0.0, 1.0))
        glEnable(GL_LIGHTING)
        if not self.fog and fog_enabled:
            glEnable(GL_FOG)
        if self.is_transparent:
            glDepthMask(GL_TRUE)
            glDisable(GL_BLEND)
        if self.cull_face is not None:
            glDisable(GL_CULL_FACE)


def basic_material(color: int, **kwargs) -> Material:
    return Material(color=hex_to_rgb(color), shading="basic", **kwargs)


def lambert_material(color: int, **kwargs) -> Material:
    return Material(color=hex_to_rgb(color), shading="lambert", **kwargs)


def phong_material(color: int, **kwargs) -> Material:
    return Material(color=hex_to_rgb(color), shading="phong", **kwargs)

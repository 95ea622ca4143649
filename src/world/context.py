"""Scene context and world population.

Everything the builders and the frame updater share lives on a
``SceneContext`` that is passed around explicitly: the RNG, the scene root,
the animator and, once the paper texture has loaded, the effect composer.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Optional

from config import (
    AMBIENT_COLOR,
    AMBIENT_INTENSITY,
    CLOUD_SPIN,
    HEMI_GROUND_COLOR,
    HEMI_INTENSITY,
    HEMI_SKY_COLOR,
    SUN_COLOR,
    SUN_INTENSITY,
    SUN_POSITION,
)
from core.light import AmbientLight, DirectionalLight, HemisphereLight
from core.object3d import Group, Object3D
from world.animation import Animator, FloatingElement
from world.objects import (
    Altar,
    build_cloud_ring,
    build_ground,
    build_sky,
    build_temple,
    place_altars,
    scatter_mushrooms,
    scatter_trees,
)

log = logging.getLogger(__name__)


@dataclass
class SceneContext:
    rng: random.Random = field(default_factory=random.Random)
    root: Object3D = field(default_factory=lambda: Group(name="scene"))
    animator: Animator = field(default_factory=Animator)
    composer: Optional[Any] = None
    altars: list[Altar] = field(default_factory=list)

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "SceneContext":
        return cls(rng=random.Random(seed))


def add_lighting(ctx: SceneContext) -> None:
    ctx.root.add(
        AmbientLight(AMBIENT_COLOR, AMBIENT_INTENSITY, name="ambient"),
        DirectionalLight(SUN_COLOR, SUN_INTENSITY, SUN_POSITION, name="sun"),
        HemisphereLight(HEMI_SKY_COLOR, HEMI_GROUND_COLOR, HEMI_INTENSITY, name="hemisphere"),
    )


def populate_world(ctx: SceneContext) -> SceneContext:
    """Build the whole scene into ``ctx.root`` and register its animations.

    Pure scene-graph construction: no OpenGL context is needed until the
    meshes are first drawn.
    """
    add_lighting(ctx)
    ctx.root.add(build_sky())
    ctx.root.add(build_ground())

    clouds = build_cloud_ring(ctx.rng)
    ctx.root.add(clouds)
    ctx.animator.add_spinner(clouds, CLOUD_SPIN)

    ctx.root.add(build_temple())
    ctx.root.add(scatter_trees(ctx.rng))
    ctx.root.add(scatter_mushrooms(ctx.rng))

    altars = Group(name="altars")
    for altar in place_altars(ctx.rng):
        altars.add(altar)
        ctx.altars.append(altar)
        ctx.animator.add_floating(FloatingElement(altar.crystal, altar.crystal_state, follower=altar.crystal_light))
    ctx.root.add(altars)

    log.info(
        "Scene populated: %d clouds, %d trees, %d mushrooms, %d altars",
        len(clouds.children),
        len(ctx.root.find("trees").children),
        len(ctx.root.find("mushrooms").children),
        len(ctx.altars),
    )
    return ctx

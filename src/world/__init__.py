"""World package: re-export common symbols for simpler imports.

Callers can import public types from `world` directly, e.g.:

    from world import WorldScene, SceneContext, populate_world

The implementation files remain under `world/*.py`.
"""

from .context import SceneContext, populate_world
from .animation import Animator, CrystalState, FloatingElement, Spinner
from .placement import PlacementSpec, sample_placements, ring_placements, fixed_placements
from .worldscene import WorldScene

__all__ = [
    "SceneContext",
    "populate_world",
    "Animator",
    "CrystalState",
    "FloatingElement",
    "Spinner",
    "PlacementSpec",
    "sample_placements",
    "ring_placements",
    "fixed_placements",
    "WorldScene",
]

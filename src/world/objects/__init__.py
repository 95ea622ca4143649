"""World objects subpackage.

Parametric builders for everything placed in the scene, re-exported so
callers can import them from a single location::

    from world.objects import build_temple, build_mushroom

Each builder returns a composite node owning its primitive meshes; builders
that need randomness take an explicit ``random.Random``.
"""

from .ground import GroundDiscBuilder, build_ground
from .sky import build_sky
from .clouds import build_cloud, build_cloud_ring
from .temple import build_temple, build_vesica_door, build_stained_glass_window
from .trees import build_deciduous_tree, build_pine_tree, scatter_trees
from .mushroom import build_mushroom, scatter_mushrooms
from .altar import Altar, build_altar, build_crystal, place_altars

__all__ = [
    "GroundDiscBuilder",
    "build_ground",
    "build_sky",
    "build_cloud",
    "build_cloud_ring",
    "build_temple",
    "build_vesica_door",
    "build_stained_glass_window",
    "build_deciduous_tree",
    "build_pine_tree",
    "scatter_trees",
    "build_mushroom",
    "scatter_mushrooms",
    "Altar",
    "build_altar",
    "build_crystal",
    "place_altars",
]

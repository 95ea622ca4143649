import math
import random

import numpy as np
import pytest

from config import ALTAR_POSITIONS, CRYSTAL_PALETTE
from core.light import PointLight
from core.material import hex_to_rgb
from core.mesh import Mesh
from world.objects import (
    build_altar,
    build_cloud,
    build_cloud_ring,
    build_deciduous_tree,
    build_mushroom,
    build_pine_tree,
    build_stained_glass_window,
    build_temple,
    build_vesica_door,
    place_altars,
    scatter_mushrooms,
    scatter_trees,
)
from world.objects.altar import COLUMN
from world.objects.trees import ConeLayer, FoliageBlob, TrunkSpec


def horizontal_distance(node):
    return math.hypot(node.position.x, node.position.z)


# -- mushrooms ---------------------------------------------------------------
def test_twenty_mushrooms_each_with_stem_cap_and_five_spots():
    patch = scatter_mushrooms(random.Random(42), 20)
    assert len(patch.children) == 20
    for mushroom in patch.children:
        assert len(mushroom.find_all("stem")) == 1
        assert len(mushroom.find_all("cap")) == 1
        assert len(mushroom.find_all("spot")) == 5
        assert 8.0 <= horizontal_distance(mushroom) <= 33.0
        assert 0.3 <= mushroom.scale.x <= 0.7
        assert 0.0 <= mushroom.rotation.y < 2 * math.pi


def test_mushroom_spots_sit_on_cap_facing_up(rng):
    mushroom = build_mushroom(rng)
    for spot in mushroom.find_all("spot"):
        r = math.hypot(spot.position.x, spot.position.z)
        assert r <= 0.4
        assert spot.position.y == pytest.approx(1.0 + math.sqrt(0.36 - r * r) + 0.01)
        normal = spot.world_matrix()[:3, 2]
        assert normal[1] > 0.95


def test_mushroom_spot_count_is_configurable(rng):
    assert len(build_mushroom(rng, spot_count=0).find_all("spot")) == 0


def test_same_seed_same_mushrooms():
    a = scatter_mushrooms(random.Random(5), 4)
    b = scatter_mushrooms(random.Random(5), 4)
    for ma, mb in zip(a.children, b.children):
        assert ma.position == mb.position
        assert [s.position for s in ma.find_all("spot")] == [s.position for s in mb.find_all("spot")]


# -- trees -------------------------------------------------------------------
def test_deciduous_tree_parts():
    tree = build_deciduous_tree()
    assert len(tree.find_all("trunk")) == 1
    assert len(tree.find_all("foliage")) == 4
    trunk = tree.find("trunk")
    lo, _ = trunk.geometry.bounds()
    assert trunk.position.y + lo[1] == pytest.approx(0.0)


def test_pine_tree_layers_narrow_upwards():
    tree = build_pine_tree()
    cones = tree.find_all("foliage")
    assert len(cones) == 4
    heights = [c.position.y for c in cones]
    widths = [c.geometry.bounds()[1][0] for c in cones]
    assert heights == sorted(heights)
    assert widths == sorted(widths, reverse=True)


def test_tree_builders_take_parameters():
    tree = build_deciduous_tree(TrunkSpec(0.1, 0.2, 2.0, 0x000000), [FoliageBlob(0, 3, 0, 1)], 0x00FF00)
    assert len(tree.find_all("foliage")) == 1
    assert tree.find("trunk").position.y == pytest.approx(1.0)
    pine = build_pine_tree(layers=[ConeLayer(3.0, 2.0, 2.5)])
    assert len(pine.find_all("foliage")) == 1


def test_tree_scatter_counts_and_ranges(rng):
    forest = scatter_trees(rng)
    deciduous = [t for t in forest.children if t.name == "deciduous_tree"]
    pines = [t for t in forest.children if t.name == "pine_tree"]
    assert len(deciduous) == 8
    assert len(pines) == 6
    assert all(15.0 <= horizontal_distance(t) <= 30.0 for t in deciduous)
    assert all(18.0 <= horizontal_distance(t) <= 30.0 for t in pines)
    assert all(0.7 <= t.scale.x <= 1.3 for t in pines)


# -- clouds ------------------------------------------------------------------
def test_cloud_is_translucent_puffs(rng):
    cloud = build_cloud(rng)
    assert len(cloud.children) == 5
    for puff in cloud.children:
        assert puff.material.is_transparent
        assert puff.material.opacity == pytest.approx(0.7)
        assert abs(puff.position.x) <= 1.5
        assert abs(puff.position.y) <= 0.5
        assert abs(puff.position.z) <= 1.0
        assert 0.8 <= puff.scale.x <= 1.2


def test_cloud_ring(rng):
    ring = build_cloud_ring(rng)
    assert len(ring.children) == 15
    for cloud in ring.children:
        assert 30.0 <= horizontal_distance(cloud) <= 70.0
        assert 15.0 <= cloud.position.y <= 30.0


# -- temple ------------------------------------------------------------------
def test_temple_structure():
    temple = build_temple()
    assert temple.find("temple_base").position.y == 4
    assert temple.find("dome").position.y == 8
    door = temple.find("door")
    assert (door.position.x, door.position.y, door.position.z) == (0, 2.5, 6.5)
    assert len(temple.find_all("window")) == 6


def test_windows_face_the_temple_axis():
    temple = build_temple()
    for window in temple.find_all("window"):
        world = window.world_matrix()
        position = world[:3, 3]
        to_axis = np.array((0.0, position[1], 0.0)) - position
        to_axis /= np.linalg.norm(to_axis)
        np.testing.assert_allclose(world[:3, 2], to_axis, atol=1e-9)


def test_window_rings():
    temple = build_temple()
    ground = [w for w in temple.find_all("window") if w.position.y == 5.0]
    dome = [w for w in temple.find_all("window") if w.position.y == 9.0]
    assert len(ground) == len(dome) == 3
    assert all(horizontal_distance(w) == pytest.approx(6.3) for w in ground)
    assert all(horizontal_distance(w) == pytest.approx(4.5) for w in dome)


def test_stained_glass_window():
    window = build_stained_glass_window(0.8, 0x3498DB)
    glass = window.find("glass")
    assert glass.material.is_transparent
    assert glass.material.double_sided
    assert glass.material.emissive == hex_to_rgb(0x3498DB)
    assert glass.material.emissive_intensity == pytest.approx(0.3)
    assert window.find("window_frame") is not None


def test_vesica_door():
    door = build_vesica_door()
    assert isinstance(door.find("door_panel"), Mesh)
    assert door.find("door_frame").position.z == pytest.approx(0.15)
    # ring opens along +Z, the same way the door faces
    assert door.find("door_frame").rotation.y == pytest.approx(0.0)


# -- altars ------------------------------------------------------------------
def test_altar_stack_crystal_and_light(rng):
    altar = build_altar(rng)
    assert len(altar.find_all("base_tier")) == 3
    assert len(altar.find_all("top_tier")) == 3
    top = 0.9 + 4.0 + 0.7
    assert altar.crystal.position.y == pytest.approx(top + 1.5)
    assert altar.crystal_light.position.y == pytest.approx(top + 1.5)
    assert altar.crystal_state.base_height == pytest.approx(top + 1.5)
    assert 0.0 <= altar.crystal_state.phase_offset < 2 * math.pi
    assert altar.crystal_color in CRYSTAL_PALETTE

    light = altar.crystal_light
    assert isinstance(light, PointLight)
    assert light.color == hex_to_rgb(altar.crystal_color)
    assert (light.intensity, light.distance) == (1.5, 5.0)

    gem = altar.crystal.find("crystal_gem")
    assert gem.material.emissive == hex_to_rgb(altar.crystal_color)
    assert gem.material.opacity == pytest.approx(0.9)


def test_crystal_colours_drawn_from_palette():
    seen = {build_altar(random.Random(seed)).crystal_color for seed in range(200)}
    assert seen == set(CRYSTAL_PALETTE)


def test_crystal_colour_uses_given_rng(sequence_random):
    altar = build_altar(sequence_random([0.0, 0.5]))
    assert altar.crystal_color == CRYSTAL_PALETTE[0]
    assert altar.crystal_state.phase_offset == pytest.approx(math.pi)


def test_column_profile():
    profile = COLUMN.profile()
    assert len(profile) == 14
    assert profile[0] == pytest.approx((0.6, 0.0))
    assert profile[-1] == pytest.approx((0.6, 4.0))
    shaft = profile[3:11]
    assert shaft[0][0] == pytest.approx(0.5)
    assert max(r for r, _ in shaft) <= 0.58 + 1e-9


def test_altars_at_fixed_positions(rng):
    altars = place_altars(rng)
    assert len(altars) == len(ALTAR_POSITIONS)
    for altar, (angle, distance) in zip(altars, ALTAR_POSITIONS):
        assert altar.position.x == pytest.approx(math.cos(angle) * distance)
        assert altar.position.z == pytest.approx(math.sin(angle) * distance)

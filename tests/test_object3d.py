import math

import numpy as np
import pytest

from core.geometry import box
from core.material import lambert_material
from core.mesh import Mesh
from core.object3d import Group, Object3D, euler_xyz_from_matrix, rotation_matrix


def test_add_reparents_with_single_owner():
    a, b = Group(name="a"), Group(name="b")
    child = Object3D(name="child")
    a.add(child)
    b.add(child)
    assert child.parent is b
    assert child not in a.children
    assert b.children == [child]


def test_adding_an_ancestor_is_rejected():
    root = Group()
    mid = Group()
    leaf = Group()
    root.add(mid)
    mid.add(leaf)
    with pytest.raises(ValueError):
        leaf.add(root)
    with pytest.raises(ValueError):
        mid.add(mid)


def test_traverse_and_find():
    root = Group(name="root")
    stem = Object3D(name="stem")
    spots = [Object3D(name="spot") for _ in range(3)]
    root.add(stem, *spots)
    assert [n.name for n in root.traverse()] == ["root", "stem", "spot", "spot", "spot"]
    assert root.find("stem") is stem
    assert root.find("missing") is None
    assert len(root.find_all("spot")) == 3


def test_world_position_composes_parent_transform():
    parent = Group(position=(1.0, 0.0, 0.0))
    parent.set_scalar_scale(2.0)
    child = Object3D(position=(1.0, 0.0, 0.0))
    parent.add(child)
    p = child.world_position()
    assert (p.x, p.y, p.z) == pytest.approx((3.0, 0.0, 0.0))


def test_parent_yaw_rotates_child():
    parent = Group(rotation=(0.0, math.pi / 2, 0.0))
    child = Object3D(position=(1.0, 0.0, 0.0))
    parent.add(child)
    p = child.world_position()
    assert (p.x, p.y, p.z) == pytest.approx((0.0, 0.0, -1.0), abs=1e-9)


def test_euler_round_trip():
    angles = (0.3, -0.7, 1.1)
    assert euler_xyz_from_matrix(rotation_matrix(*angles)) == pytest.approx(angles)


@pytest.mark.parametrize("target", [(5.0, 0.0, 0.0), (0.0, 3.0, -4.0), (-1.0, -2.0, 2.0)])
def test_look_at_points_positive_z(target):
    node = Object3D(position=(0.0, 0.0, 0.0))
    node.look_at(target)
    z_axis = node.world_matrix()[:3, 2]
    expected = np.array(target) / np.linalg.norm(target)
    np.testing.assert_allclose(z_axis, expected, atol=1e-9)


def test_look_at_under_translated_parent():
    parent = Group(position=(10.0, 0.0, 0.0))
    node = Object3D(position=(0.0, 5.0, 3.0))
    parent.add(node)
    node.look_at((10.0, 5.0, 0.0))
    z_axis = node.world_matrix()[:3, 2]
    np.testing.assert_allclose(z_axis, (0.0, 0.0, -1.0), atol=1e-9)


def test_mesh_buffer_is_lazy_and_baked():
    mesh = Mesh(box(), lambert_material(0xFF0000, opacity=0.5, transparent=True))
    assert mesh._buffer is None
    buf = mesh.buffer
    assert not buf.uploaded
    assert buf.vertex_count == 36
    np.testing.assert_allclose(buf.vertex_data[0, 6:10], (1.0, 0.0, 0.0, 0.5))
    mesh.invalidate()
    assert mesh._buffer is None

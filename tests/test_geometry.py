import math

import numpy as np
import pytest

from core.geometry import (
    FLOATS_PER_VERTEX,
    box,
    circle,
    compute_vertex_normals,
    cone,
    cylinder,
    extrude,
    lathe,
    octahedron,
    polar_disc,
    signed_area,
    sphere,
    torus,
    triangulate_polygon,
    vesica_piscis,
)


def assert_well_formed(g):
    assert np.all(np.isfinite(g.positions))
    assert g.indices.max() < g.vertex_count
    assert g.indices.shape[0] % 3 == 0
    lengths = np.linalg.norm(g.normals, axis=1)
    np.testing.assert_allclose(lengths, 1.0, atol=1e-4)


@pytest.mark.parametrize(
    "geometry",
    [
        sphere(2.0, 16, 8),
        sphere(5, 32, 16, 0.0, math.tau, 0.0, math.pi / 2),
        cylinder(6, 6.5, 8, 32),
        cone(2.0, 2.5, 8),
        box(2.5, 0.3, 2.5),
        circle(0.1, 8),
        torus(1.8, 0.15, 8, 32),
        octahedron(0.5),
        lathe([(0.6, 0.0), (0.5, 1.0), (0.6, 2.0)], 16),
        extrude(vesica_piscis(1.5), depth=0.3, bevel_thickness=0.1, bevel_size=0.1, bevel_segments=3),
    ],
)
def test_primitives_are_well_formed(geometry):
    assert_well_formed(geometry)


def test_sphere_vertices_lie_on_radius():
    g = sphere(3.0, 12, 6)
    np.testing.assert_allclose(np.linalg.norm(g.positions, axis=1), 3.0, atol=1e-4)
    assert g.vertex_count == 13 * 7


def test_hemisphere_stays_above_equator():
    g = sphere(0.6, 16, 16, 0.0, math.tau, 0.0, math.pi / 2)
    lo, hi = g.bounds()
    assert lo[1] >= -1e-6
    assert hi[1] == pytest.approx(0.6, abs=1e-5)


def test_cylinder_is_centred_on_origin():
    lo, hi = cylinder(0.3, 0.5, 4.0, 8).bounds()
    assert lo[1] == pytest.approx(-2.0)
    assert hi[1] == pytest.approx(2.0)
    assert hi[0] == pytest.approx(0.5, abs=1e-5)


def test_cone_has_no_top_cap():
    g = cone(1.0, 2.0, 8)
    # side grid plus the bottom cap only
    assert g.vertex_count == 2 * 9 + 1 + 9


def test_box_faces_point_outward():
    g = box(2.0, 1.0, 3.0)
    assert g.vertex_count == 24
    assert g.triangle_count == 12
    assert np.all(np.sum(g.normals * g.positions, axis=1) > 0)


def test_octahedron_faces_point_outward():
    g = octahedron(0.5)
    assert g.triangle_count == 8
    assert np.all(np.sum(g.normals * g.positions, axis=1) > 0)


def test_circle_faces_positive_z():
    g = circle(1.0, 8)
    np.testing.assert_allclose(g.normals, np.tile((0.0, 0.0, 1.0), (g.vertex_count, 1)))
    assert g.triangle_count == 8


def test_torus_lies_in_xy_plane():
    lo, hi = torus(1.8, 0.15, 8, 32).bounds()
    assert hi[0] == pytest.approx(1.95, abs=1e-4)
    assert hi[2] == pytest.approx(0.15, abs=1e-3)
    assert lo[2] == pytest.approx(-0.15, abs=1e-3)


def test_lathe_seam_normals_match():
    profile = [(0.6, 0.0), (0.5, 1.0), (0.6, 2.0)]
    g = lathe(profile, 16)
    n = len(profile)
    np.testing.assert_allclose(g.normals[:n], g.normals[16 * n:], atol=1e-6)


def test_lathe_needs_two_points():
    with pytest.raises(ValueError):
        lathe([(1.0, 0.0)], 8)


@pytest.mark.parametrize("factory", [lambda: sphere(1, 2, 8), lambda: cylinder(1, 1, 1, 2), lambda: circle(1, 2)])
def test_too_few_segments_rejected(factory):
    with pytest.raises(ValueError):
        factory()


def test_vesica_outline_is_ccw_lens():
    pts = vesica_piscis(1.5, 24)
    assert signed_area(pts) > 0
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    assert max(xs) == pytest.approx(0.75, abs=1e-9)
    assert max(abs(y) for y in ys) == pytest.approx(1.5 * math.sqrt(3) / 2, abs=1e-9)


def test_triangulate_concave_polygon():
    l_shape = [(0, 0), (60, 0), (60, 20), (20, 20), (20, 80), (0, 80)]
    tris = triangulate_polygon(l_shape)
    assert len(tris) == len(l_shape) - 2
    area = sum(abs(signed_area([l_shape[a], l_shape[b], l_shape[c]])) for a, b, c in tris)
    assert area == pytest.approx(signed_area(l_shape))


def test_extrude_spans_depth_plus_bevel():
    g = extrude(vesica_piscis(1.5), depth=0.3, bevel_thickness=0.1, bevel_size=0.1, bevel_segments=3)
    lo, hi = g.bounds()
    assert lo[2] == pytest.approx(-0.1, abs=1e-6)
    assert hi[2] == pytest.approx(0.4, abs=1e-6)
    assert hi[0] > 0.75


def test_extrude_rejects_degenerate_outline():
    with pytest.raises(ValueError):
        extrude([(0, 0), (1, 0)], depth=1.0)


def test_compute_vertex_normals_for_flat_quad():
    positions = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
    normals = compute_vertex_normals(positions, [0, 1, 2, 0, 2, 3])
    np.testing.assert_allclose(normals, np.tile((0.0, 0.0, 1.0), (4, 1)), atol=1e-6)


def test_polar_disc_counts():
    points, indices = polar_disc(40.0, 64, 24)
    assert points.shape == (1 + 24 * 64, 2)
    assert len(indices) // 3 == 64 + 2 * 64 * 23
    assert np.linalg.norm(points, axis=1).max() == pytest.approx(40.0)


def test_vertex_array_layout():
    g = box()
    data = g.to_vertex_array((1.0, 0.5, 0.0), opacity=0.7)
    assert data.shape == (36, FLOATS_PER_VERTEX)
    assert data.dtype == np.float32
    np.testing.assert_allclose(data[:, 6:9], np.tile((1.0, 0.5, 0.0), (36, 1)))
    np.testing.assert_allclose(data[:, 9], 0.7, rtol=1e-6)


def test_vertex_colors_are_tinted():
    g = circle(1.0, 4)
    g.colors = np.full((g.vertex_count, 3), 0.5, dtype=np.float32)
    data = g.to_vertex_array((1.0, 0.0, 1.0))
    np.testing.assert_allclose(data[:, 6:9], np.tile((0.5, 0.0, 0.5), (len(data), 1)))


def test_translated_copies():
    g = box()
    moved = g.translated((0.0, 2.0, 0.0))
    assert moved.bounds()[0][1] == pytest.approx(1.5)
    assert g.bounds()[0][1] == pytest.approx(-0.5)

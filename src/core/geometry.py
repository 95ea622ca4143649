"""Primitive geometry generated as numpy arrays.

Every constructor returns an indexed :class:`Geometry` and never touches
OpenGL, so composite meshes can be built (and inspected) without a context.
Parameter conventions follow the usual scene-graph primitives: spheres and
cylinders are centred on the origin, circles and tori lie in the XY plane
facing +Z, lathes revolve an (r, y) profile around the Y axis.

Upload happens later through ``Geometry.to_vertex_array()`` which expands the
indexed data into the interleaved ``[x y z nx ny nz r g b a]`` rows that
``BatchedMesh`` streams into a VBO.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

FLOATS_PER_VERTEX = 10
TWO_PI = math.pi * 2.0


@dataclass
class Geometry:
    positions: np.ndarray
    indices: np.ndarray
    normals: Optional[np.ndarray] = None
    colors: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.positions = np.asarray(self.positions, dtype=np.float32).reshape(-1, 3)
        self.indices = np.asarray(self.indices, dtype=np.uint32).reshape(-1)
        if self.normals is None:
            self.normals = compute_vertex_normals(self.positions, self.indices)
        else:
            self.normals = np.asarray(self.normals, dtype=np.float32).reshape(-1, 3)
        if self.colors is not None:
            self.colors = np.asarray(self.colors, dtype=np.float32).reshape(-1, 3)

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0] // 3)

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Axis-aligned (min, max) corners of the geometry."""
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def translated(self, offset: Sequence[float]) -> "Geometry":
        return Geometry(
            positions=self.positions + np.asarray(offset, dtype=np.float32),
            indices=self.indices.copy(),
            normals=self.normals.copy(),
            colors=None if self.colors is None else self.colors.copy(),
        )

    def to_vertex_array(
        self, color: Sequence[float] = (1.0, 1.0, 1.0), opacity: float = 1.0
    ) -> np.ndarray:
        """Expand into interleaved float32 rows ready for ``glDrawArrays``.

        Per-vertex colors (when present) are modulated by ``color``.
        """
        idx = self.indices
        pos = self.positions[idx]
        nrm = self.normals[idx]
        tint = np.asarray(color, dtype=np.float32).reshape(1, 3)
        if self.colors is not None:
            col = self.colors[idx] * tint
        else:
            col = np.repeat(tint, len(idx), axis=0)
        alpha = np.full((len(idx), 1), float(opacity), dtype=np.float32)
        return np.hstack([pos, nrm, col, alpha]).astype(np.float32)


def compute_vertex_normals(positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Area-weighted smooth normals; vertices shared by faces get blended normals."""
    positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    tris = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    normals = np.zeros_like(positions)
    if len(tris):
        v0 = positions[tris[:, 0]]
        v1 = positions[tris[:, 1]]
        v2 = positions[tris[:, 2]]
        face = np.cross(v1 - v0, v2 - v0)
        for k in range(3):
            np.add.at(normals, tris[:, k], face)
    return _normalize_rows(normals).astype(np.float32)


def _normalize_rows(vectors: np.ndarray, fallback=(0.0, 1.0, 0.0)) -> np.ndarray:
    lengths = np.linalg.norm(vectors, axis=1, keepdims=True)
    out = np.where(lengths > 1e-12, vectors / np.maximum(lengths, 1e-12), fallback)
    return out


def _grid_indices(rows: int, cols: int, *, skip_first: bool = False, skip_last: bool = False) -> list[int]:
    """Quad-strip indices for a (rows+1) x (cols+1) vertex grid."""
    stride = cols + 1
    out: list[int] = []
    for iy in range(rows):
        for ix in range(cols):
            a = iy * stride + ix + 1
            b = iy * stride + ix
            c = (iy + 1) * stride + ix
            d = (iy + 1) * stride + ix + 1
            if not (skip_first and iy == 0):
                out.extend((a, b, d))
            if not (skip_last and iy == rows - 1):
                out.extend((b, c, d))
    return out


def _require_segments(value: int, minimum: int, label: str) -> int:
    value = int(value)
    if value < minimum:
        raise ValueError(f"{label} must be >= {minimum}, got {value}")
    return value


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------
def sphere(
    radius: float = 1.0,
    width_segments: int = 32,
    height_segments: int = 16,
    phi_start: float = 0.0,
    phi_length: float = TWO_PI,
    theta_start: float = 0.0,
    theta_length: float = math.pi,
) -> Geometry:
    """UV sphere. ``theta_length=pi/2`` gives an upper hemisphere (domes, caps)."""
    ws = _require_segments(width_segments, 3, "width_segments")
    hs = _require_segments(height_segments, 2, "height_segments")
    phi = phi_start + (np.arange(ws + 1) / ws) * phi_length
    theta = theta_start + (np.arange(hs + 1) / hs) * theta_length
    t, p = np.meshgrid(theta, phi, indexing="ij")
    x = -radius * np.cos(p) * np.sin(t)
    y = radius * np.cos(t)
    z = radius * np.sin(p) * np.sin(t)
    positions = np.stack([x, y, z], axis=-1).reshape(-1, 3)
    theta_end = min(theta_start + theta_length, math.pi)
    indices = _grid_indices(
        hs,
        ws,
        skip_first=theta_start <= 0.0,
        skip_last=theta_end >= math.pi,
    )
    normals = _normalize_rows(positions / max(abs(radius), 1e-12))
    return Geometry(positions=positions, indices=indices, normals=normals)


def cylinder(
    radius_top: float = 1.0,
    radius_bottom: float = 1.0,
    height: float = 1.0,
    radial_segments: int = 32,
    height_segments: int = 1,
    open_ended: bool = False,
) -> Geometry:
    """Truncated cone centred on the origin, axis along Y."""
    rs = _require_segments(radial_segments, 3, "radial_segments")
    hs = _require_segments(height_segments, 1, "height_segments")
    half = height / 2.0
    slope = (radius_bottom - radius_top) / height if height else 0.0

    positions: list[tuple[float, float, float]] = []
    normals: list[tuple[float, float, float]] = []
    for iy in range(hs + 1):
        v = iy / hs
        r = v * (radius_bottom - radius_top) + radius_top
        for ix in range(rs + 1):
            theta = ix / rs * TWO_PI
            s, c = math.sin(theta), math.cos(theta)
            positions.append((r * s, -v * height + half, r * c))
            n = np.array((s, slope, c))
            n /= np.linalg.norm(n)
            normals.append(tuple(n))
    stride = rs + 1
    indices: list[int] = []
    for iy in range(hs):
        for ix in range(rs):
            a = iy * stride + ix
            b = (iy + 1) * stride + ix
            c = (iy + 1) * stride + ix + 1
            d = iy * stride + ix + 1
            indices.extend((a, b, d, b, c, d))

    if not open_ended:
        for top, r in ((True, radius_top), (False, radius_bottom)):
            if r <= 0:
                continue
            y = half if top else -half
            ny = 1.0 if top else -1.0
            center = len(positions)
            positions.append((0.0, y, 0.0))
            normals.append((0.0, ny, 0.0))
            first = len(positions)
            for ix in range(rs + 1):
                theta = ix / rs * TWO_PI
                positions.append((r * math.sin(theta), y, r * math.cos(theta)))
                normals.append((0.0, ny, 0.0))
            for ix in range(rs):
                if top:
                    indices.extend((center, first + ix, first + ix + 1))
                else:
                    indices.extend((center, first + ix + 1, first + ix))

    return Geometry(positions=positions, indices=indices, normals=normals)


def cone(radius: float = 1.0, height: float = 1.0, radial_segments: int = 32) -> Geometry:
    return cylinder(0.0, radius, height, radial_segments)


def box(width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> Geometry:
    """Axis-aligned box with flat-shaded faces (4 unshared vertices per face)."""
    hx, hy, hz = width / 2.0, height / 2.0, depth / 2.0
    # (normal, u axis, v axis) with u x v == normal so every face winds CCW
    faces = (
        ((1, 0, 0), (0, 0, -1), (0, 1, 0)),
        ((-1, 0, 0), (0, 0, 1), (0, 1, 0)),
        ((0, 1, 0), (1, 0, 0), (0, 0, -1)),
        ((0, -1, 0), (1, 0, 0), (0, 0, 1)),
        ((0, 0, 1), (1, 0, 0), (0, 1, 0)),
        ((0, 0, -1), (-1, 0, 0), (0, 1, 0)),
    )
    half = np.array((hx, hy, hz))
    positions = []
    normals = []
    indices = []
    for n, u, v in faces:
        n, u, v = (np.array(a, dtype=np.float64) for a in (n, u, v))
        c = n * half
        u = u * half
        v = v * half
        base = len(positions)
        positions.extend((c - u - v, c + u - v, c + u + v, c - u + v))
        normals.extend([n] * 4)
        indices.extend((base, base + 1, base + 2, base, base + 2, base + 3))
    return Geometry(positions=positions, indices=indices, normals=normals)


def circle(radius: float = 1.0, segments: int = 32) -> Geometry:
    """Flat disc in the XY plane facing +Z."""
    segs = _require_segments(segments, 3, "segments")
    angles = np.arange(segs + 1) / segs * TWO_PI
    rim = np.stack([radius * np.cos(angles), radius * np.sin(angles), np.zeros_like(angles)], axis=-1)
    positions = np.vstack([np.zeros((1, 3)), rim])
    indices = []
    for i in range(1, segs + 1):
        indices.extend((0, i, i + 1))
    normals = np.tile((0.0, 0.0, 1.0), (len(positions), 1))
    return Geometry(positions=positions, indices=indices, normals=normals)


def torus(
    radius: float = 1.0,
    tube: float = 0.4,
    radial_segments: int = 8,
    tubular_segments: int = 32,
    arc: float = TWO_PI,
) -> Geometry:
    """Ring in the XY plane; ``radius`` to the tube centre, ``tube`` its thickness."""
    rs = _require_segments(radial_segments, 3, "radial_segments")
    ts = _require_segments(tubular_segments, 3, "tubular_segments")
    v = np.arange(rs + 1) / rs * TWO_PI
    u = np.arange(ts + 1) / ts * arc
    vv, uu = np.meshgrid(v, u, indexing="ij")
    ring = radius + tube * np.cos(vv)
    positions = np.stack([ring * np.cos(uu), ring * np.sin(uu), tube * np.sin(vv)], axis=-1).reshape(-1, 3)
    centers = np.stack([radius * np.cos(uu), radius * np.sin(uu), np.zeros_like(uu)], axis=-1).reshape(-1, 3)
    normals = _normalize_rows(positions - centers)
    stride = ts + 1
    indices = []
    for j in range(1, rs + 1):
        for i in range(1, ts + 1):
            a = stride * j + i - 1
            b = stride * (j - 1) + i - 1
            c = stride * (j - 1) + i
            d = stride * j + i
            indices.extend((a, b, d, b, c, d))
    return Geometry(positions=positions, indices=indices, normals=normals)


def octahedron(radius: float = 1.0) -> Geometry:
    """Regular octahedron, flat shaded."""
    corners = np.array(
        [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)],
        dtype=np.float64,
    ) * radius
    faces = (0, 2, 4, 0, 4, 3, 0, 3, 5, 0, 5, 2, 1, 2, 5, 1, 5, 3, 1, 3, 4, 1, 4, 2)
    positions = corners[list(faces)]
    return Geometry(positions=positions, indices=np.arange(len(faces)))


def lathe(
    profile: Sequence[tuple[float, float]],
    segments: int = 12,
    phi_start: float = 0.0,
    phi_length: float = TWO_PI,
) -> Geometry:
    """Revolve an ``(r, y)`` profile (bottom to top) around the Y axis."""
    segs = _require_segments(segments, 3, "segments")
    pts = np.asarray(profile, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 2:
        raise ValueError("lathe profile needs at least 2 points")
    n = len(pts)
    positions = []
    for i in range(segs + 1):
        phi = phi_start + i / segs * phi_length
        s, c = math.sin(phi), math.cos(phi)
        for r, y in pts:
            positions.append((r * s, y, r * c))
    indices = []
    for i in range(segs):
        for j in range(n - 1):
            base = j + i * n
            a, b, c, d = base, base + n, base + n + 1, base + 1
            indices.extend((a, b, d, c, d, b))
    positions = np.asarray(positions, dtype=np.float64)
    normals = compute_vertex_normals(positions, indices)
    if abs(phi_length - TWO_PI) < 1e-9:
        # close the seam: first and last columns are the same points
        seam = _normalize_rows(normals[:n].astype(np.float64) + normals[segs * n:].astype(np.float64))
        normals[:n] = seam
        normals[segs * n:] = seam
    return Geometry(positions=positions, indices=indices, normals=normals)


# ---------------------------------------------------------------------------
# 2D outlines and extrusion
# ---------------------------------------------------------------------------
def signed_area(points: Sequence[tuple[float, float]]) -> float:
    a = 0.0
    for i in range(len(points)):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % len(points)]
        a += (x1 * y2) - (x2 * y1)
    return a * 0.5


def triangulate_polygon(points: Sequence[tuple[float, float]]) -> list[tuple[int, int, int]]:
    """Ear-clipping triangulation of a simple CCW polygon.

    Returns index triples into ``points``; concave outlines are supported.
    """

    def is_convex(a, b, c):
        return ((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])) > 0

    def point_in_tri(pt, a, b, c):
        v0x, v0y = c[0] - a[0], c[1] - a[1]
        v1x, v1y = b[0] - a[0], b[1] - a[1]
        v2x, v2y = pt[0] - a[0], pt[1] - a[1]
        dot00 = v0x * v0x + v0y * v0y
        dot01 = v0x * v1x + v0y * v1y
        dot02 = v0x * v2x + v0y * v2y
        dot11 = v1x * v1x + v1y * v1y
        dot12 = v1x * v2x + v1y * v2y
        denom = dot00 * dot11 - dot01 * dot01
        if denom == 0:
            return False
        inv = 1.0 / denom
        u = (dot11 * dot02 - dot01 * dot12) * inv
        v = (dot00 * dot12 - dot01 * dot02) * inv
        return (u >= 0) and (v >= 0) and (u + v <= 1)

    idxs = list(range(len(points)))
    triangles: list[tuple[int, int, int]] = []
    guard = 0
    while len(idxs) > 3 and guard < 10000:
        ear_found = False
        for i in range(len(idxs)):
            i_prev = idxs[(i - 1) % len(idxs)]
            i_curr = idxs[i]
            i_next = idxs[(i + 1) % len(idxs)]
            a, b, c = points[i_prev], points[i_curr], points[i_next]
            if not is_convex(a, b, c):
                continue
            if any(
                point_in_tri(points[j], a, b, c)
                for j in idxs
                if j not in (i_prev, i_curr, i_next)
            ):
                continue
            triangles.append((i_prev, i_curr, i_next))
            idxs.pop(i)
            ear_found = True
            break
        if not ear_found:
            # degenerate input; keep whatever was clipped so far
            break
        guard += 1
    if len(idxs) == 3:
        triangles.append((idxs[0], idxs[1], idxs[2]))
    return triangles


def vesica_piscis(radius: float = 1.5, segments: int = 24) -> list[tuple[float, float]]:
    """Lens outline formed by two circles of ``radius`` whose centres are ``radius`` apart.

    The lens is upright (pointed ends on the Y axis) and wound CCW.
    """
    per_arc = max(2, int(segments) // 2)
    pts: list[tuple[float, float]] = []
    # right-hand arc: centre (-r/2, 0), -60deg .. +60deg
    for i in range(per_arc):
        a = -math.pi / 3 + (2 * math.pi / 3) * i / per_arc
        pts.append((-radius / 2 + radius * math.cos(a), radius * math.sin(a)))
    # left-hand arc: centre (r/2, 0), 120deg .. 240deg
    for i in range(per_arc):
        a = 2 * math.pi / 3 + (2 * math.pi / 3) * i / per_arc
        pts.append((radius / 2 + radius * math.cos(a), radius * math.sin(a)))
    return pts


def _outline_normals(points: np.ndarray) -> np.ndarray:
    """Outward unit normals at each vertex of a CCW outline."""
    nxt = np.roll(points, -1, axis=0)
    edges = nxt - points
    edge_normals = np.stack([edges[:, 1], -edges[:, 0]], axis=-1)
    edge_normals /= np.maximum(np.linalg.norm(edge_normals, axis=1, keepdims=True), 1e-12)
    vertex_normals = edge_normals + np.roll(edge_normals, 1, axis=0)
    vertex_normals /= np.maximum(np.linalg.norm(vertex_normals, axis=1, keepdims=True), 1e-12)
    return vertex_normals


def extrude(
    outline: Sequence[tuple[float, float]],
    depth: float = 1.0,
    bevel_thickness: float = 0.0,
    bevel_size: float = 0.0,
    bevel_segments: int = 3,
) -> Geometry:
    """Extrude a 2D outline from z=0 to z=depth, with optional rounded bevel.

    With a bevel the caps sit at ``-bevel_thickness`` and
    ``depth + bevel_thickness`` on the original outline, while the side walls
    bulge out by ``bevel_size``.
    """
    pts = [tuple(map(float, p)) for p in outline]
    if len(pts) < 3:
        raise ValueError("An outline must have at least 3 points.")
    if signed_area(pts) < 0:
        pts.reverse()
    contour = np.asarray(pts, dtype=np.float64)
    outward = _outline_normals(contour)
    n = len(contour)

    # (z, outward offset) per ring, front cap to back cap
    rings: list[tuple[float, float]] = []
    bevel = bevel_segments > 0 and (bevel_thickness > 0 or bevel_size > 0)
    if bevel:
        for b in range(bevel_segments + 1):
            t = b / bevel_segments
            rings.append((-bevel_thickness * math.cos(t * math.pi / 2), bevel_size * math.sin(t * math.pi / 2)))
        for b in range(bevel_segments, -1, -1):
            t = b / bevel_segments
            rings.append((depth + bevel_thickness * math.cos(t * math.pi / 2), bevel_size * math.sin(t * math.pi / 2)))
    else:
        rings = [(0.0, 0.0), (depth, 0.0)]

    positions: list[np.ndarray] = []
    indices: list[int] = []
    for z, off in rings:
        ring = contour + outward * off
        positions.extend(np.column_stack([ring, np.full(n, z)]))
    for k in range(len(rings) - 1):
        for i in range(n):
            a = k * n + i
            b = k * n + (i + 1) % n
            c = (k + 1) * n + (i + 1) % n
            d = (k + 1) * n + i
            indices.extend((a, b, c, a, c, d))
    side_positions = np.asarray(positions, dtype=np.float64)
    side_normals = compute_vertex_normals(side_positions, indices)

    # caps get their own vertices so the rim stays crisp
    tris = triangulate_polygon(pts)
    cap_positions = []
    cap_normals = []
    cap_indices = []
    for z, nz in ((rings[0][0], -1.0), (rings[-1][0], 1.0)):
        base = len(side_positions) + len(cap_positions)
        cap_positions.extend((x, y, z) for x, y in pts)
        cap_normals.extend([(0.0, 0.0, nz)] * n)
        for a, b, c in tris:
            if nz < 0:
                cap_indices.extend((base + a, base + c, base + b))
            else:
                cap_indices.extend((base + a, base + b, base + c))

    return Geometry(
        positions=np.vstack([side_positions, np.asarray(cap_positions)]),
        indices=indices + cap_indices,
        normals=np.vstack([side_normals, np.asarray(cap_normals, dtype=np.float32)]),
    )


# ---------------------------------------------------------------------------
# Planar grids
# ---------------------------------------------------------------------------
def polar_disc(radius: float, segments: int, rings: int) -> tuple[np.ndarray, np.ndarray]:
    """Planar (x, y) points and triangle indices of a disc subdivided into rings.

    Returns ``(points, indices)`` where ``points`` has shape (V, 2) with the
    centre first, then ``rings`` rings of ``segments`` points each.
    """
    segs = _require_segments(segments, 3, "segments")
    nrings = _require_segments(rings, 1, "rings")
    points = [(0.0, 0.0)]
    for k in range(1, nrings + 1):
        r = radius * k / nrings
        for i in range(segs):
            a = i / segs * TWO_PI
            points.append((r * math.cos(a), r * math.sin(a)))
    indices: list[int] = []
    for i in range(segs):
        indices.extend((0, 1 + i, 1 + (i + 1) % segs))
    for k in range(1, nrings):
        inner = 1 + (k - 1) * segs
        outer = 1 + k * segs
        for i in range(segs):
            j = (i + 1) % segs
            indices.extend((inner + i, outer + i, outer + j, inner + i, outer + j, inner + j))
    return np.asarray(points, dtype=np.float64), np.asarray(indices, dtype=np.uint32)

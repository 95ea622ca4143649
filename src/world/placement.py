"""Angular/radial scatter for repeated scene elements.

Samples are independent draws from the supplied RNG: every value is uniform in
its configured range and there is no minimum-separation guarantee, so
overlapping placements are expected.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, Optional

from pygame.math import Vector3

TWO_PI = 2.0 * math.pi
FULL_CIRCLE = (0.0, TWO_PI)

Range = tuple[float, float]


@dataclass(frozen=True)
class PlacementSpec:
    angle: float
    distance: float
    scale_jitter: float = 1.0
    elevation: float = 0.0
    yaw: float = 0.0

    def position(self) -> Vector3:
        return Vector3(
            math.cos(self.angle) * self.distance,
            self.elevation,
            math.sin(self.angle) * self.distance,
        )


def _uniform(rng: random.Random, bounds: Range) -> float:
    lo, hi = bounds
    if lo == hi:
        return float(lo)
    # random() is in [0, 1) so the upper bound is excluded for half-open ranges
    return lo + (hi - lo) * rng.random()


def _check(count: int, *ranges: Optional[Range]) -> None:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    for r in ranges:
        if r is not None and r[0] > r[1]:
            raise ValueError(f"range {r} has min > max")


def sample_placements(
    rng: random.Random,
    count: int,
    *,
    distance_range: Range,
    scale_range: Range = (1.0, 1.0),
    angle_range: Range = FULL_CIRCLE,
    elevation_range: Optional[Range] = None,
    yaw_range: Optional[Range] = None,
) -> list[PlacementSpec]:
    """Draw ``count`` independent placements.

    With the default ``angle_range`` every angle lies in [0, 2*pi).
    """
    _check(count, distance_range, scale_range, angle_range, elevation_range, yaw_range)
    out: list[PlacementSpec] = []
    for _ in range(count):
        angle = _uniform(rng, angle_range)
        distance = _uniform(rng, distance_range)
        scale = _uniform(rng, scale_range)
        elevation = _uniform(rng, elevation_range) if elevation_range else 0.0
        yaw = _uniform(rng, yaw_range) if yaw_range else 0.0
        out.append(PlacementSpec(angle, distance, scale, elevation, yaw))
    return out


def ring_placements(
    rng: random.Random,
    count: int,
    *,
    distance_range: Range,
    scale_range: Range = (1.0, 1.0),
    elevation_range: Optional[Range] = None,
) -> list[PlacementSpec]:
    """Evenly spaced angles (``i / count`` of a turn) with random distance/scale/height."""
    _check(count, distance_range, scale_range, elevation_range)
    out: list[PlacementSpec] = []
    for i in range(count):
        angle = i / count * TWO_PI
        distance = _uniform(rng, distance_range)
        elevation = _uniform(rng, elevation_range) if elevation_range else 0.0
        scale = _uniform(rng, scale_range)
        out.append(PlacementSpec(angle, distance, scale, elevation))
    return out


def fixed_placements(pairs: Iterable[tuple[float, float]]) -> list[PlacementSpec]:
    """Hand-placed (angle, distance) pairs."""
    return [PlacementSpec(float(a), float(d)) for a, d in pairs]

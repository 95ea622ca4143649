"""Deterministic surface fields for the ground and the sky dome.

``terrain_noise`` is a fixed sum of low-frequency sines, not a seeded noise
generator: the same (x, y) always gives the same value, on every run.

Ground coordinates are the disc's own plane (x, y); the disc is laid flat so
that plane y runs along world -z (see :func:`ground_height_at`).
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from config import (
    GROUND_HEIGHT_SCALE,
    GRASS_COLOR,
    DIRT_COLOR,
    DARK_GRASS_COLOR,
    SKY_HORIZON,
    SKY_ZENITH,
)
from core.material import Color, hex_to_rgb, lerp_color

GRASS = hex_to_rgb(GRASS_COLOR)
DIRT = hex_to_rgb(DIRT_COLOR)
DARK_GRASS = hex_to_rgb(DARK_GRASS_COLOR)

DIRT_THRESHOLD = 0.7
DARK_GRASS_THRESHOLD = 0.6


class NoiseSample(NamedTuple):
    height: float
    color: Color


def terrain_noise(x: float, y: float) -> float:
    return 0.5 * (math.sin(0.3 * x) + math.cos(0.3 * y)) + 0.3 * (math.sin(0.7 * x) + math.cos(0.5 * y))


def sample_surface(x: float, y: float) -> NoiseSample:
    """Height displacement and one of three ground colors for a plane point."""
    noise = terrain_noise(x, y)
    mix = (math.sin(0.5 * x + 0.7 * y) + 1.0) * 0.5
    noise_factor = (noise + 1.0) * 0.5
    if mix > DIRT_THRESHOLD:
        color = DIRT
    elif noise_factor > DARK_GRASS_THRESHOLD:
        color = DARK_GRASS
    else:
        color = GRASS
    return NoiseSample(noise * GROUND_HEIGHT_SCALE, color)


def sample_surface_grid(points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised :func:`sample_surface` over (N, 2) plane points -> (heights, colors)."""
    x = points[:, 0]
    y = points[:, 1]
    noise = 0.5 * (np.sin(0.3 * x) + np.cos(0.3 * y)) + 0.3 * (np.sin(0.7 * x) + np.cos(0.5 * y))
    mix = (np.sin(0.5 * x + 0.7 * y) + 1.0) * 0.5
    noise_factor = (noise + 1.0) * 0.5
    colors = np.where(
        (mix > DIRT_THRESHOLD)[:, None],
        DIRT,
        np.where((noise_factor > DARK_GRASS_THRESHOLD)[:, None], DARK_GRASS, GRASS),
    )
    return noise * GROUND_HEIGHT_SCALE, colors


def ground_height_at(x: float, z: float) -> float:
    """Terrain height under world (x, z)."""
    return sample_surface(x, -z).height


def sky_gradient(y: float, radius: float) -> Color:
    """Horizon-to-zenith blend for a sky dome vertex at height ``y``."""
    t = (y + radius) / (2.0 * radius)
    return lerp_color(hex_to_rgb(SKY_HORIZON), hex_to_rgb(SKY_ZENITH), t)

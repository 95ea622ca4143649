"""Texture loading utilities.

``load_image_array`` only needs pygame's image module, so it is safe to call
from a worker thread.
"""

from __future__ import annotations

import logging
import os

import numpy as np
import pygame

log = logging.getLogger(__name__)


class TextureLoadError(Exception):
    """An image file could not be read or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load texture {path}: {reason}")
        self.path = path
        self.reason = reason


def load_image_array(filename: str) -> np.ndarray:
    """Decode an image into a float32 (height, width, 3) array in [0, 1].

    Row 0 is the top of the image.

    Raises
    ------
    TextureLoadError
        If the file is missing or pygame cannot decode it.
    """
    if not os.path.isfile(filename):
        raise TextureLoadError(filename, "no such file")
    try:
        surface = pygame.image.load(filename)
    except (pygame.error, OSError) as e:
        raise TextureLoadError(filename, str(e)) from e
    # surfarray is indexed [x, y]; swap to [row, col]
    rgb = pygame.surfarray.array3d(surface).transpose(1, 0, 2)
    log.debug("Decoded %s (%dx%d)", filename, rgb.shape[1], rgb.shape[0])
    return rgb.astype(np.float32) / 255.0

"""Watercolor post-processing.

The effect is optional. The paper grain texture is decoded on a worker
thread; ``PaperTextureLoader.poll()`` is called once per frame from the main
loop and dispatches the outcome there, so GL work and scene mutation stay on
the main thread. If the texture cannot be loaded the scene keeps rendering
without a composer.

The filter itself runs on the CPU with numpy: the rendered frame is read
back, filtered and drawn over the back buffer.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from OpenGL.GL import (
    glReadPixels,
    glDrawPixels,
    glPixelStorei,
    glWindowPos2i,
    glDisable,
    glEnable,
    GL_RGB,
    GL_UNSIGNED_BYTE,
    GL_PACK_ALIGNMENT,
    GL_UNPACK_ALIGNMENT,
    GL_DEPTH_TEST,
    GL_LIGHTING,
    GL_FOG,
)

from config import (
    WATERCOLOR_SCALE,
    WATERCOLOR_THRESHOLD,
    WATERCOLOR_DARKENING,
    WATERCOLOR_PIGMENT,
)
from textures.texture_utils import load_image_array

log = logging.getLogger(__name__)

LUMA = np.array([0.299, 0.587, 0.114], dtype=np.float32)


# ---------------------------------------------------------------------------
# Async paper texture load
# ---------------------------------------------------------------------------
class PaperTextureLoader:
    """Decode the paper texture off the main thread.

    ``start()`` submits the decode; ``poll()`` runs exactly one of the
    callbacks, on the calling thread, once the decode has finished.
    """

    def __init__(self, path: str, executor: Optional[ThreadPoolExecutor] = None):
        self.path = path
        self._executor = executor
        self._owns_executor = executor is None
        self._future: Optional[Future] = None
        self._on_load: Optional[Callable[[np.ndarray], None]] = None
        self._on_error: Optional[Callable[[Exception], None]] = None
        self.done = False

    def start(self, on_load: Callable[[np.ndarray], None], on_error: Callable[[Exception], None]) -> "PaperTextureLoader":
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="paper-loader")
        self._on_load = on_load
        self._on_error = on_error
        self._future = self._executor.submit(load_image_array, self.path)
        log.debug("Loading paper texture %s", self.path)
        return self

    @property
    def pending(self) -> bool:
        return self._future is not None and not self.done

    def poll(self) -> bool:
        """Dispatch the result if the load has finished. Returns True when dispatched."""
        if self._future is None or self.done or not self._future.done():
            return False
        self.done = True
        try:
            image = self._future.result()
        except Exception as e:
            # any worker failure just leaves the effect off
            if self._on_error is not None:
                self._on_error(e)
        else:
            if self._on_load is not None:
                self._on_load(image)
        finally:
            self._shutdown()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the load finishes (or ``timeout``), then :meth:`poll`."""
        if self._future is None:
            return False
        wait([self._future], timeout=timeout)
        return self.poll()

    def _shutdown(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------
def _paper_grain(paper: np.ndarray, height: int, width: int, scale: float) -> np.ndarray:
    """Paper luminance tiled across a (height, width) frame, repeating every 1/scale px."""
    grain = paper @ LUMA if paper.ndim == 3 else paper.astype(np.float32)
    ph, pw = grain.shape
    v = (np.arange(height) * scale) % 1.0
    u = (np.arange(width) * scale) % 1.0
    rows = np.minimum((v * ph).astype(int), ph - 1)
    cols = np.minimum((u * pw).astype(int), pw - 1)
    return grain[rows[:, None], cols[None, :]]


def watercolor_filter(
    frame: np.ndarray,
    paper: np.ndarray,
    *,
    scale: float = WATERCOLOR_SCALE,
    threshold: float = WATERCOLOR_THRESHOLD,
    darkening: float = WATERCOLOR_DARKENING,
    pigment: float = WATERCOLOR_PIGMENT,
) -> np.ndarray:
    """Apply the watercolor look to a float RGB frame of shape (h, w, 3) in [0, 1].

    - tones brighter than ``threshold`` are washed out toward the paper white,
    - luminance edges are darkened in proportion to ``darkening``,
    - pigment pools in the paper's valleys, scaled by ``pigment``.

    A flat frame under pure white paper with luminance at or below the
    threshold comes back unchanged.
    """
    frame = np.asarray(frame, dtype=np.float32)
    h, w = frame.shape[:2]
    luminance = frame @ LUMA

    wash = np.clip((luminance - threshold) / max(1.0 - threshold, 1e-6), 0.0, 1.0)
    out = frame + (1.0 - frame) * (0.5 * wash)[..., None]

    gy, gx = np.gradient(luminance) if h > 1 and w > 1 else (np.zeros_like(luminance),) * 2
    edge = np.clip(np.hypot(gx, gy) * darkening, 0.0, 1.0)
    out = out * (1.0 - 0.5 * edge)[..., None]

    valley = 1.0 - _paper_grain(paper, h, w, scale)
    granulation = np.clip(valley * (pigment - 1.0), 0.0, 1.0)
    out = out * (1.0 - granulation)[..., None]

    return np.clip(out, 0.0, 1.0)


# ---------------------------------------------------------------------------
# Composer
# ---------------------------------------------------------------------------
class RenderPass:
    """Render the scene into the back buffer."""

    def __init__(self, renderer, root, camera):
        self.renderer = renderer
        self.root = root
        self.camera = camera

    def render(self, width: int, height: int) -> None:  # pragma: no cover - visual
        self.renderer.render(self.root, self.camera)


@dataclass
class WatercolorPass:
    paper: np.ndarray
    scale: float = WATERCOLOR_SCALE
    threshold: float = WATERCOLOR_THRESHOLD
    darkening: float = WATERCOLOR_DARKENING
    pigment: float = WATERCOLOR_PIGMENT
    render_to_screen: bool = True

    def process(self, frame: np.ndarray) -> np.ndarray:
        return watercolor_filter(
            frame,
            self.paper,
            scale=self.scale,
            threshold=self.threshold,
            darkening=self.darkening,
            pigment=self.pigment,
        )

    def render(self, width: int, height: int) -> None:  # pragma: no cover - visual
        glPixelStorei(GL_PACK_ALIGNMENT, 1)
        raw = glReadPixels(0, 0, width, height, GL_RGB, GL_UNSIGNED_BYTE)
        # GL rows run bottom-up
        frame = np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 3)[::-1]
        filtered = self.process(frame.astype(np.float32) / 255.0)
        if not self.render_to_screen:
            return
        out = np.ascontiguousarray((filtered[::-1] * 255.0).astype(np.uint8))
        glDisable(GL_DEPTH_TEST)
        glDisable(GL_LIGHTING)
        glDisable(GL_FOG)
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glWindowPos2i(0, 0)
        glDrawPixels(width, height, GL_RGB, GL_UNSIGNED_BYTE, out)
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_LIGHTING)


class EffectComposer:
    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self.passes: list = []

    def add_pass(self, render_pass) -> None:
        self.passes.append(render_pass)

    def set_size(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def render(self) -> None:  # pragma: no cover - visual
        for p in self.passes:
            p.render(self.width, self.height)

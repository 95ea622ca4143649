"""World scene that owns the camera, orbit controls, animation and rendering.

The scene graph is built up front by ``populate_world`` (no GL needed); GL
state, the paper texture load and the composer are wired in ``start()``, once
the engine has a context.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import numpy as np
from pygame.math import Vector3

from config import (
    WIDTH,
    HEIGHT,
    FOV,
    NEAR,
    FAR,
    STARTING_POS,
    LOOK_AT,
    POSTPROCESS_ENABLED,
)
from core.scene import Scene
from core.renderer import SceneRenderer
from camera import Camera, OrbitController
from render.postprocess import EffectComposer, PaperTextureLoader, RenderPass, WatercolorPass
from textures.resoucepath import PAPER_TEXTURE_PATH
from world.context import SceneContext, populate_world

log = logging.getLogger(__name__)


class WorldScene(Scene):
    def __init__(
        self,
        context: Optional[SceneContext] = None,
        camera: Optional[Camera] = None,
        *,
        width: int = WIDTH,
        height: int = HEIGHT,
        postprocess: bool = POSTPROCESS_ENABLED,
        paper_path: str = PAPER_TEXTURE_PATH,
    ) -> None:
        super().__init__()
        self.width = width
        self.height = height
        self.postprocess = postprocess
        self.paper_path = paper_path
        self.loader: Optional[PaperTextureLoader] = None

        self.camera = camera or Camera(
            position=Vector3(STARTING_POS),
            target=Vector3(LOOK_AT),
            width=width,
            height=height,
            fov=FOV,
            near=NEAR,
            far=FAR,
        )

        start_time = time.perf_counter()
        self.ctx = populate_world(context or SceneContext())
        self.log_timing("Populating world", start_time, time.perf_counter())

        start_time = time.perf_counter()
        self.controls = OrbitController(self.camera, viewport_height=height)
        self.renderer = SceneRenderer()
        self.log_timing("Setting up controllers", start_time, time.perf_counter())

        log.info("World scene initialized")

    # ------------------------------------------------------------------
    def log_timing(self, message: str, start_time: float, end_time: float) -> None:
        """Logs timing information for WorldScene setup phases."""
        log.debug("%s took %.6f seconds", message, end_time - start_time)

    @property
    def composer(self) -> Optional[EffectComposer]:
        return self.ctx.composer

    def start(self) -> None:  # pragma: no cover - visual
        self.renderer.setup()
        if self.postprocess:
            self.load_paper_texture()

    def load_paper_texture(self) -> PaperTextureLoader:
        self.loader = PaperTextureLoader(self.paper_path).start(self._on_paper_loaded, self._on_paper_failed)
        return self.loader

    def _on_paper_loaded(self, paper: np.ndarray) -> None:
        composer = EffectComposer(self.width, self.height)
        composer.add_pass(RenderPass(self.renderer, self.ctx.root, self.camera))
        composer.add_pass(WatercolorPass(paper))
        self.ctx.composer = composer
        log.info("Watercolor effect initialized")

    def _on_paper_failed(self, error: Exception) -> None:
        log.error("Error loading paper texture: %s", error)
        log.info("Rendering without watercolor effect")

    # ------------------------------------------------------------------
    def update(self, dt: float) -> None:
        if self.loader is not None:
            self.loader.poll()
        self.controls.update(dt)
        self.ctx.animator.tick(dt)
        super().update(dt)

    def handle_event(self, event) -> None:
        self.controls.handle_event(event)

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = width, height
        self.camera.set_aspect(width, height)
        self.controls.viewport_height = height
        if self.ctx.composer is not None:
            self.ctx.composer.set_size(width, height)

    def shutdown(self) -> None:
        self.ctx.animator.stop()

    def render(self) -> None:  # pragma: no cover - visual
        if self.ctx.composer is not None:
            self.ctx.composer.render()
        else:
            self.renderer.render(self.ctx.root, self.camera)

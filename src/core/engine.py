"""Core engine loop & orchestration.

Separates concerns:
- Engine: sets up window, GL state, main loop.
- Scene: holds world assets & update/draw logic.

Uses the legacy fixed-function pipeline throughout.
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame
from OpenGL.GL import (
    glEnable,
    glDisable,
    glDepthFunc,
    glViewport,
    GL_DEPTH_TEST,
    GL_LEQUAL,
    GL_CULL_FACE,
)

from config import WIDTH, HEIGHT, FULLSCREEN, FPS, VSYNC, CAPTION
from core.scene import Scene

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class Engine:
    def __init__(self, scene_factory=None, *, width: int = WIDTH, height: int = HEIGHT, fullscreen: bool = FULLSCREEN):
        pygame.init()
        pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLEBUFFERS, 1)
        pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLESAMPLES, 4)
        pygame.display.set_caption(CAPTION)
        self.width = width
        self.height = height
        self._flags = pygame.DOUBLEBUF | pygame.OPENGL
        if fullscreen:
            self._flags |= pygame.FULLSCREEN
        else:
            self._flags |= pygame.RESIZABLE
        self._set_mode(width, height)
        self.clock = pygame.time.Clock()

        # GL state
        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LEQUAL)
        glDisable(GL_CULL_FACE)
        glViewport(0, 0, width, height)

        # Active scene (owns camera & input)
        if scene_factory is None:
            from world.worldscene import WorldScene

            scene_factory = WorldScene
        self.scene: Scene = scene_factory(width=width, height=height)
        if hasattr(self.scene, "start"):
            self.scene.start()
        log.info("Engine ready (%dx%d)", width, height)

    def _set_mode(self, width: int, height: int) -> None:
        try:
            # vsync: 1 to enable, 0 to disable
            pygame.display.set_mode((width, height), self._flags, vsync=(1 if VSYNC else 0))
        except (TypeError, pygame.error):
            # vsync was requested but is unavailable on this system/driver;
            # fall back to the call signature without it.
            log.warning("VSync unavailable; continuing without it")
            pygame.display.set_mode((width, height), self._flags)

    # ------------------------------------------------------------------
    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            if event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h)
                continue
            # Forward events to the active scene
            self.scene.handle_event(event)
        return True

    def resize(self, width: int, height: int) -> None:  # pragma: no cover - visual
        self.width, self.height = max(1, width), max(1, height)
        glViewport(0, 0, self.width, self.height)
        self.scene.resize(self.width, self.height)
        log.debug("Resized to %dx%d", self.width, self.height)

    # ------------------------------------------------------------------
    def update(self, dt: float):
        # Scene owns all per-frame updates
        self.scene.update(dt)

    # ------------------------------------------------------------------
    def render(self):  # pragma: no cover - visual
        self.scene.render()
        pygame.display.flip()

    # ------------------------------------------------------------------
    def run(self, max_frames: Optional[int] = None):  # pragma: no cover - visual
        running = True
        frames = 0
        while running:
            # Without vsync, tick() just measures the frame; with vsync keep
            # the FPS cap as a safety net for drivers that ignore it.
            if not VSYNC:
                dt = self.clock.tick() / 1000.0
            else:
                dt = self.clock.tick(FPS) / 1000.0
            running = self.handle_events()
            if not running:
                break
            self.update(dt)
            self.render()
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
        self.scene.shutdown()
        pygame.quit()
        log.info("Engine stopped after %d frames", frames)

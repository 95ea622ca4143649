"""Per-frame animation of floating crystals and the drifting cloud ring.

The animator has a single running state: each ``tick(dt)`` advances elapsed
time, re-evaluates every floating element's height and adds the constant
per-tick spins. ``stop()`` just makes later ticks no-ops.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from config import CRYSTAL_FLOAT_AMPLITUDE, CRYSTAL_FLOAT_FREQUENCY, CRYSTAL_SPIN
from core.object3d import Object3D


@dataclass
class CrystalState:
    base_height: float
    phase_offset: float


@dataclass
class FloatingElement:
    node: Object3D
    state: CrystalState
    amplitude: float = CRYSTAL_FLOAT_AMPLITUDE
    frequency: float = CRYSTAL_FLOAT_FREQUENCY
    spin: float = CRYSTAL_SPIN
    follower: Optional[Object3D] = None  # e.g. the crystal's glow light

    def height_at(self, t: float) -> float:
        return self.state.base_height + math.sin(self.frequency * t + self.state.phase_offset) * self.amplitude

    def apply(self, t: float) -> None:
        y = self.height_at(t)
        self.node.position.y = y
        if self.follower is not None:
            self.follower.position.y = y


@dataclass
class Spinner:
    node: Object3D
    increment: float

    def step(self) -> None:
        self.node.rotation.y += self.increment


class Animator:
    def __init__(self) -> None:
        self.floating: list[FloatingElement] = []
        self.spinners: list[Spinner] = []
        self.elapsed = 0.0
        self.running = True
        self.ticks = 0

    def add_floating(self, element: FloatingElement) -> FloatingElement:
        self.floating.append(element)
        element.apply(self.elapsed)
        return element

    def add_spinner(self, node: Object3D, increment: float) -> Spinner:
        spinner = Spinner(node, increment)
        self.spinners.append(spinner)
        return spinner

    def apply(self, t: float) -> None:
        """Place every floating element at absolute time ``t`` (no spin)."""
        for f in self.floating:
            f.apply(t)

    def tick(self, dt: float) -> None:
        if not self.running:
            return
        self.elapsed += max(0.0, dt)
        self.ticks += 1
        for s in self.spinners:
            s.step()
        for f in self.floating:
            f.apply(self.elapsed)
            f.node.rotation.y += f.spin

    def stop(self) -> None:
        self.running = False

from typing import List, Callable, Optional
from dataclasses import dataclass, field

UpdateFn = Callable[[float], None]


@dataclass
class Scene:
    # Camera is optional so non-3D scenes don't need one
    camera: Optional[object] = None
    updaters: List[UpdateFn] = field(default_factory=list)

    def update(self, dt: float):
        for fn in self.updaters:
            fn(dt)

    # Optional per-event handler (scenes can override)
    def handle_event(self, event) -> None:
        pass

    def resize(self, width: int, height: int) -> None:
        if self.camera is not None and hasattr(self.camera, "set_aspect"):
            self.camera.set_aspect(width, height)

    def shutdown(self) -> None:
        pass

    # Scenes own their full render pipeline (projection, modelview, etc.)
    def render(self):  # pragma: no cover - visual
        pass

from .camera import Camera
from .cameracontroller import OrbitController

__all__ = [
    "Camera",
    "OrbitController",
]

"""
Scene container: objects, lights and cameras.

The scene owns its objects for their whole lifetime. It is populated once,
then mutated in place (camera moves, object translations) between frames.
"""

from __future__ import annotations
import logging
from typing import List

from .vec3 import Vec3, Point3
from .shapes import SceneObject
from .lights import Light
from .camera import Camera

logger = logging.getLogger(__name__)


class SceneError(Exception):
    """Raised when the scene cannot satisfy a request."""
    pass


class Scene:
    """Objects, lights and cameras with one active camera."""

    def __init__(self):
        self.objects: List[SceneObject] = []
        self.lights: List[Light] = []
        self.cameras: List[Camera] = []
        self.active_camera_index = 0

    def add_object(self, obj: SceneObject) -> SceneObject:
        self.objects.append(obj)
        return obj

    def add_light(self, light: Light) -> Light:
        self.lights.append(light)
        return light

    def add_camera(self, camera: Camera) -> Camera:
        self.cameras.append(camera)
        return camera

    def set_active_camera(self, index: int) -> None:
        """Select the active camera; out-of-range indices are ignored."""
        if 0 <= index < len(self.cameras):
            self.active_camera_index = index
        else:
            logger.debug(
                "Ignoring camera index %d (have %d cameras), keeping %d",
                index, len(self.cameras), self.active_camera_index
            )

    @property
    def active_camera(self) -> Camera:
        if not self.cameras:
            raise SceneError("Scene has no cameras")
        return self.cameras[self.active_camera_index]

    def move_camera(self, index: int, position: Point3) -> None:
        """Place camera `index` at an absolute position."""
        self.cameras[index].position = position

    def translate_camera(self, index: int, delta: Vec3) -> None:
        camera = self.cameras[index]
        camera.position = camera.position + delta

    def translate_object(self, index: int, delta: Vec3) -> None:
        self.objects[index].translate(delta)

    def clear(self) -> None:
        """Release every object, light and camera."""
        self.objects.clear()
        self.lights.clear()
        self.cameras.clear()
        self.active_camera_index = 0

    def __len__(self) -> int:
        return len(self.objects)

    def __repr__(self) -> str:
        return (
            f"Scene(objects={len(self.objects)}, lights={len(self.lights)}, "
            f"cameras={len(self.cameras)})"
        )

"""
Interactive render session.

Bundles a scene, a renderer and the frame buffer they share, and applies
mutation events (resize, camera moves, object translations) one at a time.
Every event is followed by a full re-render; a lock keeps mutations from
overlapping a frame pass.
"""

from __future__ import annotations
import logging
import threading
from typing import Dict, Tuple

from .vec3 import Vec3, Point3
from .scene import Scene
from .renderer import Renderer, RenderSettings, FrameBuffer

logger = logging.getLogger(__name__)

# Key -> (object index, translation) for the showcase scene
DEFAULT_KEY_BINDINGS: Dict[str, Tuple[int, Tuple[float, float, float]]] = {
    'w': (3, (0, 50, 0)),
    's': (3, (0, -50, 0)),
    'd': (3, (5, 0, 0)),
    'a': (3, (-5, 0, 0)),
}


class RenderSession:
    """Owns the frame buffer and serializes scene edits against renders."""

    def __init__(
        self,
        scene: Scene,
        settings: RenderSettings = None,
        key_bindings: Dict[str, Tuple[int, Tuple[float, float, float]]] = None
    ):
        self.scene = scene
        self.renderer = Renderer(settings)
        self.frame = FrameBuffer(self.renderer.settings.width, self.renderer.settings.height)
        self.key_bindings = dict(DEFAULT_KEY_BINDINGS if key_bindings is None else key_bindings)
        self.lock = threading.Lock()
        self.frame_count = 0

    @property
    def width(self) -> int:
        return self.frame.width

    @property
    def height(self) -> int:
        return self.frame.height

    def render(self) -> FrameBuffer:
        """Render the current scene state into the session's buffer."""
        with self.lock:
            return self._render_locked()

    def _render_locked(self) -> FrameBuffer:
        self.renderer.render(self.scene, self.frame)
        self.frame_count += 1
        return self.frame

    def resize(self, width: int, height: int) -> FrameBuffer:
        """Reallocate the buffer for a new raster size and re-render."""
        with self.lock:
            logger.info("Resizing raster to %dx%d", width, height)
            self.frame.resize(width, height)
            self.renderer.settings.width = width
            self.renderer.settings.height = height
            return self._render_locked()

    def translate_object(self, index: int, delta: Vec3) -> FrameBuffer:
        with self.lock:
            self.scene.translate_object(index, delta)
            return self._render_locked()

    def move_camera(self, index: int, position: Point3) -> FrameBuffer:
        with self.lock:
            self.scene.move_camera(index, position)
            return self._render_locked()

    def translate_camera(self, index: int, delta: Vec3) -> FrameBuffer:
        with self.lock:
            self.scene.translate_camera(index, delta)
            return self._render_locked()

    def set_active_camera(self, index: int) -> FrameBuffer:
        with self.lock:
            self.scene.set_active_camera(index)
            return self._render_locked()

    def handle_key(self, key: str, render: bool = True) -> bool:
        """Apply the translation bound to `key`.

        Args:
            key: Key name, case-insensitive
            render: Re-render after moving; batch callers pass False and
                call render() once at the end

        Returns:
            True if the key was bound and applied
        """
        binding = self.key_bindings.get(key.lower())
        if binding is None:
            logger.debug("Unbound key %r", key)
            return False
        index, delta = binding
        if render:
            self.translate_object(index, Vec3(*delta))
        else:
            with self.lock:
                self.scene.translate_object(index, Vec3(*delta))
        return True

    def close(self) -> None:
        """Tear down the scene and drop the pixel buffer."""
        with self.lock:
            self.scene.clear()
            self.frame = None

    def __enter__(self) -> RenderSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

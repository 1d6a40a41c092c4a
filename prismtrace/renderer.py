"""
Renderer module - the heart of the ray tracer.

Implements:
- Whitted-style recursive ray tracing with Phong local shading
- Fresnel-weighted reflection and refraction for glass
- Full-frame rendering into a flat float32 RGB buffer
- Optional multi-threaded band rendering
- LDR image export
"""

from __future__ import annotations
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Callable, Tuple
import numpy as np

from .vec3 import Color, elementwise_multiply
from .ray import Ray
from .scene import Scene

logger = logging.getLogger(__name__)

# Self-intersection guard and outward offset for reflection rays
EPSILON = 1e-5
# Inward offset for refraction rays
REFRACTION_EPSILON = 1e-4
MAX_BOUNCES = 2
SKY_COLOR = (0.7, 0.7, 1.0)
VACUUM_INDEX = 1.0


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 400
    max_bounces: int = MAX_BOUNCES
    num_threads: int = 1
    band_size: int = 16
    sky_color: Color = None
    gamma: float = 1.0

    def __post_init__(self):
        if self.sky_color is None:
            self.sky_color = Color(*SKY_COLOR)
        if self.num_threads == 0:
            import os
            self.num_threads = os.cpu_count() or 4
        if self.max_bounces < 0:
            raise ValueError(f"max_bounces must be non-negative, got {self.max_bounces}")


class FrameBuffer:
    """Flat RGB float32 pixel buffer, row-major with row 0 at the bottom.

    Pixel (i, j) occupies floats [3 * (i + j * width), +3).
    """

    def __init__(self, width: int, height: int):
        self.width = 0
        self.height = 0
        self.data = np.zeros(0, dtype=np.float32)
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Reallocate the buffer for a new raster size.

        The old contents are always discarded, even when the size is
        unchanged.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Raster size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.data = np.zeros(width * height * 3, dtype=np.float32)
        logger.debug("Allocated %dx%d frame buffer", width, height)

    def offset(self, i: int, j: int) -> int:
        return 3 * (i + j * self.width)

    def set_pixel(self, i: int, j: int, color: Color) -> None:
        k = self.offset(i, j)
        self.data[k:k + 3] = color.to_array()

    def get_pixel(self, i: int, j: int) -> Color:
        k = self.offset(i, j)
        return Color(*(float(c) for c in self.data[k:k + 3]))

    def to_image(self) -> np.ndarray:
        """Return an (height, width, 3) view with the top row first."""
        return self.data.reshape(self.height, self.width, 3)[::-1]

    def __len__(self) -> int:
        return len(self.data)


class Renderer:
    """Whitted ray tracer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, frame: Optional[FrameBuffer] = None) -> FrameBuffer:
        """Render the scene from its active camera.

        Args:
            scene: The scene to render
            frame: Buffer to fill; a new one sized from the settings
                is allocated when omitted

        Returns:
            The filled frame buffer (linear, unclamped RGB)
        """
        if frame is None:
            frame = FrameBuffer(self.settings.width, self.settings.height)

        width = frame.width
        height = frame.height
        basis = scene.active_camera.raster(width, height)

        bands = self._generate_bands(height)
        total_bands = len(bands)
        completed_bands = [0]  # Use list for mutable in closure

        def render_band(band: Tuple[int, int]) -> None:
            """Render rows [j0, j1) into their disjoint slice of the frame."""
            j0, j1 = band
            for j in range(j0, j1):
                for i in range(width):
                    frame.set_pixel(i, j, self.trace(basis.get_ray(i, j), scene, 0))

            completed_bands[0] += 1
            if self._progress_callback:
                self._progress_callback(completed_bands[0] / total_bands)

        start = time.perf_counter()
        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                list(executor.map(render_band, bands))
        else:
            for band in bands:
                render_band(band)

        logger.debug(
            "Rendered %dx%d frame (%d objects, %d lights) in %.3fs",
            width, height, len(scene.objects), len(scene.lights),
            time.perf_counter() - start
        )
        return frame

    def trace(self, ray: Ray, scene: Scene, depth: int = 0) -> Color:
        """Compute the color seen along a ray.

        Args:
            ray: The ray to trace (unit direction)
            scene: The scene to trace against
            depth: Number of bounces taken so far

        Returns:
            The unclamped color for this ray
        """
        closest_hit = None
        closest_object = None
        min_distance = math.inf

        for obj in scene.objects:
            hit = obj.intersect(ray)
            if hit is None:
                continue
            # Behind or on the surface the ray started from
            if hit.distance < EPSILON:
                continue
            if not hit.distance < min_distance:
                continue
            closest_hit = hit
            closest_object = obj
            min_distance = hit.distance

        if closest_hit is None:
            return self.settings.sky_color.copy()

        material = closest_object.material
        point = closest_hit.point
        V = (ray.origin - point).normalize()
        N = closest_hit.normal.normalized()

        color = Color(0, 0, 0)
        for light in scene.lights:
            L = (light.position - point).normalize()
            R = (N * (2 * L.dot(N)) - L).normalize()

            ambient = elementwise_multiply(material.ambient, light.ambient)
            diffuse = elementwise_multiply(material.diffuse, light.diffuse) * max(0.0, L.dot(N))
            specular = (
                elementwise_multiply(material.specular, light.specular)
                * max(0.0, R.dot(V)) ** material.shininess
            )
            color += ambient + diffuse + specular

        if depth == self.settings.max_bounces or not material.is_glass:
            return color

        return color + self._glass_contribution(V, N, closest_hit.is_inside, point, material, scene, depth)

    def _glass_contribution(self, V, N, is_inside, point, material, scene, depth) -> Color:
        """Reflected and refracted light leaving a glass surface toward V."""
        reflection_ray = Ray(point + N * EPSILON, (N * (2 * V.dot(N)) - V).normalize())
        reflection_color = self.trace(reflection_ray, scene, depth + 1)

        if is_inside:
            n1, n2 = material.refractive_index, VACUUM_INDEX
        else:
            n1, n2 = VACUUM_INDEX, material.refractive_index
        ratio = n1 / n2

        cos_i = N.dot(V)
        sin2_t = ratio * ratio * (1 - cos_i * cos_i)

        if sin2_t > 1:
            # Total internal reflection
            return elementwise_multiply(reflection_color, material.specular)

        cos_t = math.sqrt(1 - sin2_t)
        transmitted = (-V * ratio + N * (cos_i * ratio - cos_t)).normalize()
        refraction_ray = Ray(point - N * REFRACTION_EPSILON, transmitted)
        refraction_color = self.trace(refraction_ray, scene, depth + 1)

        perpendicular_denominator = n1 * cos_i + n2 * cos_t
        parallel_denominator = n2 * cos_i + n1 * cos_t
        if perpendicular_denominator == 0 or parallel_denominator == 0:
            # Exactly grazing incidence reflects everything
            reflectance = 1.0
        else:
            r_perpendicular = ((n1 * cos_i - n2 * cos_t) / perpendicular_denominator) ** 2
            r_parallel = ((n2 * cos_i - n1 * cos_t) / parallel_denominator) ** 2
            reflectance = (r_perpendicular + r_parallel) / 2
        transmittance = 1 - reflectance

        return elementwise_multiply(
            material.diffuse,
            reflection_color * reflectance + refraction_color * transmittance
        )

    def _generate_bands(self, height: int) -> list[Tuple[int, int]]:
        """Split the raster into horizontal bands of rows.

        Args:
            height: Image height

        Returns:
            List of bands as (j0, j1) tuples
        """
        band_size = max(1, self.settings.band_size)
        return [(j, min(j + band_size, height)) for j in range(0, height, band_size)]

    def to_ldr(self, hdr_image: np.ndarray) -> np.ndarray:
        """Convert a linear image to 8-bit LDR with gamma correction.

        Args:
            hdr_image: Float image array

        Returns:
            LDR image as uint8 array
        """
        corrected = np.power(np.clip(hdr_image, 0, 1), 1.0 / self.settings.gamma)
        return np.clip(corrected * 255 + 0.5, 0, 255).astype(np.uint8)

    def save_image(self, frame: FrameBuffer, filename: str) -> None:
        """Save a rendered frame as an 8-bit image.

        Args:
            frame: The rendered frame buffer
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        ldr = self.to_ldr(np.ascontiguousarray(frame.to_image()))
        PILImage.fromarray(ldr).save(filename)
        logger.info("Saved %dx%d image to %s", frame.width, frame.height, filename)


_default_renderer = Renderer()


def trace(ray: Ray, scene: Scene, depth: int = 0) -> Color:
    """Trace a single ray with the default settings."""
    return _default_renderer.trace(ray, scene, depth)


def render(scene: Scene, width: int, height: int) -> FrameBuffer:
    """Render a full frame with the default settings."""
    return _default_renderer.render(scene, FrameBuffer(width, height))

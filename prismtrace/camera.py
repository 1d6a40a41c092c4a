"""
Camera module for generating primary rays.

A pinhole camera whose image plane sits `focal_length` units in front of
the eye. One world unit on the image plane corresponds to one pixel, so
the focal length also sets the field of view for a given raster size.
"""

from __future__ import annotations
from dataclasses import dataclass
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera positioned with a look-at point and up vector."""

    def __init__(
        self,
        position: Point3 = None,
        up: Vec3 = None,
        look_at: Point3 = None,
        focal_length: float = 100.0
    ):
        """Create a camera.

        Args:
            position: Eye position in world space
            up: Up direction (normalized when the raster basis is built)
            look_at: Point the camera is looking at
            focal_length: Distance from the eye to the image plane
        """
        self.position = position if position is not None else Point3(0, 0, 0)
        self.up = up if up is not None else Vec3(0, 1, 0)
        self.look_at = look_at if look_at is not None else Point3(0, 0, 1)
        self.focal_length = focal_length

    def raster(self, width: int, height: int) -> RasterBasis:
        """Build the image plane for a width x height pixel raster.

        Args:
            width: Raster width in pixels
            height: Raster height in pixels

        Returns:
            RasterBasis that maps pixel (i, j) to a primary ray
        """
        forward = (self.look_at - self.position).normalize()
        up = self.up.normalized()
        right = (-forward.cross(up)).normalize()

        bottom_left = (
            self.position
            + forward * self.focal_length
            - right * (0.5 * width)
            - up * (0.5 * height)
        )

        return RasterBasis(
            origin=self.position.copy(),
            forward=forward,
            up=up,
            right=right,
            bottom_left=bottom_left,
            width=width,
            height=height
        )

    def get_ray(self, i: int, j: int, width: int, height: int) -> Ray:
        """Generate the primary ray for a single pixel.

        Prefer `raster()` when generating many rays for the same raster.
        """
        return self.raster(width, height).get_ray(i, j)

    def __repr__(self) -> str:
        return (
            f"Camera(position={self.position}, look_at={self.look_at}, "
            f"focal_length={self.focal_length})"
        )


@dataclass
class RasterBasis:
    """Camera basis and image-plane corner for a fixed raster size."""
    origin: Point3
    forward: Vec3
    up: Vec3
    right: Vec3
    bottom_left: Point3
    width: int
    height: int

    def get_ray(self, i: int, j: int) -> Ray:
        """Generate a ray through pixel (i, j).

        Args:
            i: Column, 0 = left
            j: Row, 0 = bottom

        Returns:
            A ray from the eye through the pixel, with unit direction
        """
        direction = self.bottom_left + self.right * i + self.up * j - self.origin
        return Ray(self.origin, direction.normalize())

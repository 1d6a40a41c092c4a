"""
Geometric shapes for the ray tracer.

Each shape must implement the SceneObject interface with an `intersect`
method. Spheres are the only primitive.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .materials import Material


@dataclass
class HitData:
    """Stores information about a ray-object intersection.

    Attributes:
        distance: The ray parameter at intersection (unfiltered; callers
            reject values below their self-intersection epsilon)
        point: The intersection point in world space
        normal: Unit surface normal, always facing the incoming ray
        is_inside: True if the ray started inside the object, in which
            case the outward normal was flipped
    """
    distance: float
    point: Point3
    normal: Vec3
    is_inside: bool = False


class SceneObject(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    def __init__(self, material: Optional[Material] = None):
        self.material = material if material is not None else Material()

    @abstractmethod
    def intersect(self, ray: Ray) -> Optional[HitData]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test (unit direction)

        Returns:
            HitData for the nearest non-negative root, None otherwise
        """
        pass

    @abstractmethod
    def translate(self, delta: Vec3) -> None:
        """Move the object by delta in world space."""
        pass


class Sphere(SceneObject):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float = 1.0, material: Optional[Material] = None):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere
            material: Material for shading
        """
        super().__init__(material)
        self.center = center
        self.radius = radius

    def intersect(self, ray: Ray) -> Optional[HitData]:
        """Test ray-sphere intersection using the quadratic formula.

        With a unit direction d the equation |o + t d - c|² = r² reduces to
        t² + 2t(d·(o-c)) + |o-c|² - r² = 0, whose quarter discriminant is
        (d·(o-c))² - (|o-c|² - r²).
        """
        oc = ray.origin - self.center
        b = ray.direction.dot(oc)
        delta = b * b - (oc.length_squared() - self.radius * self.radius)

        if delta < 0:
            return None

        if delta == 0:
            t = -b
        else:
            sqrt_delta = math.sqrt(delta)
            t1 = -b + sqrt_delta
            t2 = -b - sqrt_delta
            if t1 < 0 and t2 < 0:
                return None
            # Near root unless the origin is inside, then the exit root
            t = t2 if t2 >= 0 else t1

        point = ray.at(t)
        normal = (point - self.center).normalize()

        is_inside = ray.direction.dot(normal) > 0
        if is_inside:
            normal = -normal

        return HitData(distance=t, point=point, normal=normal, is_inside=is_inside)

    def translate(self, delta: Vec3) -> None:
        self.center = self.center + delta

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"

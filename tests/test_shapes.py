"""Tests for sphere intersection."""

import pytest
from prismtrace.vec3 import Vec3, Point3, Color
from prismtrace.ray import Ray
from prismtrace.shapes import Sphere, SceneObject, HitData
from prismtrace.materials import Material, DEFAULT_REFRACTIVE_INDEX


class TestSphere:
    """Test Sphere class."""

    def test_creation(self):
        center = Point3(0, 0, 0)
        sphere = Sphere(center, 2.0)
        assert sphere.center == center
        assert sphere.radius == 2.0
        assert isinstance(sphere, SceneObject)

    def test_default_material(self):
        sphere = Sphere(Point3(0, 0, 0))
        assert sphere.radius == 1.0
        assert sphere.material.is_glass is False
        assert sphere.material.refractive_index == DEFAULT_REFRACTIVE_INDEX
        assert sphere.material.diffuse == Color(0, 0, 0)

    def test_with_material(self):
        material = Material(diffuse=Color(1, 0, 0))
        sphere = Sphere(Point3(0, 0, 0), 1.0, material)
        assert sphere.material is material

    def test_translate(self):
        sphere = Sphere(Point3(1, 2, 3), 1.0)
        sphere.translate(Vec3(0, 50, 0))
        assert sphere.center == Point3(1, 52, 3)


class TestSphereIntersection:
    """Test Sphere.intersect()."""

    @pytest.mark.parametrize("distance, radius", [(5, 1), (10, 3), (2.5, 0.5)])
    def test_hit_from_outside_through_center(self, distance, radius):
        sphere = Sphere(Point3(0, 0, 0), radius)
        ray = Ray(Point3(0, 0, -distance), Vec3(0, 0, 1))
        hit = sphere.intersect(ray)

        assert isinstance(hit, HitData)
        assert hit.distance == pytest.approx(distance - radius)
        assert hit.point == Point3(0, 0, -radius)
        # Normal points away from the center, back toward the origin
        assert hit.normal == Vec3(0, 0, -1)
        assert hit.is_inside is False

    def test_hit_off_axis(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0.6, 0, -5), Vec3(0, 0, 1))
        hit = sphere.intersect(ray)

        assert hit is not None
        assert hit.distance == pytest.approx(5 - 0.8)
        assert hit.normal == Vec3(0.6, 0, -0.8)
        assert abs(hit.normal.length() - 1.0) < 1e-12

    def test_hit_from_inside(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        hit = sphere.intersect(ray)

        assert hit is not None
        assert hit.is_inside is True
        assert hit.distance == pytest.approx(1.0)
        assert hit.point == Point3(0, 0, 1)
        # Flipped to face the ray
        assert hit.normal == Vec3(0, 0, -1)
        assert hit.normal.dot(ray.direction) < 0

    def test_hit_from_inside_off_center(self):
        sphere = Sphere(Point3(0, 0, 0), 2.0)
        ray = Ray(Point3(0, 0, 1), Vec3(0, 0, -1))
        hit = sphere.intersect(ray)

        assert hit is not None
        assert hit.is_inside is True
        assert hit.distance == pytest.approx(3.0)
        assert hit.normal == Vec3(0, 0, 1)

    def test_tangent_hit(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 1, -5), Vec3(0, 0, 1))
        hit = sphere.intersect(ray)

        assert hit is not None
        assert hit.distance == 5.0
        assert hit.point == Point3(0, 1, 0)
        assert hit.normal == Vec3(0, 1, 0)
        assert hit.is_inside is False

    def test_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 5, -5), Vec3(0, 0, 1))
        assert sphere.intersect(ray) is None

    def test_miss_just_outside_radius(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(1.0001, 0, -5), Vec3(0, 0, 1))
        assert sphere.intersect(ray) is None

    def test_behind_ray(self):
        sphere = Sphere(Point3(0, 0, -5), 1.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        assert sphere.intersect(ray) is None

    def test_distance_not_filtered(self):
        # A ray starting on the surface reports the near root unfiltered
        sphere = Sphere(Point3(0, 0, 0), 1.0)
        ray = Ray(Point3(0, 0, -1), Vec3(0, 0, 1))
        hit = sphere.intersect(ray)

        assert hit is not None
        assert hit.distance == pytest.approx(0.0, abs=1e-12)

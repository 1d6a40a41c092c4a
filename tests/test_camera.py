"""Tests for Camera class."""

import pytest
from prismtrace.vec3 import Vec3, Point3
from prismtrace.camera import Camera, RasterBasis


class TestCameraCreation:
    """Test Camera construction."""

    def test_defaults(self):
        cam = Camera()
        assert cam.position == Point3(0, 0, 0)
        assert cam.up == Vec3(0, 1, 0)
        assert cam.look_at == Point3(0, 0, 1)
        assert cam.focal_length == 100.0

    def test_custom(self):
        cam = Camera(Point3(0, 0, -500), Vec3(0, 1, 0), Point3(0, 0, 0), 500.0)
        assert cam.position == Point3(0, 0, -500)
        assert cam.focal_length == 500.0


class TestRasterBasis:
    """Test Camera.raster()."""

    def test_basis_vectors(self):
        cam = Camera(Point3(0, 0, 0), Vec3(0, 2, 0), Point3(0, 0, 10), 1.0)
        basis = cam.raster(4, 2)

        assert isinstance(basis, RasterBasis)
        assert basis.forward == Vec3(0, 0, 1)
        assert basis.up == Vec3(0, 1, 0)
        assert basis.right == Vec3(1, 0, 0)

    def test_does_not_mutate_camera(self):
        cam = Camera(Point3(0, 0, 0), Vec3(0, 2, 0), Point3(0, 0, 10), 1.0)
        cam.raster(4, 2)
        assert cam.up == Vec3(0, 2, 0)
        assert cam.look_at == Point3(0, 0, 10)

    def test_bottom_left_corner(self):
        cam = Camera(Point3(1, 2, 3), Vec3(0, 1, 0), Point3(1, 2, 13), 50.0)
        basis = cam.raster(40, 20)
        assert basis.bottom_left == Point3(1 - 20, 2 - 10, 3 + 50)

    def test_orthonormal_for_perpendicular_up(self):
        cam = Camera(Point3(3, -1, 2), Vec3(0, 0, 1), Point3(3, 9, 2), 10.0)
        basis = cam.raster(8, 8)
        for v in (basis.forward, basis.up, basis.right):
            assert abs(v.length() - 1.0) < 1e-12
        assert abs(basis.forward.dot(basis.right)) < 1e-12
        assert abs(basis.up.dot(basis.right)) < 1e-12


class TestCameraRays:
    """Test primary ray generation."""

    def test_center_ray(self):
        cam = Camera(Point3(0, 0, 0), Vec3(0, 1, 0), Point3(0, 0, 1), 2.0)
        ray = cam.raster(4, 2).get_ray(2, 1)

        assert ray.origin == Point3(0, 0, 0)
        assert ray.direction == Vec3(0, 0, 1)

    def test_corner_ray(self):
        cam = Camera(Point3(0, 0, 0), Vec3(0, 1, 0), Point3(0, 0, 1), 2.0)
        ray = cam.raster(4, 2).get_ray(0, 0)

        expected = Vec3(-2, -1, 2).normalized()
        assert ray.direction == expected

    def test_rays_are_normalized(self):
        cam = Camera(Point3(0, 0, -500), Vec3(0, 1, 0), Point3(0, 0, 0), 500.0)
        basis = cam.raster(10, 6)
        for i in range(10):
            for j in range(6):
                assert abs(basis.get_ray(i, j).direction.length() - 1.0) < 1e-12

    def test_columns_go_right_rows_go_up(self):
        cam = Camera(Point3(0, 0, 0), Vec3(0, 1, 0), Point3(0, 0, 1), 5.0)
        basis = cam.raster(10, 10)
        assert basis.get_ray(9, 5).direction.x > basis.get_ray(0, 5).direction.x
        assert basis.get_ray(5, 9).direction.y > basis.get_ray(5, 0).direction.y

    def test_get_ray_matches_raster(self):
        cam = Camera(Point3(0, 0, 0), Vec3(0, 1, 0), Point3(0, 0, 1), 3.0)
        assert cam.get_ray(1, 2, 5, 5).direction == cam.raster(5, 5).get_ray(1, 2).direction

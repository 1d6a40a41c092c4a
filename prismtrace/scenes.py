"""Built-in scenes."""

from __future__ import annotations

from .vec3 import Vec3, Point3, Color
from .shapes import Sphere
from .materials import Material
from .lights import Light
from .camera import Camera
from .scene import Scene


def create_showcase_scene() -> Scene:
    """Four spheres, two of them glass, under a single overhead light.

    Object 3 is the red glass sphere in front; the session key bindings
    move it around.
    """
    scene = Scene()

    scene.add_camera(Camera(
        position=Point3(0, 0, -500),
        up=Vec3(0, 1, 0),
        look_at=Point3(0, 0, 0),
        focal_length=500.0
    ))
    scene.set_active_camera(0)

    scene.add_light(Light(
        position=Point3(0, 1000, 0),
        ambient=Color(0.0, 0.0, 0.0),
        diffuse=Color(0.7, 0.7, 0.7),
        specular=Color(0.3, 0.3, 0.3)
    ))

    # Green glass, back left
    scene.add_object(Sphere(Point3(-130, 80, 200), 100, Material(
        ambient=Color(0.0, 1.0, 0.0),
        diffuse=Color(0.7, 1.0, 0.8),
        specular=Color(1.0, 1.0, 1.0),
        shininess=300,
        is_glass=True
    )))

    # Matte white pair
    scene.add_object(Sphere(Point3(130, -80, 0), 100, Material(
        ambient=Color(1.0, 1.0, 1.0),
        diffuse=Color(1.0, 1.0, 1.0),
        specular=Color(1.0, 1.0, 1.0),
        shininess=0
    )))
    scene.add_object(Sphere(Point3(-130, -80, 0), 100, Material(
        ambient=Color(1.0, 1.0, 1.0),
        diffuse=Color(1.0, 1.0, 1.0),
        specular=Color(1.0, 1.0, 1.0),
        shininess=39
    )))

    # Red glass, front
    scene.add_object(Sphere(Point3(0, -100, -200), 100, Material(
        ambient=Color(0.0, 0.0, 0.0),
        diffuse=Color(1.0, 0.0, 0.0),
        specular=Color(1.0, 1.0, 1.0),
        shininess=500,
        is_glass=True,
        refractive_index=1.61
    )))

    return scene


SCENES = {
    'showcase': create_showcase_scene,
}

"""
PrismTrace - A Python Whitted Ray Tracer

Renders scenes of spheres, point lights and pinhole cameras with:
- Phong ambient/diffuse/specular shading
- Recursive reflection and refraction for glass (exact Fresnel)
- Total internal reflection
- Flat float32 RGB frame buffers for display or export
- YAML/JSON scene descriptions
"""

__version__ = "0.1.0"
__author__ = "PrismTrace Team"

from .vec3 import Vec3, Point3, Color, dot, cross, elementwise_multiply
from .ray import Ray
from .materials import Material, glass, DEFAULT_REFRACTIVE_INDEX
from .shapes import HitData, SceneObject, Sphere
from .lights import Light
from .camera import Camera, RasterBasis
from .scene import Scene, SceneError
from .renderer import (
    Renderer, RenderSettings, FrameBuffer, trace, render,
    EPSILON, REFRACTION_EPSILON, MAX_BOUNCES, SKY_COLOR
)
from .session import RenderSession, DEFAULT_KEY_BINDINGS
from .scenes import create_showcase_scene
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene

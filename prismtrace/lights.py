"""
Light sources for the ray tracer.

Only point lights are supported. They have no falloff and cast no
shadows: every light contributes to every hit point.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .vec3 import Point3, Color


@dataclass
class Light:
    """A point light with separate Phong color contributions.

    Attributes:
        position: Position of the light
        ambient: Ambient color, multiplied by the material's ambient term
        diffuse: Diffuse color, multiplied by the material's diffuse term
        specular: Specular color, multiplied by the material's specular term
    """
    position: Point3 = field(default_factory=lambda: Point3(0, 0, 0))
    ambient: Color = field(default_factory=lambda: Color(0, 0, 0))
    diffuse: Color = field(default_factory=lambda: Color(0, 0, 0))
    specular: Color = field(default_factory=lambda: Color(0, 0, 0))

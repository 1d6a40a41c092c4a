"""
Surface materials for Phong shading.

Every scene object carries one Material. Opaque materials are shaded
locally only; glass materials additionally spawn reflection and
refraction rays whose colors are blended by Fresnel reflectance.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .vec3 import Color

# Near-vacuum unless a scene overrides it
DEFAULT_REFRACTIVE_INDEX = 1.003


@dataclass
class Material:
    """Phong coefficients plus the glass flag and refractive index.

    Attributes:
        ambient: Ambient reflectance, tinted by each light's ambient color
        diffuse: Diffuse reflectance; for glass it also tints the
            reflected/refracted contribution
        specular: Specular reflectance; tints totally internally
            reflected light on glass
        shininess: Phong exponent
        is_glass: Whether the surface reflects and refracts
        refractive_index: Index of refraction of the object's interior
    """
    ambient: Color = field(default_factory=lambda: Color(0, 0, 0))
    diffuse: Color = field(default_factory=lambda: Color(0, 0, 0))
    specular: Color = field(default_factory=lambda: Color(0, 0, 0))
    shininess: float = 0.0
    is_glass: bool = False
    refractive_index: float = DEFAULT_REFRACTIVE_INDEX


def glass(
    diffuse: Color,
    specular: Color = None,
    refractive_index: float = 1.5,
    shininess: float = 300.0,
    ambient: Color = None
) -> Material:
    """Convenience constructor for a glass material."""
    return Material(
        ambient=ambient if ambient is not None else Color(0, 0, 0),
        diffuse=diffuse,
        specular=specular if specular is not None else Color(1, 1, 1),
        shininess=shininess,
        is_glass=True,
        refractive_index=refractive_index
    )

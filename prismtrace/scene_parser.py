"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Cameras and the active camera index
- Render settings
- Materials library
- Objects (spheres with materials)
- Lights

Example scene file:
```yaml
cameras:
  - position: [0, 0, -500]
    look_at: [0, 0, 0]
    up: [0, 1, 0]
    focal_length: 500
active_camera: 0

render:
  width: 400
  height: 400
  max_bounces: 2

materials:
  red_glass:
    ambient: [0, 0, 0]
    diffuse: [1, 0, 0]
    specular: [1, 1, 1]
    shininess: 500
    glass: true
    refractive_index: 1.61

objects:
  - type: sphere
    center: [0, -100, -200]
    radius: 100
    material: red_glass

lights:
  - position: [0, 1000, 0]
    diffuse: [0.7, 0.7, 0.7]
    specular: [0.3, 0.3, 0.3]
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Tuple

import yaml

from .vec3 import Vec3, Color
from .camera import Camera
from .shapes import Sphere
from .materials import Material, DEFAULT_REFRACTIVE_INDEX
from .lights import Light
from .scene import Scene
from .renderer import RenderSettings, MAX_BOUNCES

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.scene = Scene()
        self.settings = RenderSettings()

    def parse_file(self, filepath: str) -> Tuple[Scene, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, settings)
        """
        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'lights' in data:
            self._parse_lights(data['lights'])

        if 'cameras' in data:
            for camera_data in self._entries(data['cameras'], 'cameras'):
                self._parse_camera(camera_data)
        elif 'camera' in data:
            if not isinstance(data['camera'], dict):
                raise SceneParseError("Section camera must be a mapping")
            self._parse_camera(data['camera'])
        else:
            # Default camera
            self.scene.add_camera(Camera())

        active = self._parse_number(data.get('active_camera', 0), 'active_camera', int)
        self.scene.set_active_camera(active)

        if 'render' in data:
            self._parse_settings(data['render'])

        logger.info(
            "Parsed scene with %d objects, %d lights, %d cameras",
            len(self.scene.objects), len(self.scene.lights), len(self.scene.cameras)
        )
        return self.scene, self.settings

    def _parse_number(self, value: Any, name: str, kind=float):
        """Convert a scalar field, reporting bad values as parse errors."""
        try:
            return kind(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid {name}: {value!r}") from e

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(self._parse_number(v, 'vector component') for v in data))
        elif isinstance(data, dict):
            return Vec3(*(self._parse_number(data.get(k, 0), 'vector component') for k in 'xyz'))
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(self._parse_number(v, 'color component') for v in data))
        elif isinstance(data, dict):
            return Color(*(self._parse_number(data.get(k, 0), 'color component') for k in 'rgb'))
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#'):
                hex_color = data[1:]
                if len(hex_color) == 6:
                    try:
                        return Color(*(int(hex_color[k:k + 2], 16) / 255.0 for k in (0, 2, 4)))
                    except ValueError as e:
                        raise SceneParseError(f"Cannot parse color from string: {data}") from e
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _build_material(self, mat_data: Dict[str, Any]) -> Material:
        return Material(
            ambient=self._parse_color(mat_data.get('ambient', [0, 0, 0])),
            diffuse=self._parse_color(mat_data.get('diffuse', [0, 0, 0])),
            specular=self._parse_color(mat_data.get('specular', [0, 0, 0])),
            shininess=self._parse_number(mat_data.get('shininess', 0.0), 'shininess'),
            is_glass=bool(mat_data.get('glass', False)),
            refractive_index=self._parse_number(
                mat_data.get('refractive_index', DEFAULT_REFRACTIVE_INDEX), 'refractive_index'
            )
        )

    def _entries(self, entries: Any, section: str) -> List[Dict[str, Any]]:
        """Check that a section is a list of mappings."""
        if not isinstance(entries, list):
            raise SceneParseError(f"Section {section} must be a list")
        for entry in entries:
            if not isinstance(entry, dict):
                raise SceneParseError(f"Entries in {section} must be mappings, got {entry!r}")
        return entries

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("Section materials must be a mapping")
        for name, mat_data in materials_data.items():
            if not isinstance(mat_data, dict):
                raise SceneParseError(f"Material {name} must be a mapping")
            self.materials[name] = self._build_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return Material()
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in self._entries(objects_data, 'objects'):
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data.get('material'))

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = self._parse_number(obj_data.get('radius', 1.0), 'radius')
                self.scene.add_object(Sphere(center, radius, material))
            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_lights(self, lights_data: list) -> None:
        """Parse lights section."""
        for light_data in self._entries(lights_data, 'lights'):
            light_type = str(light_data.get('type', 'point')).lower()
            if light_type != 'point':
                raise SceneParseError(f"Unknown light type: {light_type}")

            self.scene.add_light(Light(
                position=self._parse_vec3(light_data.get('position', [0, 0, 0])),
                ambient=self._parse_color(light_data.get('ambient', [0, 0, 0])),
                diffuse=self._parse_color(light_data.get('diffuse', [0, 0, 0])),
                specular=self._parse_color(light_data.get('specular', [0, 0, 0]))
            ))

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse a single camera entry."""
        self.scene.add_camera(Camera(
            position=self._parse_vec3(camera_data.get('position', [0, 0, 0])),
            up=self._parse_vec3(camera_data.get('up', [0, 1, 0])),
            look_at=self._parse_vec3(camera_data.get('look_at', [0, 0, 1])),
            focal_length=self._parse_number(camera_data.get('focal_length', 100.0), 'focal_length')
        ))

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        if not isinstance(settings_data, dict):
            raise SceneParseError("Section render must be a mapping")
        try:
            self.settings = RenderSettings(
                width=self._parse_number(settings_data.get('width', 400), 'width', int),
                height=self._parse_number(settings_data.get('height', 400), 'height', int),
                max_bounces=self._parse_number(
                    settings_data.get('max_bounces', MAX_BOUNCES), 'max_bounces', int
                ),
                num_threads=self._parse_number(settings_data.get('threads', 1), 'threads', int),
                band_size=self._parse_number(settings_data.get('band_size', 16), 'band_size', int),
                gamma=self._parse_number(settings_data.get('gamma', 1.0), 'gamma')
            )
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e
        if 'sky_color' in settings_data:
            self.settings.sky_color = self._parse_color(settings_data['sky_color'])


def load_scene(filepath: str) -> Tuple[Scene, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)

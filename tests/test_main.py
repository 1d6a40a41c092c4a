"""Tests for the command-line entry point."""

import pytest
from PIL import Image

from main import main, parse_vec3, non_negative_int
from prismtrace.vec3 import Vec3


class TestMain:
    """Test main() end to end on tiny rasters."""

    def test_render_showcase(self, tmp_path, capsys):
        output = tmp_path / "out" / "render.png"
        assert main(['--width', '6', '--height', '4', '--output', str(output)]) == 0

        with Image.open(output) as img:
            assert img.size == (6, 4)
        assert "Done!" in capsys.readouterr().out

    def test_keys_and_camera_offset(self, tmp_path):
        output = tmp_path / "moved.png"
        result = main([
            '--width', '4', '--height', '4', '--keys', 'wqd',
            '--camera-offset', '0,0,-100', '--output', str(output)
        ])
        assert result == 0
        assert output.exists()

    def test_scene_file(self, tmp_path):
        scene_path = tmp_path / "scene.yaml"
        scene_path.write_text(
            "objects:\n"
            "  - center: [0, 0, 50]\n"
            "    radius: 10\n"
            "    material: {ambient: [1, 0, 0]}\n"
            "lights:\n"
            "  - ambient: [1, 1, 1]\n"
            "render: {width: 3, height: 3}\n"
        )
        output = tmp_path / "scene.png"
        assert main(['--scene-file', str(scene_path), '--output', str(output)]) == 0

        with Image.open(output) as img:
            assert img.size == (3, 3)
            assert img.getpixel((1, 1)) == (255, 0, 0)

    def test_bad_scene_file(self, tmp_path):
        assert main(['--scene-file', str(tmp_path / "missing.yaml")]) == 1

    def test_negative_bounces_rejected(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(['--bounces', '-1', '--width', '4', '--height', '4'])
        assert excinfo.value.code == 2
        assert "non-negative" in capsys.readouterr().err

    def test_keys_without_target_object(self, tmp_path, capsys):
        scene_path = tmp_path / "single.yaml"
        scene_path.write_text("objects:\n  - center: [0, 0, 50]\n")
        output = tmp_path / "single.png"

        result = main(['--scene-file', str(scene_path), '--width', '2', '--height', '2',
                       '--keys', 'wq', '--output', str(output)])

        assert result == 0
        out = capsys.readouterr().out
        assert "Ignoring key w" in out
        assert "Ignoring unbound key: q" in out


class TestParseVec3:
    """Test the x,y,z argument parser."""

    def test_valid(self):
        assert parse_vec3("1,-2,3.5") == Vec3(1, -2, 3.5)

    @pytest.mark.parametrize("text", ["1,2", "a,b,c", ""])
    def test_invalid(self, text):
        import argparse
        with pytest.raises(argparse.ArgumentTypeError):
            parse_vec3(text)


class TestNonNegativeInt:
    """Test the bounce count argument parser."""

    def test_valid(self):
        assert non_negative_int("0") == 0
        assert non_negative_int("3") == 3

    @pytest.mark.parametrize("text", ["-1", "two", "1.5"])
    def test_invalid(self, text):
        import argparse
        with pytest.raises(argparse.ArgumentTypeError):
            non_negative_int(text)

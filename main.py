#!/usr/bin/env python3
"""
PrismTrace - A Python Whitted Ray Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from prismtrace.vec3 import Vec3
from prismtrace.renderer import RenderSettings
from prismtrace.session import RenderSession
from prismtrace.scenes import SCENES
from prismtrace.scene_parser import load_scene, SceneParseError


def parse_vec3(text: str) -> Vec3:
    """Parse 'x,y,z' into a Vec3."""
    parts = text.split(',')
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected x,y,z, got {text!r}")
    try:
        return Vec3(*(float(p) for p in parts))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected x,y,z, got {text!r}")


def non_negative_int(text: str) -> int:
    """Parse a count that must be zero or more."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return value


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='PrismTrace - A Python Whitted Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.png
  python main.py --width 800 --height 600 --threads 4 --output big.png
  python main.py --scene-file scenes/glass.yaml --output glass.png
  python main.py --keys wwd --output moved.png
        '''
    )

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 400)')
    parser.add_argument('--bounces', type=non_negative_int, default=None,
                        help='Max bounce depth (default: 2)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--gamma', type=float, default=None, help='Output gamma (default: 1.0)')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='showcase', choices=sorted(SCENES),
                        help='Built-in scene to render (default: showcase)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (overrides --scene)')
    parser.add_argument('--camera', type=int, default=None, help='Active camera index')
    parser.add_argument('--camera-offset', type=parse_vec3, default=None,
                        help='Translate the active camera by x,y,z before rendering')
    parser.add_argument('--keys', type=str, default='',
                        help='Key presses to replay before rendering (w/a/s/d)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    print("=" * 60)
    print("PrismTrace Ray Tracer")
    print("=" * 60)

    if args.scene_file:
        try:
            scene, settings = load_scene(args.scene_file)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"\nLoaded scene file: {args.scene_file}")
    else:
        scene = SCENES[args.scene]()
        settings = RenderSettings()
        print(f"\nCreating scene: {args.scene}")

    # Command-line flags override the scene's render section
    if args.width is not None:
        settings.width = args.width
    if args.height is not None:
        settings.height = args.height
    if args.bounces is not None:
        settings.max_bounces = args.bounces
    if args.threads is not None:
        settings.num_threads = args.threads or (os.cpu_count() or 4)
    if args.gamma is not None:
        settings.gamma = args.gamma

    print(f"  Objects in scene: {len(scene)}")
    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Max Bounces: {settings.max_bounces}")
    print(f"  Threads: {settings.num_threads}")

    session = RenderSession(scene, settings)

    if args.camera is not None:
        scene.set_active_camera(args.camera)
    if args.camera_offset is not None:
        scene.translate_camera(scene.active_camera_index, args.camera_offset)
    for key in args.keys:
        try:
            applied = session.handle_key(key, render=False)
        except IndexError:
            print(f"  Ignoring key {key}: its target object is not in the scene")
            continue
        if not applied:
            print(f"  Ignoring unbound key: {key}")

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    session.renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    frame = session.render()

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Rays per second: {(frame.width * frame.height) / max(elapsed, 1e-9):.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    session.renderer.save_image(frame, args.output)
    session.close()

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python3
"""
Convert PNG sprite frames to console tile, palette and texture files
"""

import argparse
import os
import sys
from pathlib import Path

from .constants import DEFAULT_PROFILE_ID, ENV_CONSOLE, MSX_LARGE_SPRITE_SIZE, TILE_WIDTH
from .exceptions import ProfileNotFoundError, SpriteCodecError
from .image_utils import load_png_frame, render_tiles
from .logging_config import LOG_LEVELS, get_logger, setup_logging
from .profile_registry import create_default_registry
from .pvr_utils import PixelFormat
from .sprite_exporter import export_textures, export_tiles, texture_extension

logger = get_logger('png_to_tiles')


def load_frames(paths):
    """
    Load PNG files as RGBA frames of one shared size.

    Returns:
        Tuple of (frames, width, height)

    Raises:
        ValueError: If the frames differ in size
    """
    frames = [load_png_frame(path) for path in paths]
    height, width = frames[0].shape[:2]
    for path, frame in zip(paths, frames):
        if frame.shape[:2] != (height, width):
            raise ValueError(
                f"{path} is {frame.shape[1]}x{frame.shape[0]}, expected {width}x{height}"
            )
    return frames, width, height


def write_files(files):
    for name, data in files.items():
        Path(name).write_bytes(data)
        print(f"Wrote {len(data)} bytes to {name}")


def export_tile_files(profile, frames, width, height, args):
    result = export_tiles(
        profile, frames, width, height,
        include_palette=not args.no_palette,
        sprite_size=args.sprite_size,
        hardware_shades=args.hardware_shades,
    )
    print(f"Converted {result.frame_count} frame(s), {result.tile_count} tiles "
          f"({result.tiles_per_frame} per frame)")
    write_files(result.files(args.output))

    if args.preview:
        preview = render_tiles(
            result.tile_data, result.tile_count, 1,
            profile.tile_format, result.palette_colors,
        )
        preview_name = f"{args.output}_preview.png"
        preview.save(preview_name)
        print(f"Created preview: {preview_name}")


def export_texture_files(profile, frames, width, height, args):
    textures = export_textures(
        profile, frames, width, height,
        pixel_format=PixelFormat[args.pixel_format],
        twiddled=not args.no_twiddle,
        include_global_index=args.gbix,
        raw=args.raw,
    )
    extension = texture_extension(args.raw)
    if len(textures) == 1:
        write_files({args.output + extension: textures[0]})
    else:
        write_files({f"{args.output}_{index}{extension}": data
                     for index, data in enumerate(textures)})


def build_parser(console_ids):
    parser = argparse.ArgumentParser(
        description='Convert PNG sprite frames to retro console binary formats'
    )
    parser.add_argument('inputs', nargs='*', help='PNG files, one per frame')
    parser.add_argument('--console', choices=console_ids,
                        default=os.environ.get(ENV_CONSOLE) or None,
                        help=f'Console profile (default: ${ENV_CONSOLE})')
    parser.add_argument('--output', help='Output base name (default: first input without extension)')
    parser.add_argument('--no-palette', action='store_true', help='Skip the palette file')
    parser.add_argument('--sprite-size', type=int, default=TILE_WIDTH,
                        choices=[TILE_WIDTH, MSX_LARGE_SPRITE_SIZE],
                        help='MSX1 sprite pattern size (default: 8)')
    parser.add_argument('--hardware-shades', action='store_true',
                        help='Map Game Boy colors to their LCD shade numbers')
    parser.add_argument('--pixel-format', default=PixelFormat.ARGB1555.name,
                        choices=[fmt.name for fmt in PixelFormat],
                        help='Texture texel format (default: ARGB1555)')
    parser.add_argument('--no-twiddle', action='store_true', help='Store texture texels row-major')
    parser.add_argument('--gbix', action='store_true', help='Prepend a GBIX header to textures')
    parser.add_argument('--raw', action='store_true', help='Write headerless .bin textures')
    parser.add_argument('--preview', action='store_true', help='Write a PNG preview of the tiles')
    parser.add_argument('--list-consoles', action='store_true', help='List console profiles and exit')
    parser.add_argument('--log-level', default='WARNING', type=str.upper, choices=LOG_LEVELS,
                        help='Log level (default: WARNING)')
    return parser


def main(argv=None):
    registry = create_default_registry()
    parser = build_parser(registry.registered_ids())
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    if args.list_consoles:
        for profile in registry.all():
            limit = 'unlimited' if profile.max_colors is None else profile.max_colors
            print(f"{profile.id:10} {profile.name} (colors: {limit})")
        return 0

    if not args.inputs:
        parser.print_usage()
        print("Error: no input files")
        return 1

    for path in args.inputs:
        if not os.path.exists(path):
            print(f"Error: Input file '{path}' not found")
            return 1

    try:
        registry.set_active(args.console or DEFAULT_PROFILE_ID)
    except ProfileNotFoundError as e:
        print(f"Error: {e}")
        return 1
    profile = registry.get_active()
    if not profile.tile_format and not profile.texture:
        print(f"Error: {profile.name} has no binary export format, choose a console with --console")
        return 1

    if args.output is None:
        args.output = os.path.splitext(args.inputs[0])[0]

    try:
        frames, width, height = load_frames(args.inputs)
        print(f"Console: {profile.name}")
        print(f"Frames: {len(frames)} at {width}x{height}")
        if profile.texture:
            export_texture_files(profile, frames, width, height, args)
        else:
            export_tile_files(profile, frames, width, height, args)
    except SpriteCodecError as e:
        print(f"Error: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command-line tools for inspecting and unpacking MKF archives."""

from __future__ import annotations

import argparse
import struct
import sys
from pathlib import Path

from .archive import SPRITE_SIGNATURES, MkfArchive, parse_sprite
from .pixels import PixelFormat

_FORMATS = {fmt.name.lower(): fmt for fmt in PixelFormat}


def _open(args: argparse.Namespace) -> MkfArchive:
    return MkfArchive(args.archive, _FORMATS[args.pixel_format])


def _info(args: argparse.Namespace) -> int:
    with _open(args) as archive:
        for index in range(len(archive)):
            info = archive.chunk_info(index)
            print(f"chunk {index}: offset = 0x{info.offset:08x}")
            print(
                f"real size = {info.real_size}, "
                f"original size = {info.stored_size}, "
                f"gdata offset = 0x{info.graphics_offset:08x}, "
                f"gsize = {info.graphics_size}"
            )
    return 0


def _dump(args: argparse.Namespace) -> int:
    output = Path(args.output)
    output.mkdir(parents=True, exist_ok=True)
    with _open(args) as archive:
        for index in range(len(archive)):
            data = archive.read(index)
            if args.no_smp_spr and data[:4] in SPRITE_SIGNATURES:
                continue
            (output / f"{index:03d}.data").write_bytes(data)
    return 0


def _sprite(args: argparse.Namespace) -> int:
    output = Path(args.output)
    output.mkdir(parents=True, exist_ok=True)
    with _open(args) as archive:
        sprite = parse_sprite(archive.read(args.index))
    for number, frame in enumerate(sprite.frames):
        print(
            f"width = {frame.width}, height = {frame.height}, "
            f"x = {frame.x}, y = {frame.y}"
        )
        raw = struct.pack(f"<{len(frame.pixels)}H", *frame.pixels)
        (output / f"data{args.index}.{number:02d}.data").write_bytes(raw)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mkfkit", description="Inspect and unpack MKF archives."
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("archive", help="path of the MKF file")
    common.add_argument(
        "--pixel-format",
        choices=sorted(_FORMATS),
        default="rgb565",
        help="layout to convert pixel data to (default: rgb565)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser(
        "info", parents=[common], help="list every chunk and its header"
    )
    info.set_defaults(handler=_info)

    dump = commands.add_parser(
        "dump", parents=[common], help="write every chunk to NNN.data"
    )
    dump.add_argument("-o", "--output", default=".", help="output directory")
    dump.add_argument(
        "--no-smp-spr", action="store_true", help="skip sprite chunks"
    )
    dump.set_defaults(handler=_dump)

    sprite = commands.add_parser(
        "sprite", parents=[common], help="write the frames of a sprite chunk"
    )
    sprite.add_argument("index", type=int, help="chunk index")
    sprite.add_argument("-o", "--output", default=".", help="output directory")
    sprite.set_defaults(handler=_sprite)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the exit status."""
    args = _build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (OSError, ValueError, IndexError) as exc:
        print(f"mkfkit: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
"""Command line interface for truecolors."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .convert import (
    ColorParseError,
    any_color_to_legacy,
    any_color_to_normalized,
    format_color,
    parse_color,
    parse_normalized_color,
)
from .host import HostApi
from .patch import RawColorApi, install
from .pillow_host import PillowImageData


class CliError(Exception):
    """Raised for command line problems such as missing or existing files."""


@dataclass
class InvertOptions:
    """Options for the ``invert`` command."""

    invert_alpha: bool = False
    force: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="truecolors",
        description=(
            "Work with colors in the classic [0-255] range on top of a [0.0-1.0] graphics API.\n"
            "Legacy colors are written as R,G,B[,A] (0-255) or #RRGGBB[AA]; "
            "normalized colors as R,G,B[,A] (0.0-1.0)."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert one color between the two ranges")
    convert.add_argument("color", help="Color to convert (e.g. 255,128,0 or #ff8000 or 1.0,0.5,0)")
    convert.add_argument(
        "--to",
        choices=["normalized", "legacy"],
        default="normalized",
        help="Target range; the input is read in the other one",
    )

    pixel = subparsers.add_parser("pixel", help="Print one pixel of an image in [0-255]")
    pixel.add_argument("image", help="Image file readable by Pillow")
    pixel.add_argument("x", type=int)
    pixel.add_argument("y", type=int)

    invert = subparsers.add_parser("invert", help="Invert the colors of an image")
    invert.add_argument("image", help="Image file readable by Pillow")
    invert.add_argument("-o", "--output", required=True, help="Destination image file")
    invert.add_argument(
        "--invert-alpha",
        action="store_true",
        help="Invert the alpha channel as well (kept by default)",
    )
    invert.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite an existing output file",
    )
    return parser


def _image_api() -> RawColorApi:
    return install(HostApi(image_data=PillowImageData))


def _load_image(path: str) -> PillowImageData:
    source = Path(path)
    if not source.is_file():
        raise CliError(f"Input image does not exist: {source}")
    return PillowImageData.from_file(source)


def convert_color(text: str, target: str) -> str:
    if target == "legacy":
        return format_color(any_color_to_legacy(parse_normalized_color(text)))
    return format_color(any_color_to_normalized(parse_color(text)))


def read_pixel(path: str, x: int, y: int) -> str:
    image = _load_image(path)
    width, height = image.get_dimensions()
    if not (0 <= x < width and 0 <= y < height):
        raise CliError(f"Pixel ({x}, {y}) is outside the {width}x{height} image")
    return format_color(_image_api().get_raw_pixel(image, x, y))


def invert_image(path: str, output: str, options: InvertOptions) -> Path:
    target = Path(output)
    if target.exists() and not options.force:
        raise CliError(f"Output file already exists (use --force to overwrite): {target}")
    image = _load_image(path)

    def invert(x: int, y: int, r: int, g: int, b: int, a: int) -> List[int]:
        return [255 - r, 255 - g, 255 - b, 255 - a if options.invert_alpha else a]

    _image_api().map_raw_pixel(image, invert)
    target.parent.mkdir(parents=True, exist_ok=True)
    return image.save(target)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "convert":
            print(convert_color(args.color, args.to))
        elif args.command == "pixel":
            print(read_pixel(args.image, args.x, args.y))
        else:
            options = InvertOptions()
            options.invert_alpha = args.invert_alpha
            options.force = args.force
            target = invert_image(args.image, args.output, options)
            print(f"wrote {target}")
        return 0
    except (ColorParseError, CliError) as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

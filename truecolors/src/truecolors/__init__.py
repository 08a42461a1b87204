"""True colors for a [0.0-1.0] graphics API.

This package adds "raw" variants of the host graphics functions that accept
and return colors in the classic [0-255] range and convert to the host's
[0.0-1.0] range on the fly. ``install`` adds the raw names next to the
originals; ``apply_patch`` replaces the originals so code written for the old
range keeps working. It can also be invoked through the CLI (``python -m
truecolors``).
"""

from .convert import (
    ColorParseError,
    Container,
    Positional,
    any_color_to_legacy,
    any_color_to_normalized,
    channel_to_legacy,
    channel_to_normalized,
    classify_color_args,
    color_to_legacy,
    color_to_normalized,
    container_to_legacy,
    container_to_normalized,
    is_container,
    parse_color,
)
from .host import HostApi, OriginalFunctions
from .patch import RawColorApi, apply_patch, install, is_patched

__version__ = "0.1.0"

__all__ = [
    "ColorParseError",
    "Container",
    "HostApi",
    "OriginalFunctions",
    "Positional",
    "RawColorApi",
    "any_color_to_legacy",
    "any_color_to_normalized",
    "apply_patch",
    "channel_to_legacy",
    "channel_to_normalized",
    "classify_color_args",
    "color_to_legacy",
    "color_to_normalized",
    "container_to_legacy",
    "container_to_normalized",
    "install",
    "is_container",
    "is_patched",
    "parse_color",
]

"""Channel conversions between the legacy [0-255] and normalized [0.0-1.0] ranges."""

# Conventions
# Range       | Type  | Domain     | Notes
# ------------|-------|------------|-----------------------------------------------
# legacy      | int   | 0..255     | pre-11 convention, restored by the raw API
# normalized  | float | 0.0..1.0   | what the host graphics API uses internally
#
# legacy -> normalized : value / 255
# normalized -> legacy : floor(value * 255 + 0.5)   (ties round up)
#
# A color is 3 or 4 channels (R, G, B, optional A). An absent alpha stays
# absent: 3 channels in, 3 channels out.

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Tuple, Union

Channel = Union[int, float]
Channels = Tuple[Channel, ...]

LEGACY_MAX = 255


class ColorParseError(ValueError):
    """Raised when a textual color cannot be parsed."""


def channel_to_legacy(normalized: float) -> int:
    return math.floor(normalized * LEGACY_MAX + 0.5)


def channel_to_normalized(legacy: float) -> float:
    return legacy / LEGACY_MAX


def color_to_legacy(r, g, b, a=None) -> Channels:
    """Convert RGB(A) channels from [0-1] to [0-255]."""

    if a is None:
        return (channel_to_legacy(r), channel_to_legacy(g), channel_to_legacy(b))
    return (
        channel_to_legacy(r),
        channel_to_legacy(g),
        channel_to_legacy(b),
        channel_to_legacy(a),
    )


def color_to_normalized(r, g, b, a=None) -> Channels:
    """Convert RGB(A) channels from [0-255] to [0-1]."""

    if a is None:
        return (r / LEGACY_MAX, g / LEGACY_MAX, b / LEGACY_MAX)
    return (r / LEGACY_MAX, g / LEGACY_MAX, b / LEGACY_MAX, a / LEGACY_MAX)


def is_container(value: object) -> bool:
    """Return True when ``value`` holds a whole color rather than one channel."""

    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _repack(container: Sequence[Channel], channels: Channels) -> Sequence[Channel]:
    if isinstance(container, list):
        return list(channels)
    return channels


def container_to_legacy(container: Sequence[Channel]) -> Sequence[Channel]:
    """Convert a color container from [0-1] to [0-255].

    A new container is returned; lists stay lists and every other sequence
    comes back as a tuple.
    """

    return _repack(container, color_to_legacy(*container))


def container_to_normalized(container: Sequence[Channel]) -> Sequence[Channel]:
    """Convert a color container from [0-255] to [0-1]."""

    return _repack(container, color_to_normalized(*container))


@dataclass(frozen=True)
class Positional:
    """Channels passed as separate arguments: ``f(r, g, b, a)``."""

    channels: Channels


@dataclass(frozen=True)
class Container:
    """Channels passed as a single sequence: ``f((r, g, b, a))``."""

    channels: Sequence[Channel]


ColorArgs = Union[Positional, Container]


def classify_color_args(*args) -> ColorArgs:
    """Tell which encoding a caller used for a color argument list."""

    if args and is_container(args[0]):
        return Container(args[0])
    return Positional(args)


def any_color_to_legacy(*args) -> Channels:
    """Convert a color given as channels or as a container from [0-1] to [0-255].

    The result is always the unpacked channel tuple.
    """

    color = classify_color_args(*args)
    if isinstance(color, Container):
        return tuple(container_to_legacy(color.channels))
    return color_to_legacy(*color.channels)


def any_color_to_normalized(*args) -> Channels:
    """Convert a color given as channels or as a container from [0-255] to [0-1]."""

    color = classify_color_args(*args)
    if isinstance(color, Container):
        return tuple(container_to_normalized(color.channels))
    return color_to_normalized(*color.channels)


def _split_channels(text: str) -> List[str]:
    text = text.strip()
    if text.startswith("#"):
        hex_text = text[1:]
        if len(hex_text) not in (6, 8):
            raise ColorParseError(f"Hex color must have 6 or 8 digits: {text}")
        return [str(int(hex_text[i : i + 2], 16)) for i in range(0, len(hex_text), 2)]
    return [part.strip() for part in text.split(",")]


def parse_color(text: str) -> Channels:
    """Parse ``"255,128,0"``, ``"255,128,0,64"`` or ``"#ff8000[40]"`` into legacy channels."""

    try:
        parts = _split_channels(text)
    except ValueError as exc:
        raise ColorParseError(f"Invalid hex color: {text}") from exc
    if len(parts) not in (3, 4):
        raise ColorParseError("Color must have three or four components")
    values = []
    for part in parts:
        try:
            values.append(int(part, 10))
        except ValueError as exc:
            raise ColorParseError(f"Invalid color component: {part}") from exc
    if any(not (0 <= v <= LEGACY_MAX) for v in values):
        raise ColorParseError("Color components must be between 0 and 255")
    return tuple(values)


def parse_normalized_color(text: str) -> Channels:
    """Parse ``"1.0,0.5,0"`` into normalized channels."""

    parts = [part.strip() for part in text.strip().split(",")]
    if len(parts) not in (3, 4):
        raise ColorParseError("Color must have three or four components")
    values = []
    for part in parts:
        try:
            values.append(float(part))
        except ValueError as exc:
            raise ColorParseError(f"Invalid color component: {part}") from exc
    if any(not (0.0 <= v <= 1.0) for v in values):
        raise ColorParseError("Color components must be between 0.0 and 1.0")
    return tuple(values)


def format_color(channels: Sequence[Channel]) -> str:
    return ",".join(f"{c:.6g}" if isinstance(c, float) else str(c) for c in channels)

"""Raw counterparts of the host functions, working in the [0-255] range.

Each factory takes the captured original functions of one surface and returns
``{raw name: function}``. Image data, particle system, sprite batch and shader
functions take the host object as their first argument so they can be bound
as methods. Note that every raw call converts twice and costs more than the
original; ``map_raw_pixel`` pays that for each pixel.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from .convert import (
    Channels,
    any_color_to_normalized,
    channel_to_normalized,
    color_to_legacy,
    color_to_normalized,
    container_to_legacy,
    container_to_normalized,
    is_container,
)
from .host import OriginalFunctions

RawFunctions = Dict[str, Callable[..., Any]]
Originals = Mapping[str, Callable[..., Any]]


def _getter(original: Callable[..., Sequence[float]]) -> Callable[[], Channels]:
    def get_raw() -> Channels:
        return color_to_legacy(*original())

    return get_raw


def _setter(original: Callable[..., Any]) -> Callable[..., Any]:
    def set_raw(*color: Any) -> Any:
        return original(*any_color_to_normalized(*color))

    return set_raw


def _clear_args_to_normalized(args: Sequence[Any]) -> list:
    converted = []
    for arg in args:
        if isinstance(arg, bool):
            converted.append(arg)
        elif is_container(arg):
            converted.append(container_to_normalized(arg))
        elif isinstance(arg, (int, float)):
            converted.append(channel_to_normalized(arg))
        else:
            converted.append(arg)
    return converted


def graphics_functions(originals: Originals) -> RawFunctions:
    clear = originals["clear"]

    def raw_clear(*args: Any) -> Any:
        """Clear with colors in [0-255]; flag-only calls go straight through."""

        if not args or isinstance(args[0], bool):
            return clear(*args)
        return clear(*_clear_args_to_normalized(args))

    functions: RawFunctions = {"raw_clear": raw_clear}
    for name in ("color", "background_color", "color_mask"):
        get_raw = _getter(originals[f"get_{name}"])
        set_raw = _setter(originals[f"set_{name}"])
        get_raw.__name__ = f"get_raw_{name}"
        set_raw.__name__ = f"set_raw_{name}"
        functions[get_raw.__name__] = get_raw
        functions[set_raw.__name__] = set_raw
    return functions


def image_data_functions(originals: Originals) -> RawFunctions:
    get_pixel = originals["get_pixel"]
    set_pixel = originals["set_pixel"]
    map_pixel = originals["map_pixel"]

    def get_raw_pixel(self: Any, x: int, y: int) -> Channels:
        return color_to_legacy(*get_pixel(self, x, y))

    def set_raw_pixel(self: Any, x: int, y: int, *color: Any) -> Any:
        return set_pixel(self, x, y, *any_color_to_normalized(*color))

    def map_raw_pixel(self: Any, fn: Callable[..., Sequence[int]], *region: int) -> Any:
        """Run ``fn(x, y, r, g, b, a)`` over the pixels with channels in [0-255]."""

        def normalized_fn(x: int, y: int, *color: float) -> Channels:
            return color_to_normalized(*fn(x, y, *color_to_legacy(*color)))

        return map_pixel(self, normalized_fn, *region)

    return {
        "get_raw_pixel": get_raw_pixel,
        "set_raw_pixel": set_raw_pixel,
        "map_raw_pixel": map_raw_pixel,
    }


def particle_system_functions(originals: Originals) -> RawFunctions:
    get_colors = originals["get_colors"]
    set_colors = originals["set_colors"]

    def set_raw_colors(self: Any, *colors: Any) -> Any:
        # all containers or all bare channels, never mixed
        if colors and is_container(colors[0]):
            converted = [container_to_normalized(color) for color in colors]
        else:
            converted = [channel_to_normalized(channel) for channel in colors]
        return set_colors(self, *converted)

    def get_raw_colors(self: Any) -> tuple:
        return tuple(container_to_legacy(color) for color in get_colors(self))

    return {"get_raw_colors": get_raw_colors, "set_raw_colors": set_raw_colors}


def sprite_batch_functions(originals: Originals) -> RawFunctions:
    get_color = originals["get_color"]
    set_color = originals["set_color"]

    def get_raw_color(self: Any) -> Optional[Channels]:
        """Return the batch color in [0-255], or None when vertex colors are used."""

        color = get_color(self)
        if not color:
            return None
        return color_to_legacy(*color)

    def set_raw_color(self: Any, *color: Any) -> Any:
        if not color:
            return set_color(self)
        return set_color(self, *any_color_to_normalized(*color))

    return {"get_raw_color": get_raw_color, "set_raw_color": set_raw_color}


def shader_functions(originals: Originals) -> RawFunctions:
    send_color = originals["send_color"]

    def send_raw_color(self: Any, name: str, *colors: Sequence[int]) -> Any:
        return send_color(self, name, *(container_to_normalized(color) for color in colors))

    return {"send_raw_color": send_raw_color}


SURFACE_FACTORIES: Mapping[str, Callable[[Originals], RawFunctions]] = {
    "graphics": graphics_functions,
    "image_data": image_data_functions,
    "particle_system": particle_system_functions,
    "sprite_batch": sprite_batch_functions,
    "shader": shader_functions,
}


def build_raw_functions(originals: OriginalFunctions) -> Dict[str, RawFunctions]:
    """Build the raw functions for every surface present in ``originals``."""

    return {
        surface: SURFACE_FACTORIES[surface](originals.functions[surface])
        for surface in originals.surfaces()
    }

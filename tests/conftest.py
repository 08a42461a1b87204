"""Fake host graphics API working in the [0.0-1.0] range.

Every ``host`` fixture builds fresh classes, because patching rebinds names
on the classes themselves.
"""
from __future__ import annotations

import pytest

from truecolors.host import HostApi


class FakeGraphics:
    def __init__(self):
        self.color = (1.0, 1.0, 1.0, 1.0)
        self.background = (0.0, 0.0, 0.0, 1.0)
        self.mask = (1.0, 1.0, 1.0, 1.0)
        self.clear_calls = []

    def clear(self, *args):
        self.clear_calls.append(args)
        return "cleared"

    def get_color(self):
        return self.color

    def set_color(self, r, g, b, a=1.0):
        self.color = (r, g, b, a)

    def get_background_color(self):
        return self.background

    def set_background_color(self, r, g, b, a=1.0):
        self.background = (r, g, b, a)

    def get_color_mask(self):
        return self.mask

    def set_color_mask(self, r, g, b, a=1.0):
        self.mask = (r, g, b, a)


class FakeImageData:
    def __init__(self, width, height, fill=(0.0, 0.0, 0.0, 1.0)):
        self.width = width
        self.height = height
        self.pixels = {(x, y): tuple(fill) for x in range(width) for y in range(height)}
        self.seen = []

    def get_pixel(self, x, y):
        return self.pixels[x, y]

    def set_pixel(self, x, y, r, g, b, a=1.0):
        self.pixels[x, y] = (r, g, b, a)

    def map_pixel(self, fn, x=0, y=0, width=None, height=None):
        width = self.width - x if width is None else width
        height = self.height - y if height is None else height
        for py in range(y, y + height):
            for px in range(x, x + width):
                self.seen.append((px, py))
                self.pixels[px, py] = tuple(fn(px, py, *self.pixels[px, py]))


class FakeParticleSystem:
    def __init__(self):
        self.colors = ((1.0, 1.0, 1.0, 1.0),)
        self.last_args = None

    def get_colors(self):
        return self.colors

    def set_colors(self, *args):
        self.last_args = args
        if args and isinstance(args[0], (tuple, list)):
            self.colors = tuple(tuple(color) for color in args)
        else:
            self.colors = tuple(tuple(args[i : i + 4]) for i in range(0, len(args), 4))


class FakeSpriteBatch:
    def __init__(self):
        self.color = None

    def get_color(self):
        return self.color

    def set_color(self, *color):
        self.color = tuple(color) if color else None


class FakeShader:
    def __init__(self):
        self.sent = {}

    def send_color(self, name, *colors):
        if not colors:
            raise TypeError("send_color() needs at least one color")
        self.sent[name] = colors
        return len(colors)


def make_host() -> HostApi:
    return HostApi(
        graphics=FakeGraphics(),
        image_data=type("ImageData", (FakeImageData,), {}),
        particle_system=type("ParticleSystem", (FakeParticleSystem,), {}),
        sprite_batch=type("SpriteBatch", (FakeSpriteBatch,), {}),
        shader=type("Shader", (FakeShader,), {}),
    )


@pytest.fixture
def host() -> HostApi:
    return make_host()

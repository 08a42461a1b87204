"""Image data surface backed by a Pillow image.

``PillowImageData`` speaks the host convention (channels in [0.0-1.0]) so the
raw functions can be installed on it like on any other image data class.
Pixels are stored as 8-bit RGBA; a normalized value written is kept as the
nearest ``k / 255``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from PIL import Image

from .convert import Channels, channel_to_legacy, channel_to_normalized


class PillowImageData:
    """Pixel access over a ``PIL.Image.Image`` in the normalized range."""

    def __init__(self, image: Image.Image):
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self._pixels = self.image.load()

    @classmethod
    def new(cls, width: int, height: int) -> "PillowImageData":
        return cls(Image.new("RGBA", (width, height), (0, 0, 0, 0)))

    @classmethod
    def from_file(cls, path: str | Path) -> "PillowImageData":
        with Image.open(path) as image:
            image.load()
            return cls(image.convert("RGBA"))

    def save(self, path: str | Path) -> Path:
        target = Path(path)
        self.image.save(target)
        return target

    def get_width(self) -> int:
        return self.image.width

    def get_height(self) -> int:
        return self.image.height

    def get_dimensions(self) -> Tuple[int, int]:
        return self.image.size

    def _check_position(self, x: int, y: int) -> None:
        if not (0 <= x < self.image.width and 0 <= y < self.image.height):
            raise IndexError(f"Pixel position out of range: ({x}, {y})")

    def get_pixel(self, x: int, y: int) -> Channels:
        self._check_position(x, y)
        return tuple(channel_to_normalized(c) for c in self._pixels[x, y])

    def set_pixel(self, x: int, y: int, r, g=None, b=None, a=None) -> None:
        """Set one pixel from channels or from a single container; alpha defaults to 1."""

        self._check_position(x, y)
        if g is None:
            r, g, b, *rest = r
            a = rest[0] if rest else None
        if a is None:
            a = 1.0
        self._pixels[x, y] = tuple(
            max(0, min(255, channel_to_legacy(c))) for c in (r, g, b, a)
        )

    def map_pixel(
        self,
        fn: Callable[..., Sequence[float]],
        x: int = 0,
        y: int = 0,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        """Replace every pixel of the region with ``fn(x, y, r, g, b, a)``."""

        if width is None:
            width = self.image.width - x
        if height is None:
            height = self.image.height - y
        if x < 0 or y < 0 or x + width > self.image.width or y + height > self.image.height:
            raise IndexError(f"Region out of range: ({x}, {y}, {width}, {height})")

        for py in range(y, y + height):
            for px in range(x, x + width):
                result = fn(px, py, *self.get_pixel(px, py))
                self.set_pixel(px, py, *result)

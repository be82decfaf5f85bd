from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol, Set, Tuple

from PIL import Image, ImageOps

from ..errors import InvalidInput

RGBA = Tuple[int, int, int, int]

SUPPORTED_EXTENSIONS: Set[str] = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"}


class PixelSource(Protocol):
    """Anything that can report RGBA samples for in-bounds coordinates."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def pixel(self, x: int, y: int) -> RGBA: ...


@dataclass(frozen=True)
class PixelBuffer:
    """Dense row-major RGBA samples, four bytes per pixel."""

    width: int
    height: int
    rgba: bytes

    def validate(self) -> None:
        if self.width <= 0:
            raise InvalidInput("width", f"image width must be positive, got {self.width}")
        if self.height <= 0:
            raise InvalidInput("height", f"image height must be positive, got {self.height}")
        expected = self.width * self.height * 4
        if len(self.rgba) != expected:
            raise InvalidInput("rgba", f"expected {expected} bytes of RGBA data, got {len(self.rgba)}")

    def pixel(self, x: int, y: int) -> RGBA:
        offset = (y * self.width + x) * 4
        r, g, b, a = self.rgba[offset : offset + 4]
        return r, g, b, a

    def to_image(self) -> Image.Image:
        self.validate()
        return Image.frombytes("RGBA", (self.width, self.height), self.rgba)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(img.width, img.height, img.tobytes())

    @classmethod
    def from_source(cls, source: PixelSource) -> "PixelBuffer":
        if isinstance(source, PixelBuffer):
            return source
        data = bytearray()
        for y in range(source.height):
            for x in range(source.width):
                data += bytes(source.pixel(x, y))
        return cls(source.width, source.height, bytes(data))


def load_image(path: str) -> Image.Image:
    with Image.open(path) as img:
        img = ImageOps.exif_transpose(img)
        return img.copy()


def load_pixels(path: str) -> PixelBuffer:
    """Decode an image file into a PixelBuffer."""
    validate_input_path(path)
    return PixelBuffer.from_image(load_image(path))


def validate_input_path(path: str) -> None:
    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise InvalidInput("path", "supported formats: " + ", ".join(sorted(SUPPORTED_EXTENSIONS)))
    if not os.path.isfile(path):
        raise FileNotFoundError(f"File not found: {path}")

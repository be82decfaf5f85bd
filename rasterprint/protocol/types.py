from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from PIL import Image

from ..errors import InvalidInput, require_range

DEFAULT_WIDTH = 384
DEFAULT_THRESHOLD = 128
DEFAULT_ALPHA_FLOOR = 20
DEFAULT_WHITE_FLOOR = 250
DEFAULT_TRIM_PADDING = 5


@dataclass(frozen=True)
class TrimSettings:
    """Content test and margin used by auto-trim."""

    alpha_floor: int = DEFAULT_ALPHA_FLOOR
    white_floor: int = DEFAULT_WHITE_FLOOR
    padding: int = DEFAULT_TRIM_PADDING

    def validate(self) -> None:
        require_range("trim.alpha_floor", self.alpha_floor, 0, 255)
        require_range("trim.white_floor", self.white_floor, 0, 256)
        require_range("trim.padding", self.padding, 0)


@dataclass(frozen=True)
class RasterOptions:
    """Per-call rasterization options."""

    target_width: int = DEFAULT_WIDTH
    threshold: int = DEFAULT_THRESHOLD
    auto_trim: bool = False
    trim: TrimSettings = field(default_factory=TrimSettings)

    def validate(self) -> None:
        """Raise InvalidInput for out-of-range options."""
        require_range("target_width", self.target_width, 1)
        require_range("threshold", self.threshold, 0, 255)
        self.trim.validate()


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive rectangle in source pixel coordinates."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def crop_box(self) -> Tuple[int, int, int, int]:
        """Return the half-open box Pillow's crop() expects."""
        return (self.left, self.top, self.right + 1, self.bottom + 1)

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class MonoBitmap:
    """Packed 1-bpp bitmap, 1 = ink, MSB is the leftmost pixel of each byte."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.width % 8 != 0:
            raise InvalidInput("width", f"bitmap width must be a positive multiple of 8, got {self.width}")
        if self.height <= 0:
            raise InvalidInput("height", f"bitmap height must be positive, got {self.height}")
        if len(self.data) != self.bytes_per_row * self.height:
            raise InvalidInput("data", "bitmap data length does not match its dimensions")

    @property
    def bytes_per_row(self) -> int:
        return self.width // 8

    def row(self, y: int) -> bytes:
        start = y * self.bytes_per_row
        return self.data[start : start + self.bytes_per_row]

    def get(self, x: int, y: int) -> int:
        """Return 1 if the pixel at (x, y) is ink."""
        byte = self.data[y * self.bytes_per_row + x // 8]
        return (byte >> (7 - x % 8)) & 1

    def ink_count(self) -> int:
        return sum(bin(byte).count("1") for byte in self.data)

    def to_image(self) -> Image.Image:
        """Render a preview; ink is black on white paper."""
        # Mode "1" treats a set bit as white, so invert before handing over.
        inverted = bytes(byte ^ 0xFF for byte in self.data)
        return Image.frombytes("1", (self.width, self.height), inverted)

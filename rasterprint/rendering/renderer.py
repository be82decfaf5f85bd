from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from PIL import Image

from ..protocol.commands import raster_cmd
from ..protocol.encoding import luminance, pack_rows
from ..protocol.types import BoundingBox, MonoBitmap, RasterOptions
from .pixels import PixelBuffer
from .trim import crop_region

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)

Binarizer = Callable[[int, int, int], bool]


@dataclass(frozen=True)
class RasterResult:
    bitmap: MonoBitmap
    commands: bytes
    bounds: Optional[BoundingBox] = None


class ThresholdBinarizer:
    """Marks a pixel as ink when its luma is strictly below the threshold."""

    def __init__(self, threshold: int) -> None:
        self.threshold = threshold

    def __call__(self, r: int, g: int, b: int) -> bool:
        return luminance(r, g, b) < self.threshold


def aligned_width(width: int) -> int:
    """Round a pixel width up to whole bytes."""
    if width % 8 == 0:
        return width
    return width + 8 - width % 8


def scaled_height(target_width: int, src_width: int, src_height: int) -> int:
    # Half-up rounding, never below one row.
    return max(1, int(target_width * src_height / src_width + 0.5))


def flatten_on_white(img: Image.Image) -> Image.Image:
    """Composite an RGBA image onto white paper and drop the alpha channel."""
    background = Image.new("RGBA", img.size, WHITE + (255,))
    return Image.alpha_composite(background, img).convert("RGB")


def scale_to_width(img: Image.Image, target_width: int) -> Image.Image:
    """Resize to target width preserving aspect ratio, then pad to whole bytes."""
    height = scaled_height(target_width, img.width, img.height)
    if img.size != (target_width, height):
        img = img.resize((target_width, height), Image.LANCZOS)
    width = aligned_width(target_width)
    if width == target_width:
        return img
    canvas = Image.new("RGB", (width, height), WHITE)
    canvas.paste(img, (0, 0))
    return canvas


def binarize(img: Image.Image, binarizer: Binarizer) -> MonoBitmap:
    """Threshold an RGB image whose width is a multiple of 8 into a MonoBitmap."""
    data = img.tobytes()
    pixels: List[int] = []
    for offset in range(0, len(data), 3):
        pixels.append(1 if binarizer(data[offset], data[offset + 1], data[offset + 2]) else 0)
    return MonoBitmap(img.width, img.height, pack_rows(pixels, img.width))


def rasterize(
    pixels: PixelBuffer,
    options: Optional[RasterOptions] = None,
    binarizer: Optional[Binarizer] = None,
) -> RasterResult:
    """Convert a pixel buffer into a MonoBitmap and its GS v 0 raster record."""
    options = options or RasterOptions()
    pixels.validate()
    options.validate()
    binarizer = binarizer or ThresholdBinarizer(options.threshold)

    img = flatten_on_white(pixels.to_image())
    bounds = None
    if options.auto_trim:
        bounds, rect = crop_region(pixels, options.trim)
        if (rect.width, rect.height) != img.size:
            img = img.crop(rect.crop_box)

    img = scale_to_width(img, options.target_width)
    bitmap = binarize(img, binarizer)
    logger.debug(
        "Rasterized %dx%d source into %dx%d bitmap",
        pixels.width,
        pixels.height,
        bitmap.width,
        bitmap.height,
    )
    return RasterResult(bitmap=bitmap, commands=raster_cmd(bitmap), bounds=bounds)

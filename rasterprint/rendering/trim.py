from __future__ import annotations

import logging
from typing import Optional, Tuple

from PIL import Image, ImageChops

from ..protocol.types import BoundingBox, TrimSettings
from .pixels import PixelBuffer

logger = logging.getLogger(__name__)


def is_content(r: int, g: int, b: int, a: int, settings: TrimSettings) -> bool:
    """Return True for pixels that are opaque enough and not near-white."""
    if a <= settings.alpha_floor:
        return False
    floor = settings.white_floor
    return r < floor and g < floor and b < floor


def content_mask(pixels: PixelBuffer, settings: TrimSettings) -> Image.Image:
    """Return an L mask that is 255 where is_content() holds and 0 elsewhere."""
    r, g, b, a = pixels.to_image().split()
    opaque = a.point(lambda v: 255 if v > settings.alpha_floor else 0)
    brightest = ImageChops.lighter(ImageChops.lighter(r, g), b)
    inked = brightest.point(lambda v: 255 if v < settings.white_floor else 0)
    return ImageChops.darker(opaque, inked)


def find_content_bounds(pixels: PixelBuffer, settings: TrimSettings) -> Optional[BoundingBox]:
    """Return the minimal box enclosing all content pixels, or None if there are none."""
    box = content_mask(pixels, settings).getbbox()
    if box is None:
        return None
    left, top, right, bottom = box
    return BoundingBox(left, top, right - 1, bottom - 1)


def pad_bounds(box: BoundingBox, padding: int, width: int, height: int) -> BoundingBox:
    """Grow a box by padding on every side, clamped to the image extent."""
    return BoundingBox(
        left=max(0, box.left - padding),
        top=max(0, box.top - padding),
        right=min(width - 1, box.right + padding),
        bottom=min(height - 1, box.bottom + padding),
    )


def crop_region(pixels: PixelBuffer, settings: TrimSettings) -> Tuple[Optional[BoundingBox], BoundingBox]:
    """Return (content_bounds, source_rect) for auto-trim.

    content_bounds is the unpadded box or None. source_rect is the padded box,
    or the full image when no content was found.
    """
    bounds = find_content_bounds(pixels, settings)
    if bounds is None:
        logger.debug("Auto-trim found no content; using the full %dx%d image", pixels.width, pixels.height)
        return None, BoundingBox(0, 0, pixels.width - 1, pixels.height - 1)
    rect = pad_bounds(bounds, settings.padding, pixels.width, pixels.height)
    logger.debug("Auto-trim content %s, source rect %s", bounds, rect)
    return bounds, rect

from .pixels import PixelBuffer, PixelSource, SUPPORTED_EXTENSIONS, load_image, load_pixels
from .renderer import RasterResult, ThresholdBinarizer, rasterize
from .trim import find_content_bounds, is_content, pad_bounds

__all__ = [
    "find_content_bounds",
    "is_content",
    "load_image",
    "load_pixels",
    "pad_bounds",
    "PixelBuffer",
    "PixelSource",
    "RasterResult",
    "rasterize",
    "SUPPORTED_EXTENSIONS",
    "ThresholdBinarizer",
]

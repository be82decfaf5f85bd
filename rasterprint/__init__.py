from .errors import InvalidInput, TransportError
from .protocol import MonoBitmap, RasterOptions, TrimSettings, build_job
from .rendering import PixelBuffer, RasterResult, rasterize
from .transport import TransportProfile, WriteSink, send

__version__ = "0.1.0"

__all__ = [
    "build_job",
    "InvalidInput",
    "MonoBitmap",
    "PixelBuffer",
    "RasterOptions",
    "RasterResult",
    "rasterize",
    "send",
    "TransportError",
    "TransportProfile",
    "TrimSettings",
    "WriteSink",
]

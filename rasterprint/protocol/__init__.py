from .commands import cut_cmd, feed_cmd, initialize_cmd, raster_cmd, raster_header
from .encoding import luminance, pack_line, pack_rows
from .job import DEFAULT_FEED_LINES, append_trailer, build_job
from .types import BoundingBox, MonoBitmap, RasterOptions, TrimSettings

__all__ = [
    "append_trailer",
    "BoundingBox",
    "build_job",
    "cut_cmd",
    "DEFAULT_FEED_LINES",
    "feed_cmd",
    "initialize_cmd",
    "luminance",
    "MonoBitmap",
    "pack_line",
    "pack_rows",
    "raster_cmd",
    "raster_header",
    "RasterOptions",
    "TrimSettings",
]

from __future__ import annotations

from typing import Optional

from .commands import cut_cmd, feed_cmd, initialize_cmd, raster_cmd
from .types import MonoBitmap

DEFAULT_FEED_LINES = 4


def build_job(
    bitmap: MonoBitmap,
    initialize: bool = False,
    feed_lines: Optional[int] = DEFAULT_FEED_LINES,
    cut: bool = False,
) -> bytes:
    """Build a full job: optional reset, raster record, trailing feed and cut."""
    job = bytearray()
    if initialize:
        job += initialize_cmd()
    job += raster_cmd(bitmap)
    return append_trailer(bytes(job), feed_lines, cut)


def append_trailer(commands: bytes, feed_lines: Optional[int] = DEFAULT_FEED_LINES, cut: bool = False) -> bytes:
    """Append feed/cut control commands after an already encoded raster record."""
    job = bytearray(commands)
    if feed_lines:
        job += feed_cmd(feed_lines)
    if cut:
        job += cut_cmd()
    return bytes(job)

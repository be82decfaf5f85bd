from __future__ import annotations

from ..errors import InvalidInput, require_range
from .types import MonoBitmap

ESC = 0x1B
GS = 0x1D

INITIALIZE = bytes([ESC, 0x40])
FEED_PREFIX = bytes([ESC, 0x64])
CUT = bytes([GS, 0x56, 0x42, 0x00])
RASTER_NORMAL = bytes([GS, 0x76, 0x30, 0x00])

MAX_WORD = 0xFFFF


def initialize_cmd() -> bytes:
    """Build ESC @ (reset printer state)."""
    return INITIALIZE


def feed_cmd(lines: int) -> bytes:
    """Build ESC d n (print buffer and feed n lines)."""
    require_range("feed_lines", lines, 0, 255)
    return FEED_PREFIX + bytes([lines])


def cut_cmd() -> bytes:
    """Build GS V 66 0 (feed to cutter and partial cut)."""
    return CUT


def raster_header(bytes_per_row: int, rows: int) -> bytes:
    """Build the GS v 0 header: opcode, xL xH, yL yH."""
    if not 0 < bytes_per_row <= MAX_WORD:
        raise InvalidInput("bytes_per_row", f"{bytes_per_row} does not fit the raster header")
    if not 0 < rows <= MAX_WORD:
        raise InvalidInput("rows", f"{rows} does not fit the raster header")
    return RASTER_NORMAL + bytes_per_row.to_bytes(2, "little") + rows.to_bytes(2, "little")


def raster_cmd(bitmap: MonoBitmap) -> bytes:
    """Build a complete raster bit image record for the bitmap."""
    return raster_header(bitmap.bytes_per_row, bitmap.height) + bitmap.data

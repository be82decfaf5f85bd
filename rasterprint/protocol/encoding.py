from __future__ import annotations

from typing import Sequence


def luminance(r: int, g: int, b: int) -> float:
    """Return ITU-R BT.601 luma for an RGB sample."""
    return 0.299 * r + 0.587 * g + 0.114 * b


def pack_line(line: Sequence[int]) -> bytes:
    """Pack a 0/1 pixel line into bytes, MSB first, zero padded."""
    out = bytearray()
    for i in range(0, len(line), 8):
        chunk = line[i : i + 8]
        value = 0
        for bit, pix in enumerate(chunk):
            if pix:
                value |= 1 << (7 - bit)
        out.append(value)
    return bytes(out)


def pack_rows(pixels: Sequence[int], width: int) -> bytes:
    """Pack a row-major 0/1 buffer whose width is a multiple of 8."""
    if width % 8 != 0:
        raise ValueError("Width must be divisible by 8")
    out = bytearray()
    for start in range(0, len(pixels), width):
        out += pack_line(pixels[start : start + width])
    return bytes(out)
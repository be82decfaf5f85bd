from asyncio import sleep
from typing import List, Optional, Tuple

import pytest

from rasterprint.rendering.pixels import PixelBuffer


def solid(width: int, height: int, rgba: Tuple[int, int, int, int]) -> PixelBuffer:
    return PixelBuffer(width, height, bytes(rgba) * (width * height))


def with_square(
    width: int, height: int, left: int, top: int, size: int, rgba=(0, 0, 0, 255)
) -> PixelBuffer:
    data = bytearray(bytes((255, 255, 255, 255)) * (width * height))
    for y in range(top, top + size):
        for x in range(left, left + size):
            offset = (y * width + x) * 4
            data[offset : offset + 4] = bytes(rgba)
    return PixelBuffer(width, height, bytes(data))


class RecordingSink:
    def __init__(self, supports_unacknowledged: bool = True, fail_on: Optional[int] = None) -> None:
        self.supports_unacknowledged_write = supports_unacknowledged
        self.fail_on = fail_on
        self.writes: List[Tuple[str, bytes]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _record(self, mode: str, chunk: bytes) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await sleep(0)
            if self.fail_on is not None and len(self.writes) == self.fail_on:
                raise OSError("link lost")
            self.writes.append((mode, bytes(chunk)))
        finally:
            self.in_flight -= 1

    async def write_acknowledged(self, chunk: bytes) -> None:
        await self._record("ack", chunk)

    async def write_unacknowledged(self, chunk: bytes) -> None:
        await self._record("unack", chunk)

    @property
    def chunks(self) -> List[bytes]:
        return [chunk for _, chunk in self.writes]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import serial

from ..errors import TransportError

logger = logging.getLogger(__name__)

SERIAL_BAUD_RATE = 115200


class SerialWriteSink:
    """WriteSink over a serial port (USB CDC, /dev/rfcomm*, COM ports).

    Serial writes are flushed before returning, so every write is treated
    as acknowledged.
    """

    supports_unacknowledged_write = False

    def __init__(self, port: str, baud_rate: int = SERIAL_BAUD_RATE) -> None:
        self._port = port
        self._baud_rate = baud_rate
        self._serial: Optional[serial.Serial] = None

    def open(self) -> None:
        try:
            self._serial = serial.Serial(self._port, self._baud_rate, timeout=1, write_timeout=5)
        except serial.SerialException as exc:
            raise TransportError(RuntimeError(f"Serial connection failed: {exc}")) from exc
        logger.info("Opened %s at %d baud", self._port, self._baud_rate)

    def close(self) -> None:
        if self._serial is not None:
            self._serial.close()
            self._serial = None

    def __enter__(self) -> "SerialWriteSink":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    async def write_acknowledged(self, chunk: bytes) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_blocking, chunk)

    async def write_unacknowledged(self, chunk: bytes) -> None:
        raise TransportError(RuntimeError("Serial ports do not support unacknowledged writes"))

    def _write_blocking(self, chunk: bytes) -> None:
        if self._serial is None:
            raise RuntimeError(f"Serial port {self._port} is not open")
        self._serial.write(chunk)
        self._serial.flush()

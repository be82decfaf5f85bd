from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import AsyncIterator, Iterable, Optional, Sequence

from bleak import BleakClient
from bleak.backends.characteristic import BleakGATTCharacteristic
from bleak.exc import BleakError

from ..errors import TransportError
from .profile import TransportProfile
from .transmitter import use_unacknowledged

logger = logging.getLogger(__name__)

# Print services advertised by common 58 mm BLE printers and their clones.
PRINTER_SERVICE_UUIDS: Sequence[str] = (
    "000018f0-0000-1000-8000-00805f9b34fb",
    "e7810a71-73ae-499d-8c15-faa9aef0c3f2",
    "0000ffe0-0000-1000-8000-00805f9b34fb",
)

WRITE = "write"
WRITE_WITHOUT_RESPONSE = "write-without-response"


def is_writable(char: BleakGATTCharacteristic) -> bool:
    return WRITE in char.properties or WRITE_WITHOUT_RESPONSE in char.properties


class BleWriteSink:
    """WriteSink backed by a GATT characteristic of a connected BleakClient."""

    def __init__(self, client: BleakClient, characteristic: BleakGATTCharacteristic) -> None:
        self._client = client
        self._char = characteristic

    @property
    def characteristic(self) -> BleakGATTCharacteristic:
        return self._char

    @property
    def supports_unacknowledged_write(self) -> bool:
        return WRITE_WITHOUT_RESPONSE in self._char.properties

    @property
    def max_write_size(self) -> int:
        """Largest payload a single unacknowledged write may carry."""
        return self._char.max_write_without_response_size

    def fit_profile(self, profile: TransportProfile) -> TransportProfile:
        """Cap the chunk size to the link limit when writes go out unacknowledged."""
        if use_unacknowledged(self, profile):
            return profile.capped(self.max_write_size)
        return profile

    async def write_acknowledged(self, chunk: bytes) -> None:
        await self._client.write_gatt_char(self._char, chunk, response=True)

    async def write_unacknowledged(self, chunk: bytes) -> None:
        await self._client.write_gatt_char(self._char, chunk, response=False)


def find_write_characteristic(
    client: BleakClient, service_uuids: Iterable[str] = PRINTER_SERVICE_UUIDS
) -> Optional[BleakGATTCharacteristic]:
    """Return the first writable characteristic of the first known print service."""
    for uuid in service_uuids:
        service = client.services.get_service(uuid)
        if service is None:
            continue
        logger.debug("Found print service %s", uuid)
        for char in service.characteristics:
            if is_writable(char):
                return char
    return None


@contextlib.asynccontextmanager
async def connect_ble(
    address: str,
    timeout: float = 10.0,
    service_uuids: Iterable[str] = PRINTER_SERVICE_UUIDS,
) -> AsyncIterator[BleWriteSink]:
    """Connect to a BLE printer and yield a sink for its write characteristic."""
    try:
        client = BleakClient(address, timeout=timeout)
        await client.connect()
    except (BleakError, OSError, asyncio.TimeoutError) as exc:
        raise TransportError(exc) from exc
    try:
        char = find_write_characteristic(client, service_uuids)
        if char is None:
            raise TransportError(RuntimeError(f"No writable print characteristic found on {address}"))
        logger.info("Connected to %s, writing to characteristic %s", address, char.uuid)
        yield BleWriteSink(client, char)
    finally:
        await client.disconnect()

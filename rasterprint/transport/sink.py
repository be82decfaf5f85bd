from __future__ import annotations

from typing import Protocol


class WriteSink(Protocol):
    """Write capability of a connected printer link.

    Implementations own the connection; the transmitter only issues writes.
    """

    @property
    def supports_unacknowledged_write(self) -> bool: ...

    async def write_acknowledged(self, chunk: bytes) -> None:
        """Return once the peer confirmed receipt of the chunk."""
        ...

    async def write_unacknowledged(self, chunk: bytes) -> None:
        """Return once the chunk was issued locally."""
        ...

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterator, Optional

from ..errors import TransportError
from .profile import TransportProfile
from .sink import WriteSink

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def iter_chunks(data: bytes, chunk_size: int) -> Iterator[bytes]:
    """Yield consecutive slices of at most chunk_size bytes."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    for offset in range(0, len(data), chunk_size):
        yield data[offset : offset + chunk_size]


def chunk_count(length: int, chunk_size: int) -> int:
    return -(-length // chunk_size)


def use_unacknowledged(sink: WriteSink, profile: TransportProfile) -> bool:
    return profile.prefer_unacknowledged_writes and bool(sink.supports_unacknowledged_write)


async def send(
    data: bytes,
    sink: WriteSink,
    profile: TransportProfile,
    progress: Optional[ProgressCallback] = None,
) -> None:
    """Stream data to the sink one chunk at a time.

    Each write is awaited before the next one is issued and the profile's
    delay is slept between writes. The first failing write aborts the
    transfer with TransportError; bytes already written stay written.
    Cancellation propagates unchanged from either suspension point.
    """
    profile.validate()
    data = bytes(data)
    total = len(data)
    unacknowledged = use_unacknowledged(sink, profile)
    write = sink.write_unacknowledged if unacknowledged else sink.write_acknowledged
    logger.debug(
        "Sending %d bytes in %d chunks of <= %d bytes (%s writes, %d ms pacing)",
        total,
        chunk_count(total, profile.chunk_size),
        profile.chunk_size,
        "unacknowledged" if unacknowledged else "acknowledged",
        profile.inter_chunk_delay_ms,
    )
    sent = 0
    for index, chunk in enumerate(iter_chunks(data, profile.chunk_size)):
        if index and profile.inter_chunk_delay_ms:
            await asyncio.sleep(profile.delay_seconds)
        try:
            await write(chunk)
        except asyncio.CancelledError:
            logger.debug("Transfer cancelled at chunk %d after %d bytes", index, sent)
            raise
        except Exception as exc:
            logger.debug("Chunk %d failed after %d bytes: %s", index, sent, exc)
            raise TransportError(exc, chunk_index=index, bytes_sent=sent) from exc
        sent += len(chunk)
        if progress is not None:
            progress(sent, total)
    logger.debug("Sent %d bytes", sent)

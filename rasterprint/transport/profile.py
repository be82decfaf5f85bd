from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict

from ..errors import InvalidInput, require_range


@dataclass(frozen=True)
class TransportProfile:
    """Chunking and pacing for one transfer."""

    chunk_size: int
    inter_chunk_delay_ms: int = 0
    prefer_unacknowledged_writes: bool = True

    def validate(self) -> None:
        require_range("chunk_size", self.chunk_size, 1)
        require_range("inter_chunk_delay_ms", self.inter_chunk_delay_ms, 0)

    @property
    def delay_seconds(self) -> float:
        return self.inter_chunk_delay_ms / 1000.0

    def capped(self, max_chunk_size: int) -> "TransportProfile":
        """Return a copy whose chunks fit a link limited to max_chunk_size bytes."""
        if 0 < max_chunk_size < self.chunk_size:
            return replace(self, chunk_size=max_chunk_size)
        return self


NORMAL = TransportProfile(chunk_size=100, inter_chunk_delay_ms=20, prefer_unacknowledged_writes=True)
TURBO = TransportProfile(chunk_size=180, inter_chunk_delay_ms=4, prefer_unacknowledged_writes=True)
# 20 bytes is the payload of a default 23-byte BLE ATT MTU.
RELIABLE = TransportProfile(chunk_size=20, inter_chunk_delay_ms=30, prefer_unacknowledged_writes=False)

PROFILES: Dict[str, TransportProfile] = {
    "normal": NORMAL,
    "turbo": TURBO,
    "reliable": RELIABLE,
}


def get_profile(name: str) -> TransportProfile:
    profile = PROFILES.get(name.lower())
    if profile is None:
        raise InvalidInput("profile", f"unknown profile '{name}', choose from: " + ", ".join(sorted(PROFILES)))
    return profile

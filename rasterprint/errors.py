from __future__ import annotations

from typing import Any, Optional


class InvalidInput(ValueError):
    """Malformed image dimensions or out-of-range options."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


def require_range(field: str, value: Any, low: int, high: Optional[int] = None) -> None:
    """Raise InvalidInput unless low <= value (<= high)."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidInput(field, f"expected an integer, got {value!r}")
    if value < low or (high is not None and value > high):
        bounds = f"[{low}, {high}]" if high is not None else f">= {low}"
        raise InvalidInput(field, f"{value} is outside {bounds}")


class TransportError(RuntimeError):
    """A sink write or connection failed; the transfer was aborted."""

    def __init__(
        self,
        cause: BaseException,
        chunk_index: Optional[int] = None,
        bytes_sent: int = 0,
    ) -> None:
        if chunk_index is None:
            message = str(cause)
        else:
            message = f"Write of chunk {chunk_index} failed after {bytes_sent} bytes: {cause}"
        super().__init__(message)
        self.cause = cause
        self.chunk_index = chunk_index
        self.bytes_sent = bytes_sent

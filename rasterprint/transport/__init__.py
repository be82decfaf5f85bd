from .profile import NORMAL, PROFILES, RELIABLE, TURBO, TransportProfile, get_profile
from .sink import WriteSink
from .transmitter import chunk_count, iter_chunks, send

__all__ = [
    "chunk_count",
    "get_profile",
    "iter_chunks",
    "NORMAL",
    "PROFILES",
    "RELIABLE",
    "send",
    "TransportProfile",
    "TURBO",
    "WriteSink",
]

"""Low-level layout helpers (alignment, chunk padding)."""

from __future__ import annotations

from .constants import ALIGNMENT, JSON_PAD_BYTE

__all__ = ["aligned_length", "pad_json"]


def aligned_length(value: int) -> int:
    if value < 0:
        raise ValueError(f"length must be non-negative, got {value}")
    remainder = value % ALIGNMENT
    if remainder == 0:
        return value
    return value + (ALIGNMENT - remainder)


def pad_json(data: bytes) -> bytes:
    """Pad serialized JSON with spaces up to the chunk alignment."""
    return data + JSON_PAD_BYTE * (aligned_length(len(data)) - len(data))

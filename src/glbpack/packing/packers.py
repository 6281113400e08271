"""Pure binary packing functions for GLB headers.

All integers are little-endian uint32.
"""

from __future__ import annotations

import struct

from .constants import (
    CHUNK_HEADER_SIZE,
    FILE_HEADER_SIZE,
    GLB_MAGIC,
    GLB_VERSION,
)
from ..errors import internal_error

__all__ = [
    "pack_file_header",
    "pack_chunk_header",
    "unpack_file_header",
    "unpack_chunk_header",
]

_UINT32_MAX = 0xFFFFFFFF


def _check_u32(value: int, label: str) -> None:
    if not 0 <= value <= _UINT32_MAX:
        raise internal_error(
            f"{label} does not fit in uint32", {label: value}
        )


def pack_file_header(total_length: int, version: int = GLB_VERSION) -> bytes:
    _check_u32(total_length, "total_length")
    data = struct.pack("<III", GLB_MAGIC, version, total_length)
    assert len(data) == FILE_HEADER_SIZE
    return data


def pack_chunk_header(chunk_length: int, chunk_type: int) -> bytes:
    _check_u32(chunk_length, "chunk_length")
    data = struct.pack("<II", chunk_length, chunk_type)
    assert len(data) == CHUNK_HEADER_SIZE
    return data


def unpack_file_header(data: bytes, offset: int = 0) -> tuple[int, int, int]:
    return struct.unpack_from("<III", data, offset)


def unpack_chunk_header(data: bytes, offset: int) -> tuple[int, int]:
    return struct.unpack_from("<II", data, offset)

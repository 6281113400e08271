"""Binary constants for the GLB 2.0 container."""

from __future__ import annotations

GLB_MAGIC = 0x46546C67  # 'glTF'
GLB_VERSION = 2
CHUNK_TYPE_JSON = 0x4E4F534A  # 'JSON'
CHUNK_TYPE_BIN = 0x004E4942  # 'BIN\0'

FILE_HEADER_SIZE = 12  # magic + version + length
CHUNK_HEADER_SIZE = 8  # chunk length + chunk type

ALIGNMENT = 4
JSON_PAD_BYTE = b" "
BIN_PAD_BYTE = b"\x00"

__all__ = [
    "GLB_MAGIC",
    "GLB_VERSION",
    "CHUNK_TYPE_JSON",
    "CHUNK_TYPE_BIN",
    "FILE_HEADER_SIZE",
    "CHUNK_HEADER_SIZE",
    "ALIGNMENT",
    "JSON_PAD_BYTE",
    "BIN_PAD_BYTE",
]

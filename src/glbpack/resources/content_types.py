"""Content-type table for embedded glTF resources."""

from __future__ import annotations

from typing import Dict, List

__all__ = [
    "MIME_TYPES",
    "DEFAULT_MIME_TYPE",
    "DEFAULT_EXTENSION",
    "guess_mime_type",
    "guess_file_extension",
]

# Order matters: lookups return the first match.
MIME_TYPES: Dict[str, List[str]] = {
    "image/png": ["png"],
    "image/jpeg": ["jpg", "jpeg"],
    "image/vnd-ms.dds": ["dds"],
    "text/plain": ["glsl", "vert", "vs", "frag", "fs", "txt"],
}

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_EXTENSION = ".bin"


def guess_mime_type(filename: str) -> str:
    lowered = filename.lower()
    for mime_type, extensions in MIME_TYPES.items():
        for ext in extensions:
            if lowered.endswith("." + ext):
                return mime_type
    return DEFAULT_MIME_TYPE


def guess_file_extension(mime_type: str) -> str:
    extensions = MIME_TYPES.get(mime_type)
    if extensions:
        return "." + extensions[0]
    return DEFAULT_EXTENSION

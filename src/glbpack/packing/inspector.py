"""GLB inspection utilities.

Public functions:
- inspect_glb(data) -> dict
- validate_glb(info) -> list[str]
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..errors import E_GLB_CHUNK, E_GLB_HEADER, ContainerFormatError
from .constants import (
    CHUNK_HEADER_SIZE,
    CHUNK_TYPE_BIN,
    CHUNK_TYPE_JSON,
    FILE_HEADER_SIZE,
    GLB_MAGIC,
    GLB_VERSION,
)
from .packers import unpack_chunk_header, unpack_file_header

__all__ = ["Chunk", "inspect_glb", "validate_glb", "bin_slice"]


@dataclass(slots=True)
class Chunk:
    offset: int  # start of chunk data in the file
    length: int
    chunk_type: int


def _read_chunk(data: bytes, offset: int, label: str) -> Chunk:
    if offset + CHUNK_HEADER_SIZE > len(data):
        raise ContainerFormatError(
            code=E_GLB_CHUNK,
            message=f"Truncated {label} chunk header",
            context={"offset": offset, "size": len(data)},
        )
    length, chunk_type = unpack_chunk_header(data, offset)
    start = offset + CHUNK_HEADER_SIZE
    if start + length > len(data):
        raise ContainerFormatError(
            code=E_GLB_CHUNK,
            message=f"{label} chunk runs past end of data",
            context={"offset": start, "length": length, "size": len(data)},
        )
    return Chunk(offset=start, length=length, chunk_type=chunk_type)


def inspect_glb(data: bytes) -> Dict[str, Any]:
    if len(data) < FILE_HEADER_SIZE:
        raise ContainerFormatError(
            code=E_GLB_HEADER,
            message="Data shorter than GLB header",
            context={"size": len(data)},
        )
    magic, version, length = unpack_file_header(data)
    if magic != GLB_MAGIC:
        raise ContainerFormatError(
            code=E_GLB_HEADER,
            message=f"Bad magic 0x{magic:08X}",
            context={"magic": magic},
        )
    if version != GLB_VERSION:
        raise ContainerFormatError(
            code=E_GLB_HEADER,
            message=f"Unsupported GLB version {version}",
            context={"version": version},
        )
    json_chunk = _read_chunk(data, FILE_HEADER_SIZE, "JSON")
    if json_chunk.chunk_type != CHUNK_TYPE_JSON:
        raise ContainerFormatError(
            code=E_GLB_CHUNK,
            message="First chunk is not JSON",
            context={"chunk_type": json_chunk.chunk_type},
        )
    raw_json = data[json_chunk.offset : json_chunk.offset + json_chunk.length]
    try:
        document = json.loads(raw_json.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ContainerFormatError(
            code=E_GLB_CHUNK, message=f"JSON chunk does not parse: {e}"
        ) from e

    bin_chunk: Optional[Chunk] = None
    bin_offset = json_chunk.offset + json_chunk.length
    if bin_offset < len(data):
        bin_chunk = _read_chunk(data, bin_offset, "BIN")
        if bin_chunk.chunk_type != CHUNK_TYPE_BIN:
            raise ContainerFormatError(
                code=E_GLB_CHUNK,
                message="Second chunk is not BIN",
                context={"chunk_type": bin_chunk.chunk_type},
            )
    return {
        "header": {
            "magic": magic,
            "version": version,
            "length": length,
        },
        "file_size": len(data),
        "json": {
            "offset": json_chunk.offset,
            "length": json_chunk.length,
            "padding": len(raw_json) - len(raw_json.rstrip(b" ")),
            "document": document,
        },
        "bin": (
            None
            if bin_chunk is None
            else {
                "offset": bin_chunk.offset,
                "length": bin_chunk.length,
                "data": data[
                    bin_chunk.offset : bin_chunk.offset + bin_chunk.length
                ],
            }
        ),
    }


def bin_slice(info: Dict[str, Any], view_index: int) -> bytes:
    """Bytes addressed by ``bufferViews[view_index]`` inside the BIN chunk."""
    view = info["json"]["document"]["bufferViews"][view_index]
    start = view.get("byteOffset", 0)
    return info["bin"]["data"][start : start + view["byteLength"]]


def validate_glb(info: Dict[str, Any]) -> List[str]:
    problems: List[str] = []
    if info["header"]["length"] != info["file_size"]:
        problems.append(
            f"Header length {info['header']['length']} != file size {info['file_size']}"
        )
    if info["json"]["length"] % 4:
        problems.append("JSON chunk length is not 4-byte aligned")
    doc = info["json"]["document"]
    bin_len = info["bin"]["length"] if info["bin"] else 0
    buffers = doc.get("buffers", [])
    if len(buffers) != 1:
        problems.append(f"Expected exactly one buffer, found {len(buffers)}")
    elif buffers[0].get("byteLength") != bin_len:
        problems.append(
            f"buffers[0].byteLength {buffers[0].get('byteLength')} != BIN length {bin_len}"
        )
    for i, b in enumerate(buffers):
        if "uri" in b:
            problems.append(f"buffers[{i}] still has a uri")
    for i, v in enumerate(doc.get("bufferViews", [])):
        if v.get("buffer") != 0:
            problems.append(f"bufferViews[{i}] does not reference buffer 0")
        end = v.get("byteOffset", 0) + v.get("byteLength", 0)
        if end > bin_len:
            problems.append(
                f"bufferViews[{i}] ends at {end}, past BIN length {bin_len}"
            )
    for key in ("images", "shaders"):
        for i, entry in enumerate(doc.get(key, [])):
            if "uri" in entry:
                problems.append(f"{key}[{i}] still has a uri")
    return problems

"""Binary writer emitting a GLB container from a packed document.

The container is assembled completely in memory and handed to the storage
backend in one write, so a failure at any earlier step leaves no output.
"""

from __future__ import annotations

import json
from pathlib import PurePath

from ..document import Document
from ..errors import (
    E_INVALID_JSON,
    E_WRITE_IO,
    WriteError,
    internal_error,
    malformed,
)
from ..fileio import FileIO
from ..logging import get_logger
from .constants import (
    CHUNK_HEADER_SIZE,
    CHUNK_TYPE_BIN,
    CHUNK_TYPE_JSON,
    FILE_HEADER_SIZE,
)
from .layout import pad_json
from .packers import pack_chunk_header, pack_file_header
from .planner import ConsolidationPlan

__all__ = ["serialize_json", "assemble_glb", "write_glb"]


def serialize_json(document: Document) -> bytes:
    """Compact UTF-8 JSON, space padded to the chunk alignment.

    NaN and infinities have no JSON form and are refused.
    """
    try:
        text = json.dumps(
            document.to_dict(),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except ValueError as e:
        raise malformed(
            E_INVALID_JSON, f"Document cannot be serialized: {e}"
        ) from e
    return pad_json(text.encode("utf-8"))


def _build_bin_region(plan: ConsolidationPlan) -> bytearray:
    region = bytearray(plan.region_size)
    for seg in plan.segments:
        end = seg.offset + seg.length
        if end > len(region):
            raise internal_error(
                "Segment exceeds consolidated region",
                {"kind": seg.kind, "index": seg.index, "end": end},
            )
        region[seg.offset : end] = seg.data
    return region


def assemble_glb(document: Document, plan: ConsolidationPlan) -> bytes:
    json_chunk = serialize_json(document)
    bin_size = plan.region_size
    total_size = (
        FILE_HEADER_SIZE
        + CHUNK_HEADER_SIZE
        + len(json_chunk)
        + CHUNK_HEADER_SIZE
        + bin_size
    )
    out = bytearray()
    out += pack_file_header(total_size)
    out += pack_chunk_header(len(json_chunk), CHUNK_TYPE_JSON)
    out += json_chunk
    out += pack_chunk_header(bin_size, CHUNK_TYPE_BIN)
    out += _build_bin_region(plan)
    if len(out) != total_size:
        raise internal_error(
            "Assembled size does not match header length",
            {"header": total_size, "actual": len(out)},
        )
    get_logger().debug(
        "assembled GLB: total=%d json=%d bin=%d",
        total_size,
        len(json_chunk),
        bin_size,
    )
    return bytes(out)


def write_glb(
    document: Document,
    plan: ConsolidationPlan,
    output_path: str | PurePath,
    io: FileIO,
) -> int:
    data = assemble_glb(document, plan)
    try:
        io.write(str(output_path), data)
    except OSError as e:
        raise WriteError(
            code=E_WRITE_IO,
            message=f"Cannot write '{output_path}': {e}",
            context={"output": str(output_path)},
        ) from e
    return len(data)

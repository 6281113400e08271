"""Optional JSON manifest summarising a produced GLB.

Only written when explicitly requested (``--emit-manifest``).
"""

from __future__ import annotations

import json
from pathlib import PurePath
from typing import Any

from .fileio import FileIO
from .packing.planner import ConsolidationPlan, to_plan_dict

__all__ = ["manifest_dict", "write_manifest"]

MANIFEST_VERSION = 1


def manifest_dict(
    plan: ConsolidationPlan,
    *,
    source: str,
    output: str,
    file_size: int,
    file_sha256: str,
    json_chunk_length: int,
) -> dict[str, Any]:
    plan_dict = to_plan_dict(plan)
    kinds = [s.kind for s in plan.segments]
    return {
        "version": MANIFEST_VERSION,
        "source": source,
        "output": output,
        "file_size": file_size,
        "sha256": file_sha256,
        "json_chunk_length": json_chunk_length,
        "bin_chunk_length": plan.region_size,
        "padding": plan_dict["padding"],
        "segments": plan_dict["segments"],
        "counts": {
            "segments": len(plan.segments),
            "buffers": kinds.count("buffer"),
            "images": kinds.count("image"),
            "shaders": kinds.count("shader"),
        },
    }


def write_manifest(
    data: dict[str, Any], output_path: str | PurePath, io: FileIO
) -> str:
    text = json.dumps(data, indent=2, sort_keys=True) + "\n"
    io.write(str(output_path), text.encode("utf-8"))
    return str(output_path)

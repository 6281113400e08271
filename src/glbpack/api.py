"""High-level API for glbpack."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from .config import load_batch_config
from .document import Document, parse_document
from .errors import (
    E_INVALID_JSON,
    E_OUTPUT_EXISTS,
    E_RESOURCE_NOT_FOUND,
    ResourceError,
    WriteError,
    malformed,
)
from .fileio import FileIO, LocalFileIO
from .logging import get_logger, section
from .manifest import manifest_dict, write_manifest
from .packing.inspector import inspect_glb, validate_glb
from .packing.planner import ConsolidationPlan, consolidate
from .packing.writer import write_glb
from .reporting import get_reporter, task

__all__ = [
    "ConvertOptions",
    "ConvertResult",
    "convert_document",
    "convert_gltf_to_glb",
    "inspect_glb_file",
    "run_batch",
]


@dataclass(slots=True)
class ConvertOptions:
    source: Path
    # Defaults to the source path with a .glb suffix
    output: Path | None = None
    force: bool = False
    # When set, a JSON manifest is written after the GLB
    manifest_path: Path | None = None

    @property
    def output_path(self) -> Path:
        if self.output is not None:
            return Path(self.output)
        return Path(self.source).with_suffix(".glb")


@dataclass(slots=True)
class ConvertResult:
    output_file: Path
    bytes_written: int
    plan: ConsolidationPlan
    manifest_file: Path | None = None


def convert_document(
    document: Document,
    source_path: str | Path,
    output_path: str | Path,
    io: FileIO | None = None,
) -> ConvertResult:
    """Pack an already parsed document and write the GLB in one write.

    ``document`` is rewritten in place.
    """
    io = io or LocalFileIO()
    plan = consolidate(document, source_path, io)
    bytes_written = write_glb(document, plan, output_path, io)
    return ConvertResult(
        output_file=Path(output_path), bytes_written=bytes_written, plan=plan
    )


def _read_source(source: str, io: FileIO) -> str:
    if not io.exists(source):
        raise ResourceError(
            code=E_RESOURCE_NOT_FOUND,
            message=f"Source document not found: {source}",
            context={"path": source},
        )
    try:
        return io.read_text(source)
    except UnicodeDecodeError as e:
        raise malformed(
            E_INVALID_JSON,
            f"Source document is not UTF-8 text: {e}",
            {"path": source},
        ) from e
    except OSError as e:
        raise ResourceError(
            code=E_RESOURCE_NOT_FOUND,
            message=f"Cannot read source document {source}: {e}",
            context={"path": source},
        ) from e


def convert_gltf_to_glb(
    options: ConvertOptions, io: FileIO | None = None
) -> ConvertResult:
    logger = get_logger()
    rep = get_reporter()
    io = io or LocalFileIO()
    source = str(options.source)
    output = options.output_path
    if not options.force and io.exists(str(output)):
        raise WriteError(
            code=E_OUTPUT_EXISTS,
            message=f"Output exists (use --force to overwrite): {output}",
            context={"output": str(output)},
        )
    with section(f"Convert {Path(source).name}"):
        document = parse_document(_read_source(source, io), source=source)
        rep.status(
            "Document summary: "
            + f"buffers={len(document.buffers)} bufferViews={len(document.buffer_views)} "
            + f"images={len(document.images or [])} shaders={len(document.shaders or [])}"
        )
        result = convert_document(document, source, output, io)
        if options.manifest_path is not None:
            with task("manifest.emit", "Emit manifest"):
                file_bytes = io.read_binary(str(output))
                info = inspect_glb(file_bytes)
                data = manifest_dict(
                    result.plan,
                    source=source,
                    output=str(output),
                    file_size=len(file_bytes),
                    file_sha256=hashlib.sha256(file_bytes).hexdigest(),
                    json_chunk_length=info["json"]["length"],
                )
                write_manifest(data, options.manifest_path, io)
                result.manifest_file = Path(options.manifest_path)
    logger.info(
        "Built GLB: %s (%d bytes, segments=%d, bin=%d)",
        output.name,
        result.bytes_written,
        len(result.plan.segments),
        result.plan.region_size,
    )
    return result


def inspect_glb_file(
    path: str | Path, io: FileIO | None = None
) -> dict[str, Any]:
    """Inspect a GLB and attach the list of structural problems found."""
    io = io or LocalFileIO()
    try:
        data = io.read_binary(str(path))
    except OSError as e:
        raise ResourceError(
            code=E_RESOURCE_NOT_FOUND,
            message=f"Cannot read {path}: {e}",
            context={"path": str(path)},
        ) from e
    info = inspect_glb(data)
    info["problems"] = validate_glb(info)
    return info


def run_batch(
    config_path: str | Path, io: FileIO | None = None
) -> List[ConvertResult]:
    """Run every job of a batch file in order; the first failure aborts."""
    io = io or LocalFileIO()
    config = load_batch_config(config_path, io)
    rep = get_reporter()
    results: List[ConvertResult] = []
    name = f"Batch {config.path.name}"
    with task("batch", name, total=len(config.jobs)) as stats:
        stats["jobs"] = 0
        for job in config.jobs:
            options = ConvertOptions(
                source=job.source,
                output=job.output,
                force=job.force,
                manifest_path=job.manifest_path,
            )
            results.append(convert_gltf_to_glb(options, io))
            stats["jobs"] = len(results)
            rep.advance("batch", current_item=job.source.name)
    return results

"""Batch job loading (YAML or JSON) for glbpack.

A job file is an object with a ``jobs`` list::

    force: false            # default for every job
    jobs:
      - source: models/duck.gltf
        output: out/duck.glb
        manifest: out/duck.manifest.json
      - source: models/box.gltf   # output defaults to models/box.glb

Relative paths resolve against the directory holding the job file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import yaml

from .errors import E_CONFIG, ConfigError
from .fileio import FileIO, LocalFileIO

__all__ = ["ConvertJob", "BatchConfig", "load_batch_config"]


@dataclass(slots=True)
class ConvertJob:
    source: Path
    output: Optional[Path] = None
    force: bool = False
    manifest_path: Optional[Path] = None


@dataclass(slots=True)
class BatchConfig:
    path: Path
    jobs: List[ConvertJob] = field(default_factory=list)


def _config_error(path: Path, message: str) -> ConfigError:
    return ConfigError(
        code=E_CONFIG, message=f"{path}: {message}", context={"path": str(path)}
    )


def _opt_path(base: Path, value: Any, key: str, cfg: Path) -> Optional[Path]:
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise _config_error(cfg, f"'{key}' must be a non-empty string")
    p = Path(value)
    return p if p.is_absolute() else base / p


def _parse(data: Any, path: Path) -> BatchConfig:
    if not isinstance(data, dict):
        raise _config_error(path, "root must be an object")
    jobs = data.get("jobs")
    if not isinstance(jobs, list) or not jobs:
        raise _config_error(path, "'jobs' must be a non-empty list")
    default_force = data.get("force", False)
    if not isinstance(default_force, bool):
        raise _config_error(path, "'force' must be a boolean")
    base = path.parent
    out: List[ConvertJob] = []
    for i, entry in enumerate(jobs):
        if not isinstance(entry, dict):
            raise _config_error(path, f"jobs[{i}] must be an object")
        source = _opt_path(base, entry.get("source"), f"jobs[{i}].source", path)
        if source is None:
            raise _config_error(path, f"jobs[{i}].source is required")
        force = entry.get("force", default_force)
        if not isinstance(force, bool):
            raise _config_error(path, f"jobs[{i}].force must be a boolean")
        out.append(
            ConvertJob(
                source=source,
                output=_opt_path(
                    base, entry.get("output"), f"jobs[{i}].output", path
                ),
                force=force,
                manifest_path=_opt_path(
                    base, entry.get("manifest"), f"jobs[{i}].manifest", path
                ),
            )
        )
    return BatchConfig(path=path, jobs=out)


def load_batch_config(
    path: str | Path, io: FileIO | None = None
) -> BatchConfig:
    io = io or LocalFileIO()
    p = Path(path)
    try:
        text = io.read_text(str(p))
    except OSError as e:
        raise _config_error(p, f"cannot read job file: {e}") from e
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise _config_error(p, f"cannot parse job file: {e}") from e
    return _parse(data, p)

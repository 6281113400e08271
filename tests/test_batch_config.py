import json
from pathlib import Path

import pytest

from glbpack.api import run_batch
from glbpack.config import load_batch_config
from glbpack.errors import E_CONFIG, ConfigError
from glbpack.fileio import MemoryFileIO
from helpers import data_uri

GLTF = {
    "buffers": [{"uri": data_uri(b"\x01\x02\x03\x04\x05")}],
    "bufferViews": [{"buffer": 0, "byteLength": 5}],
}


def test_yaml_jobs_resolve_relative_to_file(tmp_path: Path):
    cfg = tmp_path / "jobs.yaml"
    cfg.write_text(
        "force: true\n"
        "jobs:\n"
        "  - source: models/a.gltf\n"
        "    output: out/a.glb\n"
        "    manifest: out/a.json\n"
        "  - source: /abs/b.gltf\n"
        "    force: false\n",
        encoding="utf-8",
    )
    config = load_batch_config(cfg)
    a, b = config.jobs
    assert a.source == tmp_path / "models" / "a.gltf"
    assert a.output == tmp_path / "out" / "a.glb"
    assert a.manifest_path == tmp_path / "out" / "a.json"
    assert a.force is True
    assert b.source == Path("/abs/b.gltf")
    assert b.output is None
    assert b.force is False


def test_json_jobs_with_memory_backend():
    io = MemoryFileIO(
        {"/cfg/jobs.json": json.dumps({"jobs": [{"source": "x.gltf"}]})}
    )
    config = load_batch_config("/cfg/jobs.json", io)
    assert config.jobs[0].source == Path("/cfg/x.gltf")


@pytest.mark.parametrize(
    "text",
    [
        "[]",
        "jobs: []",
        "jobs:\n  - output: a.glb\n",
        "jobs:\n  - source: a.gltf\n    force: maybe\n",
        "jobs:\n  - 3\n",
        "force: 1\njobs:\n  - source: a.gltf\n",
        "jobs: [unclosed\n",
    ],
)
def test_invalid_job_files(tmp_path: Path, text):
    cfg = tmp_path / "jobs.yml"
    cfg.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as exc:
        load_batch_config(cfg)
    assert exc.value.code == E_CONFIG


def test_missing_job_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_batch_config(tmp_path / "nope.yaml")


def test_run_batch_converts_every_job(tmp_path: Path):
    for name in ("a", "b"):
        (tmp_path / f"{name}.gltf").write_text(json.dumps(GLTF), encoding="utf-8")
    cfg = tmp_path / "jobs.yaml"
    cfg.write_text(
        "jobs:\n  - source: a.gltf\n  - source: b.gltf\n    output: out/b.glb\n",
        encoding="utf-8",
    )
    results = run_batch(cfg)
    assert [r.output_file for r in results] == [
        tmp_path / "a.glb",
        tmp_path / "out" / "b.glb",
    ]
    assert (tmp_path / "out" / "b.glb").read_bytes()[:4] == b"glTF"
    assert all(r.plan.region_size == 8 for r in results)

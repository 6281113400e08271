"""Command line interface for glbpack."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import ConvertOptions, convert_gltf_to_glb, inspect_glb_file, run_batch
from .errors import GlbError
from .logging import configure_logging, step
from .reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)


def _convert_cmd(args: argparse.Namespace) -> int:
    result = convert_gltf_to_glb(
        ConvertOptions(
            source=args.source,
            output=args.output,
            force=args.force,
            manifest_path=args.emit_manifest,
        )
    )
    get_reporter().status(
        "Convert summary: file="
        + f"{result.output_file.name} bytes={result.bytes_written} "
        + f"segments={len(result.plan.segments)} bin={result.plan.region_size}"
    )
    return 0


def _inspect_cmd(args: argparse.Namespace) -> int:
    step(f"inspecting {args.glb.name}")
    info = inspect_glb_file(args.glb)
    rep = get_reporter()
    doc = info["json"]["document"]
    if args.json:
        summary = {
            "header": info["header"],
            "file_size": info["file_size"],
            "json_chunk_length": info["json"]["length"],
            "bin_chunk_length": info["bin"]["length"] if info["bin"] else 0,
            "buffer_views": doc.get("bufferViews", []),
            "images": doc.get("images", []),
            "shaders": doc.get("shaders", []),
            "problems": info["problems"],
        }
        print(json.dumps(summary, indent=2, sort_keys=True))
    else:
        rep.status(
            "GLB summary: "
            + f"version={info['header']['version']} length={info['header']['length']} "
            + f"json={info['json']['length']} "
            + f"bin={info['bin']['length'] if info['bin'] else 0} "
            + f"bufferViews={len(doc.get('bufferViews', []))}"
        )
    for problem in info["problems"]:
        rep.warning(problem)
    return 1 if info["problems"] else 0


def _batch_cmd(args: argparse.Namespace) -> int:
    results = run_batch(args.jobs)
    total = sum(r.bytes_written for r in results)
    get_reporter().status(
        f"Batch summary: jobs={len(results)} bytes={total}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="glbpack",
        description="Pack a glTF document and its resources into one GLB",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "json", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("convert", help="Convert a .gltf file to .glb")
    c.add_argument("source", type=Path)
    c.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Output path (default: source with .glb suffix)",
    )
    c.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite an existing output file",
    )
    c.add_argument(
        "--emit-manifest",
        dest="emit_manifest",
        type=Path,
        help="Optional path to write a manifest JSON (opt-in)",
    )
    c.set_defaults(func=_convert_cmd)

    i = sub.add_parser("inspect", help="Inspect and validate a GLB file")
    i.add_argument("glb", type=Path)
    i.add_argument("--json", action="store_true", help="Emit JSON summary")
    i.set_defaults(func=_inspect_cmd)

    b = sub.add_parser("batch", help="Run conversions listed in a job file")
    b.add_argument("jobs", type=Path, help="YAML or JSON job file")
    b.set_defaults(func=_batch_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)
    requested = args.reporter
    if requested == "json":
        set_reporter(JsonLinesReporter())
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich without a TTY falls back to plain
        set_reporter(PlainReporter())
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    rep = get_reporter()
    try:
        return args.func(args)
    except GlbError as e:
        rep.error(str(e))
        return 1
    finally:
        rep.flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

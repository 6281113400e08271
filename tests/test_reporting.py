import io
import json

from rich.console import Console

from glbpack.logging import configure_logging, get_logger
from glbpack.reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    TaskStatus,
    get_reporter,
    set_reporter,
    set_verbosity,
    task,
)


def test_plain_reporter_completion_line_lists_stats():
    stream = io.StringIO()
    rep = PlainReporter(stream=stream, use_color=False)
    rep.start_task("pack.buffers", "Buffers", total=2)
    rep.advance("pack.buffers")
    rep.advance("pack.buffers")
    rep.end_task("pack.buffers", segments=2, bytes=16)
    line = stream.getvalue().strip()
    assert line.startswith("✔ Buffers 2/2")
    assert line.endswith("[segments=2 bytes=16]")


def test_plain_reporter_item_lines_need_verbosity():
    stream = io.StringIO()
    rep = PlainReporter(stream=stream, use_color=False)
    rep.start_task("t", "Images", total=1)
    rep.advance("t", current_item="images[0]")
    assert stream.getvalue() == ""
    set_verbosity(1)
    rep.advance("t", current_item="images[0]")
    assert "Images: images[0] (2/1)" in stream.getvalue()


def test_task_context_marks_failure():
    stream = io.StringIO()
    set_reporter(JsonLinesReporter(stream=stream))
    try:
        with task("pack.images", "Images", total=2) as stats:
            stats["views"] = 1
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert events[-1]["event"] == "task_end"
    assert events[-1]["status"] == TaskStatus.FAILED.name.lower()
    assert events[-1]["views"] == 1


def test_logging_routes_through_reporter():
    stream = io.StringIO()
    set_reporter(PlainReporter(stream=stream, use_color=False))
    configure_logging(0)
    logger = get_logger()
    logger.warning("careful %s", "now")
    logger.debug("hidden")
    logger.error("bad")
    out = stream.getvalue()
    assert "WARN: careful now" in out
    assert "ERROR: bad" in out
    assert "hidden" not in out


def test_rich_reporter_prints_completion_and_messages():
    buf = io.StringIO()
    rep = RichReporter(console=Console(file=buf, width=120, color_system=None))
    rep.start_task("pack.images", "Images", total=1)
    rep.advance("pack.images", current_item="images[0]")
    rep.end_task("pack.images", views=1, bytes=8)
    rep.status("ctx=[not markup]")
    out = buf.getvalue()
    assert "Images 1/1" in out
    assert "[views=1 bytes=8]" in out
    assert "INFO: ctx=[not markup]" in out
    assert rep.progress is None


def test_silent_reporter_tracks_tasks_without_output(capsys):
    rep = SilentReporter()
    set_reporter(rep)
    with task("pack.buffers", "Buffers", total=1):
        get_reporter().advance("pack.buffers", current_item="buffers[0]")
        assert rep.open_tasks == 1
    get_reporter().status("done")
    assert rep.open_tasks == 0
    out, err = capsys.readouterr()
    assert out == "" and err == ""


def test_jsonl_task_end_carries_only_packing_stats():
    stream = io.StringIO()
    rep = JsonLinesReporter(stream=stream)
    rep.start_task("pack.shaders", "Shaders", total=1, origin="scene.gltf")
    rep.advance("pack.shaders", current_item="shaders[0]")
    rep.end_task("pack.shaders", views=1, bytes=12)
    lines = stream.getvalue().splitlines()
    start, progress, end = [json.loads(x) for x in lines]
    assert start == {
        "event": "task_start",
        "id": "pack.shaders",
        "name": "Shaders",
        "total": 1,
    }
    assert progress["item"] == "shaders[0]"
    assert progress["completed"] == 1
    assert end["views"] == 1 and end["bytes"] == 12
    assert "origin" not in end and "current_item" not in end

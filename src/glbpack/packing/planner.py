"""Consolidation planning: resolve resources and lay them out in one BIN region.

:func:`consolidate` walks buffers, then images, then shaders, resolves each
reference, assigns it an aligned offset in a single linear region and
rewrites the document's cross references (buffer views, buffer indices,
``bufferView``/``mimeType`` fields) in place. The returned
:class:`ConsolidationPlan` owns the offset map and the placed payloads; the
writer turns it into bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Sequence

from ..document import Buffer, BufferView, Document, Image
from ..errors import E_UNRESOLVED_BUFFER, ResourceError, internal_error
from ..fileio import FileIO
from ..logging import get_logger
from ..reporting import get_reporter, task
from ..resources.resolver import resolve_resource
from .layout import aligned_length

__all__ = ["Segment", "ConsolidationPlan", "consolidate", "to_plan_dict"]


@dataclass(slots=True)
class Segment:
    kind: str  # "buffer" | "image" | "shader"
    index: int  # position within its document list
    slot: int  # offset map key
    offset: int
    data: bytes
    mime_type: str
    buffer_view: Optional[int] = None

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def aligned_length(self) -> int:
        return aligned_length(len(self.data))


@dataclass(slots=True)
class ConsolidationPlan:
    segments: List[Segment] = field(default_factory=list)
    offset_map: Dict[int, int] = field(default_factory=dict)
    cursor: int = 0
    next_slot: int = 0

    @property
    def region_size(self) -> int:
        return self.cursor

    @property
    def padding(self) -> int:
        return self.cursor - sum(s.length for s in self.segments)

    def place(
        self, kind: str, index: int, slot: int, data: bytes, mime_type: str
    ) -> Segment:
        if slot in self.offset_map:
            raise internal_error(
                "Offset slot assigned twice", {"slot": slot, "kind": kind}
            )
        seg = Segment(
            kind=kind,
            index=index,
            slot=slot,
            offset=self.cursor,
            data=data,
            mime_type=mime_type,
        )
        self.offset_map[slot] = seg.offset
        self.segments.append(seg)
        self.cursor += aligned_length(len(data))
        return seg


def _place_buffers(
    plan: ConsolidationPlan,
    buffers: Sequence[Buffer],
    source_path: str | PurePath,
    io: FileIO,
) -> None:
    logger = get_logger()
    rep = get_reporter()
    with task("pack.buffers", "Buffers", total=len(buffers)) as stats:
        stats.update(segments=0, bytes=plan.cursor)
        for i, buf in enumerate(buffers):
            resolved = resolve_resource(buf.uri, source_path, io)
            if resolved is None:
                logger.debug("buffers[%d]: no uri, left unplaced", i)
                rep.advance(
                    "pack.buffers", current_item=f"buffers[{i}] (skipped)"
                )
                continue
            seg = plan.place("buffer", i, i, resolved.data, resolved.mime_type)
            buf.uri = None
            buf.byte_length = len(resolved.data)
            stats["segments"] += 1
            stats["bytes"] = plan.cursor
            logger.debug(
                "buffers[%d] -> offset=%d length=%d", i, seg.offset, seg.length
            )
            rep.advance("pack.buffers", current_item=f"buffers[{i}]")
    plan.next_slot = len(buffers)


def _rebase_buffer_views(
    plan: ConsolidationPlan, views: Sequence[BufferView]
) -> None:
    for i, view in enumerate(views):
        base = plan.offset_map.get(view.buffer)
        if base is None:
            raise ResourceError(
                code=E_UNRESOLVED_BUFFER,
                message=(
                    f"bufferViews[{i}] references buffers[{view.buffer}], "
                    "which has no resolvable data"
                ),
                context={"buffer_view": i, "buffer": view.buffer},
            )
        view.byte_offset = (view.byte_offset or 0) + base
        view.buffer = 0


def _place_embeddables(
    plan: ConsolidationPlan,
    document: Document,
    kind: str,
    entries: Sequence[Image],
    source_path: str | PurePath,
    io: FileIO,
) -> None:
    logger = get_logger()
    rep = get_reporter()
    task_id = f"pack.{kind}s"
    with task(task_id, f"{kind.title()}s", total=len(entries)) as stats:
        stats.update(views=0, bytes=plan.cursor)
        for i, entry in enumerate(entries):
            resolved = resolve_resource(entry.uri, source_path, io)
            if resolved is None:
                entry.uri = None
                rep.advance(task_id, current_item=f"{kind}s[{i}] (embedded)")
                continue
            seg = plan.place(
                kind, i, plan.next_slot, resolved.data, resolved.mime_type
            )
            plan.next_slot += 1
            seg.buffer_view = len(document.buffer_views)
            document.buffer_views.append(
                BufferView(
                    buffer=0, byte_offset=seg.offset, byte_length=seg.length
                )
            )
            entry.buffer_view = seg.buffer_view
            entry.mime_type = resolved.mime_type
            entry.uri = None
            stats["views"] += 1
            stats["bytes"] = plan.cursor
            logger.debug(
                "%ss[%d] -> bufferView=%d offset=%d length=%d mime=%s",
                kind,
                i,
                seg.buffer_view,
                seg.offset,
                seg.length,
                seg.mime_type,
            )
            rep.advance(task_id, current_item=f"{kind}s[{i}]")


def consolidate(
    document: Document, source_path: str | PurePath, io: FileIO
) -> ConsolidationPlan:
    """Resolve every packable resource and rewrite ``document`` in place.

    Relative references resolve against ``source_path``. On return the
    document holds exactly one buffer whose ``byteLength`` is the
    consolidated region size.

    Raises:
        MalformedInputError: a data URI lacks its content type or payload.
        ResourceError: a file cannot be read, or a buffer view points at a
            buffer that had nothing to place.
    """
    plan = ConsolidationPlan()
    _place_buffers(plan, document.buffers, source_path, io)
    _rebase_buffer_views(plan, document.buffer_views)
    if document.images is not None:
        _place_embeddables(
            plan, document, "image", document.images, source_path, io
        )
    if document.shaders is not None:
        _place_embeddables(
            plan, document, "shader", document.shaders, source_path, io
        )
    document.buffers = [Buffer(byte_length=plan.region_size)]
    get_logger().debug(
        "consolidated region: size=%d segments=%d padding=%d",
        plan.region_size,
        len(plan.segments),
        plan.padding,
    )
    return plan


def to_plan_dict(plan: ConsolidationPlan) -> Dict[str, Any]:
    return {
        "region_size": plan.region_size,
        "padding": plan.padding,
        "segments": [
            {
                "kind": s.kind,
                "index": s.index,
                "slot": s.slot,
                "offset": s.offset,
                "length": s.length,
                "aligned_length": s.aligned_length,
                "mime_type": s.mime_type,
                "buffer_view": s.buffer_view,
            }
            for s in plan.segments
        ],
    }

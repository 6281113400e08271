"""Typed glTF document model for packing.

Only the fields the packer reads or rewrites are typed. Everything else
(nodes, meshes, accessors, names, extensions...) is kept verbatim in the
``extra`` mappings and written back unchanged by :meth:`Document.to_dict`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import E_DOCUMENT_SHAPE, E_INVALID_JSON, malformed

__all__ = [
    "Buffer",
    "BufferView",
    "Image",
    "Shader",
    "Document",
    "parse_document",
    "document_from_dict",
]


@dataclass(slots=True)
class Buffer:
    uri: Optional[str] = None
    byte_length: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.extra)
        if self.uri is not None:
            out["uri"] = self.uri
        if self.byte_length is not None:
            out["byteLength"] = self.byte_length
        return out


@dataclass(slots=True)
class BufferView:
    buffer: int
    byte_offset: Optional[int] = None
    byte_length: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"buffer": self.buffer}
        if self.byte_offset is not None:
            out["byteOffset"] = self.byte_offset
        if self.byte_length is not None:
            out["byteLength"] = self.byte_length
        out.update(self.extra)
        return out


@dataclass(slots=True)
class Image:
    uri: Optional[str] = None
    buffer_view: Optional[int] = None
    mime_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.extra)
        if self.uri is not None:
            out["uri"] = self.uri
        if self.buffer_view is not None:
            out["bufferView"] = self.buffer_view
        if self.mime_type is not None:
            out["mimeType"] = self.mime_type
        return out


@dataclass(slots=True)
class Shader(Image):
    """glTF 1.0 style shader entry; same reference fields as an image."""


@dataclass(slots=True)
class Document:
    buffers: List[Buffer] = field(default_factory=list)
    buffer_views: List[BufferView] = field(default_factory=list)
    images: Optional[List[Image]] = None
    shaders: Optional[List[Shader]] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    key_order: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        managed: Dict[str, Any] = {
            "buffers": [b.to_dict() for b in self.buffers],
            "bufferViews": [v.to_dict() for v in self.buffer_views],
        }
        if self.images is not None:
            managed["images"] = [i.to_dict() for i in self.images]
        if self.shaders is not None:
            managed["shaders"] = [s.to_dict() for s in self.shaders]
        out: Dict[str, Any] = {}
        for key in self.key_order:
            if key in managed:
                out[key] = managed.pop(key)
            elif key in self.extra:
                out[key] = self.extra[key]
        for key, value in self.extra.items():
            out.setdefault(key, value)
        out.update(managed)
        return out


_BUFFER_KEYS = ("uri", "byteLength")
_VIEW_KEYS = ("buffer", "byteOffset", "byteLength")
_RESOURCE_KEYS = ("uri", "bufferView", "mimeType")


def _shape_error(path: str, message: str):
    return malformed(E_DOCUMENT_SHAPE, f"{path}: {message}", {"path": path})


def _opt_str(entry: Dict[str, Any], key: str, path: str) -> Optional[str]:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise _shape_error(f"{path}.{key}", "expected a string")
    return value


def _opt_uint(entry: Dict[str, Any], key: str, path: str) -> Optional[int]:
    value = entry.get(key)
    if value is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise _shape_error(f"{path}.{key}", "expected a non-negative integer")
    return value


def _entries(
    data: Dict[str, Any], key: str, *, required: bool
) -> Optional[List[Dict[str, Any]]]:
    if key not in data:
        if required:
            raise _shape_error(key, "required array is missing")
        return None
    value = data[key]
    if not isinstance(value, list):
        raise _shape_error(key, "expected an array")
    for i, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise _shape_error(f"{key}[{i}]", "expected an object")
    return value


def _extra(entry: Dict[str, Any], known: tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in entry.items() if k not in known}


def _parse_resources(raw: List[Dict[str, Any]], key: str, cls):
    out = []
    for i, entry in enumerate(raw):
        path = f"{key}[{i}]"
        out.append(
            cls(
                uri=_opt_str(entry, "uri", path),
                buffer_view=_opt_uint(entry, "bufferView", path),
                mime_type=_opt_str(entry, "mimeType", path),
                extra=_extra(entry, _RESOURCE_KEYS),
            )
        )
    return out


def document_from_dict(data: Any) -> Document:
    if not isinstance(data, dict):
        raise _shape_error("$", "root of a glTF document must be an object")
    raw_buffers = _entries(data, "buffers", required=True) or []
    raw_views = _entries(data, "bufferViews", required=True) or []
    raw_images = _entries(data, "images", required=False)
    raw_shaders = _entries(data, "shaders", required=False)

    buffers = [
        Buffer(
            uri=_opt_str(b, "uri", f"buffers[{i}]"),
            byte_length=_opt_uint(b, "byteLength", f"buffers[{i}]"),
            extra=_extra(b, _BUFFER_KEYS),
        )
        for i, b in enumerate(raw_buffers)
    ]
    views: List[BufferView] = []
    for i, v in enumerate(raw_views):
        path = f"bufferViews[{i}]"
        buffer_index = _opt_uint(v, "buffer", path)
        if buffer_index is None:
            raise _shape_error(f"{path}.buffer", "required field is missing")
        views.append(
            BufferView(
                buffer=buffer_index,
                byte_offset=_opt_uint(v, "byteOffset", path),
                byte_length=_opt_uint(v, "byteLength", path),
                extra=_extra(v, _VIEW_KEYS),
            )
        )
    managed = ("buffers", "bufferViews", "images", "shaders")
    return Document(
        buffers=buffers,
        buffer_views=views,
        images=(
            None
            if raw_images is None
            else _parse_resources(raw_images, "images", Image)
        ),
        shaders=(
            None
            if raw_shaders is None
            else _parse_resources(raw_shaders, "shaders", Shader)
        ),
        extra={k: v for k, v in data.items() if k not in managed},
        key_order=list(data.keys()),
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not JSON")


def parse_document(text: str, *, source: str | None = None) -> Document:
    ctx = {"source": source} if source else None
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise malformed(
            E_INVALID_JSON,
            f"Invalid glTF JSON: {e.msg} (line {e.lineno} col {e.colno})",
            ctx,
        ) from e
    except ValueError as e:
        raise malformed(E_INVALID_JSON, f"Invalid glTF JSON: {e}", ctx) from e
    return document_from_dict(data)

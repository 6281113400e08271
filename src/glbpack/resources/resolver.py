"""Resolve glTF resource references (data URIs or relative files) to bytes."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional
from urllib.parse import unquote, urljoin

from ..errors import (
    E_MALFORMED_DATA_URI,
    E_RESOURCE_NOT_FOUND,
    ResourceError,
    malformed,
)
from ..fileio import FileIO
from .content_types import guess_mime_type

__all__ = [
    "DATA_URI_PREFIX",
    "ResolvedResource",
    "is_data_uri",
    "decode_data_uri",
    "resolve_uri_path",
    "resolve_resource",
]

DATA_URI_PREFIX = "data:"

# URL-safe alphabet maps onto the standard one before decoding
_URLSAFE_TO_STD = str.maketrans("-_", "+/")


@dataclass(slots=True, frozen=True)
class ResolvedResource:
    data: bytes
    mime_type: str

    def __len__(self) -> int:
        return len(self.data)


def is_data_uri(uri: str) -> bool:
    return uri.startswith(DATA_URI_PREFIX)


def _normalize_base64(payload: str) -> str:
    """Drop whitespace and trailing padding, fold URL-safe digits."""
    return "".join(payload.split()).translate(_URLSAFE_TO_STD).rstrip("=")


def decode_data_uri(uri: str) -> ResolvedResource:
    """Decode ``data:<mime>;base64,<payload>``.

    The content type is mandatory: a URI without a ``;`` ahead of the payload
    is rejected instead of being given a default type. The payload may be
    unpadded, wrapped or use the URL-safe alphabet; any other character fails.
    """
    ctx = {"uri": uri[:64]}
    start = len(DATA_URI_PREFIX)
    comma = uri.find(",")
    semi = uri.find(";", start)
    if comma < 0:
        raise malformed(
            E_MALFORMED_DATA_URI, "Data URI has no payload separator", ctx
        )
    if semi < 0 or semi > comma:
        raise malformed(
            E_MALFORMED_DATA_URI, "Data URI does not declare a content type", ctx
        )
    mime_type = uri[start:semi]
    if not mime_type:
        raise malformed(
            E_MALFORMED_DATA_URI, "Data URI has an empty content type", ctx
        )
    payload = _normalize_base64(uri[comma + 1 :])
    if len(payload) % 4 == 1:
        raise malformed(
            E_MALFORMED_DATA_URI, "Base64 payload has a dangling character", ctx
        )
    payload += "=" * (-len(payload) % 4)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise malformed(
            E_MALFORMED_DATA_URI, f"Invalid base64 payload: {e}", ctx
        ) from e
    return ResolvedResource(data=data, mime_type=mime_type)


def resolve_uri_path(uri: str, base_path: str | PurePath) -> str:
    """Resolve a relative reference against the document path (RFC 3986)."""
    base = (
        base_path.as_posix()
        if isinstance(base_path, PurePath)
        else str(base_path).replace("\\", "/")
    )
    return unquote(urljoin(base, uri))


def resolve_resource(
    uri: Optional[str], base_path: str | PurePath, io: FileIO
) -> Optional[ResolvedResource]:
    """Return the payload behind ``uri`` or ``None`` when there is no reference."""
    if uri is None:
        return None
    if is_data_uri(uri):
        return decode_data_uri(uri)
    full_path = resolve_uri_path(uri, base_path)
    try:
        data = io.read_binary(full_path)
    except OSError as e:
        raise ResourceError(
            code=E_RESOURCE_NOT_FOUND,
            message=f"Cannot read resource '{uri}': {e}",
            context={"uri": uri, "path": full_path},
        ) from e
    return ResolvedResource(data=data, mime_type=guess_mime_type(full_path))

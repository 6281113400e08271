"""Error definitions for glbpack.

Every failure surfaced to callers is a :class:`GlbError` carrying a stable
code, a human message and a context dict naming the offending resource.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_INVALID_JSON = "E_INVALID_JSON"
E_DOCUMENT_SHAPE = "E_DOCUMENT_SHAPE"
E_MALFORMED_DATA_URI = "E_MALFORMED_DATA_URI"
E_CONFIG = "E_CONFIG"
E_RESOURCE_NOT_FOUND = "E_RESOURCE_NOT_FOUND"
E_UNRESOLVED_BUFFER = "E_UNRESOLVED_BUFFER"
E_WRITE_IO = "E_WRITE_IO"
E_OUTPUT_EXISTS = "E_OUTPUT_EXISTS"
E_GLB_HEADER = "E_GLB_HEADER"
E_GLB_CHUNK = "E_GLB_CHUNK"
E_INTERNAL = "E_INTERNAL"


@dataclass
class GlbError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class MalformedInputError(GlbError):
    pass


class ConfigError(MalformedInputError):
    pass


class ResourceError(GlbError):
    pass


class WriteError(GlbError):
    pass


class ContainerFormatError(GlbError):
    pass


def malformed(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> MalformedInputError:
    return MalformedInputError(code=code, message=message, context=context)


def internal_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> GlbError:
    return GlbError(code=E_INTERNAL, message=message, context=context)


__all__ = [
    "GlbError",
    "MalformedInputError",
    "ConfigError",
    "ResourceError",
    "WriteError",
    "ContainerFormatError",
    "malformed",
    "internal_error",
    "E_INVALID_JSON",
    "E_DOCUMENT_SHAPE",
    "E_MALFORMED_DATA_URI",
    "E_CONFIG",
    "E_RESOURCE_NOT_FOUND",
    "E_UNRESOLVED_BUFFER",
    "E_WRITE_IO",
    "E_OUTPUT_EXISTS",
    "E_GLB_HEADER",
    "E_GLB_CHUNK",
    "E_INTERNAL",
]

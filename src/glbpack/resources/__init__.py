from .content_types import (
    MIME_TYPES,
    guess_file_extension,
    guess_mime_type,
)
from .resolver import ResolvedResource, resolve_resource

__all__ = [
    "MIME_TYPES",
    "guess_file_extension",
    "guess_mime_type",
    "ResolvedResource",
    "resolve_resource",
]

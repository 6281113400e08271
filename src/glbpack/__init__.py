"""Pack glTF documents and their resources into single-file GLB containers."""

from .api import (
    ConvertOptions,
    ConvertResult,
    convert_document,
    convert_gltf_to_glb,
    inspect_glb_file,
    run_batch,
)
from .document import Document, parse_document
from .errors import GlbError
from .fileio import FileIO, LocalFileIO, MemoryFileIO

__version__ = "0.1.0"

__all__ = [
    "ConvertOptions",
    "ConvertResult",
    "convert_document",
    "convert_gltf_to_glb",
    "inspect_glb_file",
    "run_batch",
    "Document",
    "parse_document",
    "GlbError",
    "FileIO",
    "LocalFileIO",
    "MemoryFileIO",
]

"""Storage backends used by the resolver, the packer and the API.

The conversion code never touches the filesystem directly; it receives a
:class:`FileIO` capability and calls only the four operations below, so a
caller can substitute an in-memory or virtual store wholesale.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Dict, Protocol, runtime_checkable

__all__ = ["FileIO", "LocalFileIO", "MemoryFileIO"]


@runtime_checkable
class FileIO(Protocol):
    def read_text(self, path: str) -> str: ...

    def read_binary(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes) -> None: ...

    def exists(self, path: str) -> bool: ...


class LocalFileIO:
    """Filesystem backend (UTF-8 text, whole-file binary reads/writes)."""

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def read_binary(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write(self, path: str, data: bytes) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)

    def exists(self, path: str) -> bool:
        return Path(path).exists()


class MemoryFileIO:
    """In-memory backend keyed by normalized POSIX path."""

    def __init__(self, files: Dict[str, bytes | str] | None = None):
        self.files: Dict[str, bytes] = {}
        for name, content in (files or {}).items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            self.files[self._key(name)] = bytes(content)

    @staticmethod
    def _key(path: str) -> str:
        return str(PurePosixPath(str(path).replace("\\", "/")))

    def read_text(self, path: str) -> str:
        return self.read_binary(path).decode("utf-8")

    def read_binary(self, path: str) -> bytes:
        try:
            return self.files[self._key(path)]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write(self, path: str, data: bytes) -> None:
        self.files[self._key(path)] = bytes(data)

    def exists(self, path: str) -> bool:
        return self._key(path) in self.files

import struct

import pytest

from glbpack.document import document_from_dict
from glbpack.errors import E_GLB_CHUNK, E_GLB_HEADER, ContainerFormatError
from glbpack.fileio import MemoryFileIO
from glbpack.packing.inspector import inspect_glb, validate_glb
from glbpack.packing.planner import consolidate
from glbpack.packing.writer import assemble_glb
from helpers import data_uri


def _glb() -> bytes:
    doc = document_from_dict(
        {
            "buffers": [{"uri": data_uri(b"abcdef")}],
            "bufferViews": [{"buffer": 0, "byteLength": 6}],
        }
    )
    return assemble_glb(doc, consolidate(doc, "/s.gltf", MemoryFileIO()))


def test_bad_magic():
    data = b"gltf" + _glb()[4:]
    with pytest.raises(ContainerFormatError) as exc:
        inspect_glb(data)
    assert exc.value.code == E_GLB_HEADER


def test_unsupported_version():
    data = bytearray(_glb())
    struct.pack_into("<I", data, 4, 1)
    with pytest.raises(ContainerFormatError) as exc:
        inspect_glb(bytes(data))
    assert exc.value.code == E_GLB_HEADER


def test_too_short_for_header():
    with pytest.raises(ContainerFormatError):
        inspect_glb(b"glTF")


def test_truncated_bin_chunk():
    with pytest.raises(ContainerFormatError) as exc:
        inspect_glb(_glb()[:-2])
    assert exc.value.code == E_GLB_CHUNK


def test_wrong_first_chunk_type():
    data = bytearray(_glb())
    struct.pack_into("<I", data, 16, 0x004E4942)
    with pytest.raises(ContainerFormatError) as exc:
        inspect_glb(bytes(data))
    assert exc.value.code == E_GLB_CHUNK


def test_validate_reports_header_mismatch_and_view_overflow():
    info = inspect_glb(_glb())
    assert validate_glb(info) == []
    info["header"]["length"] += 4
    info["json"]["document"]["bufferViews"].append(
        {"buffer": 1, "byteOffset": 4, "byteLength": 8}
    )
    problems = validate_glb(info)
    assert any("Header length" in p for p in problems)
    assert any("does not reference buffer 0" in p for p in problems)
    assert any("past BIN length" in p for p in problems)

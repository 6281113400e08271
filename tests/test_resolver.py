from pathlib import Path

import pytest

from glbpack.errors import (
    E_MALFORMED_DATA_URI,
    E_RESOURCE_NOT_FOUND,
    MalformedInputError,
    ResourceError,
)
from glbpack.fileio import LocalFileIO, MemoryFileIO
from glbpack.resources.resolver import resolve_resource, resolve_uri_path


def test_absent_uri_resolves_to_none():
    assert resolve_resource(None, "/m/scene.gltf", MemoryFileIO()) is None


def test_data_uri_decodes_payload_and_type():
    res = resolve_resource(
        "data:image/png;base64,AAEC", "/m/scene.gltf", MemoryFileIO()
    )
    assert res.data == b"\x00\x01\x02"
    assert res.mime_type == "image/png"
    assert len(res) == 3


def test_data_uri_with_empty_payload():
    res = resolve_resource(
        "data:application/octet-stream;base64,", "x.gltf", MemoryFileIO()
    )
    assert res.data == b""


@pytest.mark.parametrize(
    "payload, expected",
    [
        ("-_-_", b"\xfb\xff\xbf"),
        ("AQI", b"\x01\x02"),
        ("AQ", b"\x01"),
        ("AQID\nBA==", b"\x01\x02\x03\x04"),
    ],
)
def test_data_uri_lenient_base64_forms(payload, expected):
    res = resolve_resource(
        "data:application/octet-stream;base64," + payload,
        "/m/scene.gltf",
        MemoryFileIO(),
    )
    assert res.data == expected


@pytest.mark.parametrize(
    "uri",
    [
        "data:application/octet-stream;base64,AQID!!!!",
        "data:application/octet-stream;base64,AQ==AQ==",
        "data:application/octet-stream;base64,AQIDé",
        "data:,AAEC",
        "data:image/png,AAEC",
        "data:image/png,AA;EC",
        "data:image/png;base64",
        "data:;base64,AAEC",
        "data:image/png;base64,A",
    ],
)
def test_malformed_data_uri_fails(uri):
    with pytest.raises(MalformedInputError) as exc:
        resolve_resource(uri, "/m/scene.gltf", MemoryFileIO())
    assert exc.value.code == E_MALFORMED_DATA_URI


def test_relative_file_resolves_against_document_path():
    io = MemoryFileIO({"/models/buf.bin": b"\x01\x02"})
    res = resolve_resource("buf.bin", "/models/scene.gltf", io)
    assert res.data == b"\x01\x02"
    assert res.mime_type == "application/octet-stream"


def test_parent_relative_reference_and_mime_guess():
    io = MemoryFileIO({"/models/tex/albedo.PNG": b"png"})
    res = resolve_resource("../tex/albedo.PNG", "/models/sub/scene.gltf", io)
    assert res.data == b"png"
    assert res.mime_type == "image/png"


def test_percent_escapes_are_decoded():
    assert (
        resolve_uri_path("my%20file.bin", "/models/scene.gltf")
        == "/models/my file.bin"
    )


def test_missing_file_raises_resource_error():
    with pytest.raises(ResourceError) as exc:
        resolve_resource("gone.bin", "/models/scene.gltf", MemoryFileIO())
    assert exc.value.code == E_RESOURCE_NOT_FOUND
    assert exc.value.context["path"] == "/models/gone.bin"
    assert exc.value.context["uri"] == "gone.bin"


def test_local_filesystem_backend(tmp_path: Path):
    (tmp_path / "shaders").mkdir()
    (tmp_path / "shaders" / "main.vert").write_bytes(b"void main(){}")
    res = resolve_resource(
        "shaders/main.vert", tmp_path / "scene.gltf", LocalFileIO()
    )
    assert res.data == b"void main(){}"
    assert res.mime_type == "text/plain"

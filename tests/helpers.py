"""Small builders shared by the glbpack tests."""

import base64
import json


def data_uri(data: bytes, mime: str = "application/octet-stream") -> str:
    return f"data:{mime};base64," + base64.b64encode(data).decode("ascii")


def gltf_text(doc: dict) -> str:
    return json.dumps(doc)

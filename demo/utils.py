from __future__ import annotations

import base64
import os
import tempfile
from urllib.parse import urljoin


def normalize_base_url(raw: str) -> str:
    url = (raw or "").strip()
    if not url:
        return "http://localhost:3000"
    return url.rstrip("/")


def join_api(base_url: str, path: str) -> str:
    base = normalize_base_url(base_url) + "/"
    return urljoin(base, path.lstrip("/"))


def write_temp_b64_png(b64: str) -> str:
    fd, path = tempfile.mkstemp(suffix=".png")
    with os.fdopen(fd, "wb") as f:
        f.write(base64.b64decode(b64))
    return path

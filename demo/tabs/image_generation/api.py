from __future__ import annotations

from typing import Any

from demo.http_client import HttpClient, HttpResult
from demo.utils import join_api


def post_generate_image(*, client: HttpClient, base_url: str, payload: dict[str, Any]) -> HttpResult:
    url = join_api(base_url, "/generate-image")
    return client.post_json(url, payload)

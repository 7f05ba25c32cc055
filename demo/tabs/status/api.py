from __future__ import annotations

from demo.http_client import HttpClient, HttpResult
from demo.utils import join_api


def get_rate_limit_status(*, client: HttpClient, base_url: str) -> HttpResult:
    url = join_api(base_url, "/rate-limit-status")
    return client.get(url)


def get_endpoint(*, client: HttpClient, base_url: str, path: str) -> HttpResult:
    return client.get(join_api(base_url, path))

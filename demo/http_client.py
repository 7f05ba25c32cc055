from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import requests


@dataclass(frozen=True)
class HttpResult:
    status_code: int
    headers: dict[str, str]
    body_bytes: bytes

    def json(self) -> Any:
        return json.loads(self.body_bytes.decode("utf-8"))


class HttpClient:
    """Thin requests wrapper used by the demo tabs.

    Talks to the relay over HTTP only; nothing from the server package is imported.
    """

    def __init__(self, *, timeout_seconds: float, forwarded_for: str | None = None):
        self._timeout_seconds = float(timeout_seconds)
        self._headers: dict[str, str] = {}
        if forwarded_for:
            # Lets the demo act as a different quota bucket.
            self._headers["X-Forwarded-For"] = forwarded_for

    @staticmethod
    def _result(resp: requests.Response) -> HttpResult:
        return HttpResult(
            status_code=int(resp.status_code),
            headers={k.lower(): v for k, v in resp.headers.items()},
            body_bytes=resp.content,
        )

    def get(self, url: str) -> HttpResult:
        resp = requests.get(url, headers=self._headers, timeout=self._timeout_seconds)
        return self._result(resp)

    def post_json(self, url: str, payload: dict[str, Any]) -> HttpResult:
        resp = requests.post(url, json=payload, headers=self._headers, timeout=self._timeout_seconds)
        return self._result(resp)

"""Shared fixtures for relay tests.

The upstream ``requests.Session`` is always a mock; nothing here touches the network.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from app.core.concurrency.rate_limit import SlidingWindowRateLimiter
from app.core.config import Settings
from app.core.upstream.stability import StabilityClient
from app.main import create_app

TEST_API_KEY = "sk-test-key"


def make_response(status_code: int, *, json_body: Any = None, text: str | None = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    if json_body is not None:
        resp._content = json.dumps(json_body).encode("utf-8")
    else:
        resp._content = (text or "").encode("utf-8")
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = "application/json" if json_body is not None else "text/plain"
    return resp


def artifacts_body(b64: str = "AAA=") -> dict[str, Any]:
    return {"artifacts": [{"base64": b64, "seed": 1234, "finishReason": "SUCCESS"}]}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        stability_api_key=TEST_API_KEY,
        rate_limit=5,
        rate_limit_window_seconds=3600,
    )


@pytest.fixture
def limiter(settings: Settings) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(limit=settings.rate_limit, window_seconds=settings.rate_limit_window_seconds)


@pytest.fixture
def upstream_session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response(200, json_body=artifacts_body())
    return session


@pytest.fixture
def stability(settings: Settings, upstream_session: MagicMock) -> StabilityClient:
    return StabilityClient(settings=settings, session=upstream_session)


@pytest.fixture
def client(settings, limiter, stability):
    app = create_app(settings, limiter=limiter, stability=stability)
    with TestClient(app) as c:
        yield c

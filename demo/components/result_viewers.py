from __future__ import annotations

import json
from typing import Any


def safe_json_or_text(data: bytes) -> Any:
    if not data:
        return {}
    try:
        return json.loads(data.decode("utf-8"))
    except Exception:
        text = data.decode("utf-8", errors="replace").strip()
        return text or {}


def describe_error(status_code: int, body: Any) -> str:
    """One-line summary for the status banner; tells local and upstream 429s apart."""
    if not isinstance(body, dict):
        return f"HTTP {status_code}"
    error = body.get("error")
    if error == "rate_limit":
        return f"HTTP {status_code}: {body.get('message') or 'Rate limit exceeded'}"
    if error == "Stability API error":
        return f"HTTP {status_code}: upstream rejected the request"
    if error:
        return f"HTTP {status_code}: {error}"
    return f"HTTP {status_code}"

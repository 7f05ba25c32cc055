from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    code: str
    message: str | None = None
    http_status: int = 400
    detail: Any | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message or self.code

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message is not None:
            payload["message"] = self.message
        if self.detail is not None:
            payload["details"] = self.detail
        return payload


class InvalidRequest(AppError):
    def __init__(self, message: str | None = None, *, code: str = "invalid_request", detail: Any | None = None):
        super().__init__(code=code, message=message, http_status=400, detail=detail)


class MissingPrompt(InvalidRequest):
    def __init__(self):
        super().__init__(code="Prompt is required")


class PayloadTooLarge(AppError):
    def __init__(self, *, max_bytes: int):
        super().__init__(
            code="payload_too_large",
            message=f"Request body exceeds {max_bytes} bytes",
            http_status=413,
        )


class RateLimited(AppError):
    def __init__(self, *, limit: int, window_seconds: float):
        hours = int(window_seconds // 3600)
        super().__init__(
            code="rate_limit",
            message=f"Rate limit exceeded: max {limit} images per {hours} hour(s).",
            http_status=429,
        )


class ServerMisconfigured(AppError):
    def __init__(self, message: str = "STABILITY_API_KEY not configured on server."):
        super().__init__(code="server_config", message=message, http_status=500)


class UpstreamError(AppError):
    """Non-success response from the generation API; keeps its status."""

    def __init__(self, *, status: int, details: str):
        super().__init__(code="Stability API error", http_status=status, detail=details)
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "status": self.status, "details": self.detail}


class NoImageReturned(AppError):
    def __init__(self, *, raw: Any):
        super().__init__(code="no_image_returned", http_status=500, detail=raw)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "raw": self.detail}


class ServerError(AppError):
    def __init__(self, message: str = "Internal server error", *, cause: Exception | None = None):
        super().__init__(code="server_error", message=message, http_status=500, cause=cause)

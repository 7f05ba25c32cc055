from __future__ import annotations

from pydantic import BaseModel


class RateLimitStatusResponse(BaseModel):
    limit: int
    remaining: int
    reset_ms: int

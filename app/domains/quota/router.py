from __future__ import annotations

from fastapi import APIRouter, Request

from app.domains.quota.schemas import RateLimitStatusResponse
from app.domains.quota.service import get_quota_status

router = APIRouter(tags=["quota"])


@router.get("/rate-limit-status", response_model=RateLimitStatusResponse)
async def rate_limit_status_endpoint(request: Request):
    status = get_quota_status(request)
    return RateLimitStatusResponse(limit=status.limit, remaining=status.remaining, reset_ms=status.reset_ms)

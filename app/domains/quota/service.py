from __future__ import annotations

from fastapi import Request

from app.core.concurrency.rate_limit import QuotaStatus
from app.core.net.client_identity import resolve_client_id
from app.domains.image_generation.service import get_limiter


def get_quota_status(request: Request) -> QuotaStatus:
    limiter = get_limiter(request)
    return limiter.status(resolve_client_id(request))

from __future__ import annotations

import json
import logging
from functools import partial
from typing import Any

import anyio
from fastapi import Request

from app.core.concurrency.rate_limit import SlidingWindowRateLimiter
from app.core.errors.exceptions import (
    AppError,
    MissingPrompt,
    PayloadTooLarge,
    RateLimited,
    ServerError,
    ServerMisconfigured,
)
from app.core.net.client_identity import resolve_client_id
from app.core.upstream.stability import ImageResult, StabilityClient
from app.domains.image_generation.schemas import GenerateImageRequest

logger = logging.getLogger(__name__)


def get_limiter(request: Request) -> SlidingWindowRateLimiter:
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None:
        raise ServerMisconfigured("Rate limiter is not initialized")
    return limiter


def _get_stability(request: Request) -> StabilityClient:
    client = getattr(request.app.state, "stability", None)
    if client is None:
        raise ServerMisconfigured("Stability client is not initialized")
    return client


async def read_json_body(request: Request, *, max_bytes: int) -> Any:
    """Return the decoded JSON body, or None when it is empty or not JSON."""
    declared = (request.headers.get("content-length") or "").strip()
    if declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLarge(max_bytes=max_bytes)

    raw = await request.body()
    if len(raw) > max_bytes:
        raise PayloadTooLarge(max_bytes=max_bytes)
    if not raw:
        return None

    try:
        return json.loads(raw)
    except ValueError:
        return None


def parse_generate_request(body: Any) -> GenerateImageRequest:
    if not isinstance(body, dict):
        raise MissingPrompt()
    prompt = body.get("prompt")
    if not isinstance(prompt, str) or not prompt:
        raise MissingPrompt()

    return GenerateImageRequest.model_validate(body)


async def generate_image(request: Request, payload: GenerateImageRequest) -> ImageResult:
    limiter = get_limiter(request)
    stability = _get_stability(request)

    client_id = resolve_client_id(request)
    if not limiter.check_and_record(client_id):
        logger.warning("Rate limit exceeded for client=%s", client_id)
        raise RateLimited(limit=limiter.limit, window_seconds=limiter.window_seconds)

    call_generate = partial(
        stability.generate,
        prompt=payload.prompt,
        cfg_scale=payload.cfg_scale,
        width=payload.width,
        height=payload.height,
        steps=payload.steps,
        samples=payload.samples,
    )
    try:
        return await anyio.to_thread.run_sync(call_generate)
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Image generation failed for client=%s", client_id)
        raise ServerError(str(exc) or exc.__class__.__name__, cause=exc) from exc

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI

from app.core.concurrency.rate_limit import SlidingWindowRateLimiter
from app.core.config import Settings
from app.core.errors.exceptions import ServerMisconfigured
from app.core.upstream.stability import StabilityClient

logger = logging.getLogger(__name__)

MIN_SWEEP_INTERVAL_SECONDS = 60.0


async def _limiter_sweep_task(limiter: SlidingWindowRateLimiter, interval: float) -> None:
    while True:
        await anyio.sleep(interval)
        try:
            evicted = limiter.sweep()
        except Exception:
            logger.exception("Rate limiter sweep failed")
            continue
        if evicted:
            logger.debug("Evicted %d idle client(s) from rate limiter", evicted)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings | None = getattr(app.state, "settings", None)
    if settings is None:
        settings = Settings.from_env()
        app.state.settings = settings

    if not settings.stability_api_key:
        raise ServerMisconfigured("STABILITY_API_KEY must be set before starting the server.")

    if getattr(app.state, "limiter", None) is None:
        app.state.limiter = SlidingWindowRateLimiter(
            limit=settings.rate_limit,
            window_seconds=settings.rate_limit_window_seconds,
        )
    if getattr(app.state, "stability", None) is None:
        app.state.stability = StabilityClient(settings=settings)

    interval = max(settings.rate_limit_sweep_interval_seconds, MIN_SWEEP_INTERVAL_SECONDS)
    logger.info(
        "Relay ready: limit=%d window=%ds upstream=%s",
        app.state.limiter.limit,
        app.state.limiter.window_seconds,
        settings.stability_text_to_image_url,
    )

    async with anyio.create_task_group() as tg:
        tg.start_soon(_limiter_sweep_task, app.state.limiter, interval)
        yield
        tg.cancel_scope.cancel()

    try:
        app.state.stability.close()
    except Exception:
        logger.warning("Failed to close Stability client session", exc_info=True)

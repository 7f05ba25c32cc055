"""Startup/shutdown behaviour and the background limiter sweep."""

from __future__ import annotations

import anyio

import app.lifespan as lifespan_module
from app.core.concurrency.rate_limit import SlidingWindowRateLimiter
from app.lifespan import _limiter_sweep_task, lifespan
from app.main import create_app


def test_sweep_task_evicts_idle_clients():
    limiter = SlidingWindowRateLimiter(limit=5, window_seconds=1)
    limiter.check_and_record("idle")

    async def _run() -> None:
        async with anyio.create_task_group() as tg:
            tg.start_soon(_limiter_sweep_task, limiter, 0.05)
            with anyio.fail_after(5):
                while limiter.tracked_identifiers:
                    await anyio.sleep(0.05)
            tg.cancel_scope.cancel()

    anyio.run(_run)
    assert limiter.tracked_identifiers == 0
    assert limiter.status("idle").remaining == 5


def test_sweep_task_survives_a_failing_sweep():
    calls = []

    class FlakyLimiter:
        def sweep(self) -> int:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return 0

    async def _run() -> None:
        async with anyio.create_task_group() as tg:
            tg.start_soon(_limiter_sweep_task, FlakyLimiter(), 0.01)
            with anyio.fail_after(5):
                while len(calls) < 3:
                    await anyio.sleep(0.01)
            tg.cancel_scope.cancel()

    anyio.run(_run)
    assert len(calls) >= 3


def test_lifespan_clamps_interval_sweeps_and_shuts_down(monkeypatch, settings, stability, upstream_session):
    monkeypatch.setattr(lifespan_module, "MIN_SWEEP_INTERVAL_SECONDS", 0.05)
    settings = settings.model_copy(update={"rate_limit_sweep_interval_seconds": 0.0})
    limiter = SlidingWindowRateLimiter(limit=5, window_seconds=1)
    limiter.check_and_record("idle")
    app = create_app(settings, limiter=limiter, stability=stability)

    async def _run() -> None:
        with anyio.fail_after(5):
            async with lifespan(app):
                while limiter.tracked_identifiers:
                    await anyio.sleep(0.05)

    # Completes only if the sweep task is cancelled when the lifespan exits.
    anyio.run(_run)
    assert limiter.tracked_identifiers == 0
    upstream_session.close.assert_called_once()


def test_lifespan_uses_minimum_interval_when_configured_lower(monkeypatch, settings, stability):
    seen = []

    async def _record_task(limiter, interval):
        seen.append(interval)

    monkeypatch.setattr(lifespan_module, "_limiter_sweep_task", _record_task)
    settings = settings.model_copy(update={"rate_limit_sweep_interval_seconds": 5.0})
    app = create_app(settings, stability=stability)

    async def _run() -> None:
        async with lifespan(app):
            await anyio.sleep(0)

    anyio.run(_run)
    assert seen == [lifespan_module.MIN_SWEEP_INTERVAL_SECONDS]

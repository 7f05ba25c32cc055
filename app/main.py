from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load project-root .env if present.
# Note: Uvicorn does not automatically load it unless started with --env-file.
_env_path = Path(__file__).resolve().parents[1] / ".env"
if _env_path.exists():
    from dotenv import load_dotenv

    # Prefer .env values over inherited shell env vars for local runs.
    load_dotenv(dotenv_path=_env_path, override=True)

from app.core.concurrency.rate_limit import SlidingWindowRateLimiter
from app.core.config import Settings
from app.core.errors.handlers import register_exception_handlers
from app.core.logging import configure_logging
from app.core.upstream.stability import StabilityClient
from app.domains.image_generation.router import router as image_router
from app.domains.quota.router import router as quota_router
from app.lifespan import lifespan


def create_app(
    settings: Settings | None = None,
    *,
    limiter: SlidingWindowRateLimiter | None = None,
    stability: StabilityClient | None = None,
) -> FastAPI:
    """Build the relay app. Anything left as None is created from the environment at startup."""
    configure_logging(settings.log_level if settings else (os.getenv("LOG_LEVEL") or "INFO"))

    app = FastAPI(title="Stability Relay", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.limiter = limiter
    app.state.stability = stability

    # No cookies or sessions are involved, so any origin may call the relay.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(image_router)
    app.include_router(quota_router)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.get("/readyz")
    async def readyz():
        client = getattr(app.state, "stability", None)
        upstream_ready = bool(client and client.configured)
        limiter_ready = getattr(app.state, "limiter", None) is not None
        return {
            "server_ready": upstream_ready and limiter_ready,
            "upstream_configured": upstream_ready,
            "rate_limiter_ready": limiter_ready,
        }

    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

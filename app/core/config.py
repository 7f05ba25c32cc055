from __future__ import annotations

import os

from pydantic import BaseModel


def _env_str(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip()
    return value or default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw)
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    try:
        return float(raw)
    except Exception:
        return default


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    stability_api_key: str | None = None
    stability_api_base_url: str = "https://api.stability.ai"
    stability_engine_id: str = "stable-diffusion-xl-1024-v1-0"
    stability_timeout_seconds: float = 120.0

    rate_limit: int = 5
    rate_limit_window_seconds: int = 60 * 60
    rate_limit_sweep_interval_seconds: float = 600.0

    max_body_bytes: int = 2 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        # No fallback key: an empty value stays None and startup refuses it.
        api_key = (os.getenv("STABILITY_API_KEY") or "").strip() or None

        return cls(
            host=_env_str("HOST", "0.0.0.0"),
            port=_env_int("PORT", 3000),
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
            stability_api_key=api_key,
            stability_api_base_url=_env_str("STABILITY_API_BASE_URL", "https://api.stability.ai").rstrip("/"),
            stability_engine_id=_env_str("STABILITY_ENGINE_ID", "stable-diffusion-xl-1024-v1-0"),
            stability_timeout_seconds=_env_float("STABILITY_TIMEOUT_SECONDS", 120.0),
            rate_limit=_env_int("RATE_LIMIT", 5),
            rate_limit_window_seconds=_env_int("RATE_LIMIT_WINDOW_SECONDS", 60 * 60),
            rate_limit_sweep_interval_seconds=_env_float("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", 600.0),
            max_body_bytes=_env_int("MAX_BODY_BYTES", 2 * 1024 * 1024),
        )

    @property
    def stability_text_to_image_url(self) -> str:
        return f"{self.stability_api_base_url}/v1/generation/{self.stability_engine_id}/text-to-image"

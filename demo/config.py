from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class DemoConfig:
    api_base_url: str
    timeout_seconds: int
    server_port: int

    @staticmethod
    def from_env() -> "DemoConfig":
        api_base_url = (os.getenv("DEMO_API_BASE_URL") or "http://localhost:3000").strip().rstrip("/")

        # Upstream generation can take a while; the relay itself times out at 120s.
        timeout_raw = (os.getenv("DEMO_TIMEOUT_SECONDS") or "150").strip()
        try:
            timeout_seconds = int(timeout_raw)
        except Exception:
            timeout_seconds = 150

        port_raw = (os.getenv("DEMO_PORT") or "7860").strip()
        try:
            server_port = int(port_raw)
        except Exception:
            server_port = 7860

        return DemoConfig(api_base_url=api_base_url, timeout_seconds=timeout_seconds, server_port=server_port)

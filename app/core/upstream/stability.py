"""Synchronous client for the Stability AI text-to-image endpoint.

Run ``StabilityClient.generate`` in a worker thread (``anyio.to_thread``);
it blocks for the whole upstream round trip, bounded by the configured
timeout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from app.core.config import Settings
from app.core.errors.exceptions import NoImageReturned, ServerError, ServerMisconfigured, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_CFG_SCALE = 7
DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_STEPS = 30
DEFAULT_SAMPLES = 1


@dataclass(frozen=True)
class ImageResult:
    image_b64: str
    image_data_uri: str

    @classmethod
    def from_b64(cls, b64: str) -> "ImageResult":
        return cls(image_b64=b64, image_data_uri=f"data:image/png;base64,{b64}")


def extract_first_image_b64(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    artifacts = data.get("artifacts")
    if not isinstance(artifacts, list) or not artifacts:
        return None
    first = artifacts[0]
    if not isinstance(first, dict):
        return None
    b64 = first.get("base64")
    if not isinstance(b64, str) or not b64:
        return None
    return b64


class StabilityClient:
    def __init__(self, *, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.settings.stability_api_key)

    def build_payload(
        self,
        *,
        prompt: str,
        cfg_scale: Any = DEFAULT_CFG_SCALE,
        width: Any = DEFAULT_WIDTH,
        height: Any = DEFAULT_HEIGHT,
        steps: Any = DEFAULT_STEPS,
        samples: Any = DEFAULT_SAMPLES,
    ) -> dict[str, Any]:
        return {
            "text_prompts": [{"text": prompt}],
            "cfg_scale": cfg_scale,
            "width": width,
            "height": height,
            "steps": steps,
            "samples": samples,
        }

    def generate(
        self,
        *,
        prompt: str,
        cfg_scale: Any = DEFAULT_CFG_SCALE,
        width: Any = DEFAULT_WIDTH,
        height: Any = DEFAULT_HEIGHT,
        steps: Any = DEFAULT_STEPS,
        samples: Any = DEFAULT_SAMPLES,
    ) -> ImageResult:
        api_key = self.settings.stability_api_key
        if not api_key:
            raise ServerMisconfigured()

        payload = self.build_payload(
            prompt=prompt,
            cfg_scale=cfg_scale,
            width=width,
            height=height,
            steps=steps,
            samples=samples,
        )
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

        try:
            resp = self.session.post(
                self.settings.stability_text_to_image_url,
                json=payload,
                headers=headers,
                timeout=self.settings.stability_timeout_seconds,
            )
        except requests.Timeout as exc:
            raise ServerError(
                f"Stability API did not respond within {self.settings.stability_timeout_seconds:g}s",
                cause=exc,
            ) from exc
        except requests.RequestException as exc:
            raise ServerError(str(exc), cause=exc) from exc

        if not 200 <= resp.status_code < 300:
            text = resp.text
            logger.error("Stability API error: status=%s body=%s", resp.status_code, text)
            raise UpstreamError(status=int(resp.status_code), details=text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ServerError(f"Invalid JSON from Stability API: {exc}", cause=exc) from exc

        b64 = extract_first_image_b64(data)
        if b64 is None:
            logger.warning("Stability API returned no image artifact")
            raise NoImageReturned(raw=data)

        return ImageResult.from_b64(b64)

    def close(self) -> None:
        self.session.close()

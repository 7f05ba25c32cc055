from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.core.upstream.stability import (
    DEFAULT_CFG_SCALE,
    DEFAULT_HEIGHT,
    DEFAULT_SAMPLES,
    DEFAULT_STEPS,
    DEFAULT_WIDTH,
)


class GenerateImageRequest(BaseModel):
    # Defaults fill omitted keys only; values that are present go upstream as sent.
    model_config = ConfigDict(extra="ignore")

    prompt: str = Field(min_length=1)
    cfg_scale: Any = DEFAULT_CFG_SCALE
    width: Any = DEFAULT_WIDTH
    height: Any = DEFAULT_HEIGHT
    steps: Any = DEFAULT_STEPS
    samples: Any = DEFAULT_SAMPLES


class GenerateImageResponse(BaseModel):
    image_b64: str
    image_data_uri: str

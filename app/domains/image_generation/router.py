from __future__ import annotations

from fastapi import APIRouter, Request

from app.domains.image_generation.schemas import GenerateImageResponse
from app.domains.image_generation.service import generate_image, parse_generate_request, read_json_body

router = APIRouter(tags=["image-generation"])


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image_endpoint(request: Request):
    # Body is read by hand so a missing or mistyped prompt maps to the documented 400,
    # and validation happens before the limiter records anything.
    body = await read_json_body(request, max_bytes=request.app.state.settings.max_body_bytes)
    payload = parse_generate_request(body)
    result = await generate_image(request, payload)
    return GenerateImageResponse(image_b64=result.image_b64, image_data_uri=result.image_data_uri)

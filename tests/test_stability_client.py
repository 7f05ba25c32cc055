from __future__ import annotations

import pytest
import requests

from app.core.config import Settings
from app.core.errors.exceptions import NoImageReturned, ServerError, ServerMisconfigured, UpstreamError
from app.core.upstream.stability import ImageResult, StabilityClient, extract_first_image_b64

from conftest import TEST_API_KEY, artifacts_body, make_response


def test_generate_sends_expected_request(stability, upstream_session, settings):
    stability.generate(prompt="a red fox", width=512, height=768)

    upstream_session.post.assert_called_once()
    args, kwargs = upstream_session.post.call_args
    assert args[0] == (
        "https://api.stability.ai/v1/generation/stable-diffusion-xl-1024-v1-0/text-to-image"
    )
    assert kwargs["headers"]["Authorization"] == f"Bearer {TEST_API_KEY}"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == settings.stability_timeout_seconds
    assert kwargs["json"] == {
        "text_prompts": [{"text": "a red fox"}],
        "cfg_scale": 7,
        "width": 512,
        "height": 768,
        "steps": 30,
        "samples": 1,
    }


def test_generate_returns_image_and_data_uri(stability):
    result = stability.generate(prompt="a red fox")
    assert result == ImageResult(image_b64="AAA=", image_data_uri="data:image/png;base64,AAA=")


def test_missing_key_fails_before_any_call(upstream_session):
    client = StabilityClient(settings=Settings(stability_api_key=None), session=upstream_session)
    assert not client.configured
    with pytest.raises(ServerMisconfigured):
        client.generate(prompt="a red fox")
    upstream_session.post.assert_not_called()


@pytest.mark.parametrize("status", [302, 400, 401, 429, 503])
def test_non_success_status_is_preserved(stability, upstream_session, status):
    upstream_session.post.return_value = make_response(status, text='{"message": "nope"}')
    with pytest.raises(UpstreamError) as excinfo:
        stability.generate(prompt="a red fox")
    err = excinfo.value
    assert err.http_status == status
    assert err.to_dict() == {"error": "Stability API error", "status": status, "details": '{"message": "nope"}'}


@pytest.mark.parametrize(
    "body",
    [
        {"artifacts": []},
        {"artifacts": [{"seed": 1}]},
        {"artifacts": [{"base64": ""}]},
        {"something": "else"},
    ],
)
def test_missing_artifact_raises_no_image_returned(stability, upstream_session, body):
    upstream_session.post.return_value = make_response(200, json_body=body)
    with pytest.raises(NoImageReturned) as excinfo:
        stability.generate(prompt="a red fox")
    assert excinfo.value.to_dict() == {"error": "no_image_returned", "raw": body}


def test_only_first_artifact_is_used(stability, upstream_session):
    upstream_session.post.return_value = make_response(
        200, json_body={"artifacts": [{"base64": "FIRST"}, {"base64": "SECOND"}]}
    )
    assert stability.generate(prompt="x").image_b64 == "FIRST"


def test_transport_failure_becomes_server_error(stability, upstream_session):
    upstream_session.post.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(ServerError) as excinfo:
        stability.generate(prompt="a red fox")
    assert excinfo.value.to_dict() == {"error": "server_error", "message": "connection refused"}


def test_timeout_becomes_server_error(stability, upstream_session):
    upstream_session.post.side_effect = requests.Timeout("read timed out")
    with pytest.raises(ServerError) as excinfo:
        stability.generate(prompt="a red fox")
    assert "did not respond" in excinfo.value.message


def test_malformed_success_body_becomes_server_error(stability, upstream_session):
    upstream_session.post.return_value = make_response(200, text="<html>oops</html>")
    with pytest.raises(ServerError):
        stability.generate(prompt="a red fox")


def test_custom_engine_and_base_url(upstream_session):
    settings = Settings(
        stability_api_key="k",
        stability_api_base_url="http://stub.local",
        stability_engine_id="sd-test",
    )
    StabilityClient(settings=settings, session=upstream_session).generate(prompt="x")
    assert upstream_session.post.call_args.args[0] == "http://stub.local/v1/generation/sd-test/text-to-image"


def test_extract_first_image_b64():
    assert extract_first_image_b64(artifacts_body("QQ==")) == "QQ=="
    assert extract_first_image_b64(None) is None
    assert extract_first_image_b64({"artifacts": "nope"}) is None
    assert extract_first_image_b64({"artifacts": ["nope"]}) is None

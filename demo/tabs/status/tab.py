from __future__ import annotations

import gradio as gr

from demo.components.result_viewers import safe_json_or_text
from demo.components.two_column import two_column
from demo.http_client import HttpClient
from demo.tabs.status.api import get_endpoint, get_rate_limit_status


def build_status_tab(*, base_url: gr.Textbox, timeout: gr.Number, client_id: gr.Textbox) -> None:
    left, right = two_column(left_title="Call", right_title="Response")

    with left:
        endpoint = gr.Dropdown(
            label="Endpoint",
            choices=["/rate-limit-status", "/healthz", "/readyz"],
            value="/rate-limit-status",
        )
        run = gr.Button("Call")

    with right:
        out = gr.JSON(label="Response")

    def _call(api_base_url: str, timeout_seconds: float, cid: str, ep: str):
        client = HttpClient(timeout_seconds=float(timeout_seconds), forwarded_for=(cid or "").strip() or None)
        if ep == "/rate-limit-status":
            res = get_rate_limit_status(client=client, base_url=api_base_url)
        else:
            res = get_endpoint(client=client, base_url=api_base_url, path=ep)
        return safe_json_or_text(res.body_bytes)

    run.click(_call, inputs=[base_url, timeout, client_id, endpoint], outputs=[out])

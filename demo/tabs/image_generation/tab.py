from __future__ import annotations

from typing import Any

import gradio as gr

from demo.components.result_viewers import describe_error, safe_json_or_text
from demo.components.two_column import two_column
from demo.http_client import HttpClient
from demo.tabs.image_generation.api import post_generate_image
from demo.utils import write_temp_b64_png


def build_image_generation_tab(*, base_url: gr.Textbox, timeout: gr.Number, client_id: gr.Textbox) -> None:
    left, right = two_column(left_title="Request", right_title="Result")

    with left:
        prompt = gr.Textbox(label="Prompt", value="A serene landscape with mountains and a river during sunset.")
        with gr.Row():
            width = gr.Number(label="Width", value=1024, precision=0)
            height = gr.Number(label="Height", value=1024, precision=0)
        with gr.Row():
            cfg_scale = gr.Number(label="CFG scale", value=7)
            steps = gr.Number(label="Steps", value=30, precision=0)
        run = gr.Button("Generate")

    with right:
        status = gr.Markdown("")
        image_out = gr.Image(label="Generated image", type="filepath")
        json_out = gr.JSON(label="Error response")

    def _call(api_base_url: str, timeout_seconds: float, cid: str, p: str, w: float, h: float, cfg: float, st: float):
        client = HttpClient(timeout_seconds=float(timeout_seconds), forwarded_for=(cid or "").strip() or None)
        payload: dict[str, Any] = {
            "prompt": p,
            "width": int(w),
            "height": int(h),
            "cfg_scale": cfg,
            "steps": int(st),
        }

        try:
            res = post_generate_image(client=client, base_url=api_base_url, payload=payload)
        except Exception as exc:
            return "Error", None, {"error": str(exc)}

        body = safe_json_or_text(res.body_bytes)
        if res.status_code >= 400:
            return describe_error(res.status_code, body), None, body

        img_path = write_temp_b64_png(body["image_b64"])
        return "OK", img_path, None

    run.click(
        _call,
        inputs=[base_url, timeout, client_id, prompt, width, height, cfg_scale, steps],
        outputs=[status, image_out, json_out],
    )

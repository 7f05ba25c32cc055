from __future__ import annotations

import gradio as gr

from demo.config import DemoConfig
from demo.tabs.image_generation.tab import build_image_generation_tab
from demo.tabs.status.tab import build_status_tab


def build_app() -> gr.Blocks:
    cfg = DemoConfig.from_env()

    with gr.Blocks(title="Stability Relay Demo") as demo:
        gr.Markdown("# Stability Relay Demo\n")

        with gr.Row():
            base_url = gr.Textbox(
                label="API Base URL",
                value=cfg.api_base_url,
                interactive=True,
                placeholder="http://localhost:3000",
            )
            timeout = gr.Number(label="Timeout (sec)", value=float(cfg.timeout_seconds), precision=0)
            client_id = gr.Textbox(
                label="X-Forwarded-For (optional)",
                placeholder="203.0.113.7",
                interactive=True,
            )

        with gr.Tabs():
            with gr.Tab(label="Image Generation"):
                build_image_generation_tab(base_url=base_url, timeout=timeout, client_id=client_id)

            with gr.Tab(label="Quota & Status"):
                build_status_tab(base_url=base_url, timeout=timeout, client_id=client_id)

    return demo


def main() -> None:
    cfg = DemoConfig.from_env()
    demo = build_app()
    demo.queue()
    demo.launch(server_name="0.0.0.0", server_port=cfg.server_port)


if __name__ == "__main__":
    main()

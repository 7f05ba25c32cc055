from __future__ import annotations

import gradio as gr


def two_column(*, left_title: str = "Request", right_title: str = "Result") -> tuple[gr.Column, gr.Column]:
    with gr.Row(equal_height=False):
        with gr.Column(scale=4):
            gr.Markdown(f"### {left_title}")
            left = gr.Column()
        with gr.Column(scale=6):
            gr.Markdown(f"### {right_title}")
            right = gr.Column()
    return left, right

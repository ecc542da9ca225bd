import logging

import gradio as gr

from json_table_exporter import config
from json_table_exporter.handlers import (
    OUTPUT_FORMATS,
    copy_handler,
    export_data_handler,
    headers_changed_handler,
    payload_loaded_handler,
    selection_changed_handler,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- UI Definition ---
with gr.Blocks(title="JSON Table Exporter") as demo:
    gr.Markdown("# Extracted Data to Spreadsheet")
    gr.Markdown("Load an extraction webhook response, check the table, pick rows and columns, and export.")

    # State
    payload_state = gr.State()

    with gr.Row():
        # Left Panel: Input & Columns
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload Webhook Response", file_types=[".json", ".txt"])
            pasted_input = gr.Textbox(label="...or paste the response", lines=6)
            load_btn = gr.Button("Load")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Column Names")
            gr.Markdown("Optional. Names from a saved template, comma separated.")
            header_input = gr.Textbox(label="Column Names", placeholder="coverage, locality, apnany, ...")

            gr.Markdown("### 3. Select")
            row_selector = gr.CheckboxGroup(label="Rows (none = all)", choices=[], type="index")
            col_selector = gr.CheckboxGroup(label="Columns (none = all)", choices=[], type="index")
            selection_count = gr.Textbox(label="Selection", interactive=False)

        # Right Panel: Preview & Export
        with gr.Column(scale=2):
            gr.Markdown("### 4. Preview")
            preview_table = gr.Dataframe(label="Extracted Data", interactive=False, wrap=True)

            gr.Markdown("### 5. Export")
            output_format = gr.Radio(choices=OUTPUT_FORMATS, value="Excel", label="Output Format")
            with gr.Row():
                copy_btn = gr.Button("Copy as Text")
                export_btn = gr.Button("Export Data", variant="primary")
            download_output = gr.File(label="Download Result")
            copy_output = gr.Textbox(label="Tab-separated", lines=6, show_copy_button=True)

    load_inputs = [file_input, pasted_input, header_input]
    load_outputs = [payload_state, status_msg, preview_table, row_selector, col_selector, selection_count]

    file_input.upload(fn=payload_loaded_handler, inputs=load_inputs, outputs=load_outputs)
    load_btn.click(fn=payload_loaded_handler, inputs=load_inputs, outputs=load_outputs)

    header_input.submit(
        fn=headers_changed_handler,
        inputs=[payload_state, header_input],
        outputs=[preview_table, col_selector],
    )

    selection_inputs = [payload_state, header_input, row_selector, col_selector]
    row_selector.change(fn=selection_changed_handler, inputs=selection_inputs, outputs=[preview_table, selection_count])
    col_selector.change(fn=selection_changed_handler, inputs=selection_inputs, outputs=[preview_table, selection_count])

    copy_btn.click(fn=copy_handler, inputs=selection_inputs, outputs=[copy_output])

    export_btn.click(
        fn=export_data_handler,
        inputs=selection_inputs + [output_format],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch(server_name=config.SERVER_NAME, server_port=config.SERVER_PORT)

"""Core logic for JSON Table Exporter.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- coerce loosely-formed webhook payloads into JSON values
- classify payload shapes and build string tables
- reconcile headers and repair ragged rows
- filter by row/column selection and export spreadsheets
"""

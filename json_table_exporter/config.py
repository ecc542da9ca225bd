import os
import tempfile

from dotenv import load_dotenv

load_dotenv()

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Export ---
SHEET_NAME = "Extracted"
EXPORT_FILE_NAME = "extracted-data.xls"
EXPORT_DIR = os.getenv("EXPORT_DIR", tempfile.gettempdir())

# Cells with this many digits or more are kept as text (phone numbers, IDs).
NUMBER_MAX_DIGITS = int(os.getenv("NUMBER_MAX_DIGITS", 10))

# --- UI ---
PREVIEW_ROW_LIMIT = int(os.getenv("PREVIEW_ROW_LIMIT", 200))
SERVER_NAME = os.getenv("SERVER_NAME", "127.0.0.1")
SERVER_PORT = int(os.getenv("SERVER_PORT", 7860))

from __future__ import annotations

import json
import re
from typing import Any

_TRAILING_COMMA = re.compile(r',\s*([}\]])')
_OBJECT_KEY = re.compile(r'''(?:'(\w+)'|"(\w+)"|(\w+))\s*:''')
_SINGLE_QUOTED_VALUE = re.compile(r":\s*'([^']*)'")

_FAILED = object()


def strip_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA.sub(r'\1', text)


def _try_json(text: str) -> Any:
    """Parse `text` after comma repair, retrying once truncated at the last closer.

    Returns the `_FAILED` sentinel since `null` is a valid result.
    """
    candidate = strip_trailing_commas(text)
    try:
        return json.loads(candidate)
    except ValueError:
        pass

    last_close = max(candidate.rfind('}'), candidate.rfind(']'))
    if last_close > 0:
        try:
            return json.loads(candidate[:last_close + 1])
        except ValueError:
            pass
    return _FAILED


def _quote_key(match: re.Match) -> str:
    key = match.group(1) or match.group(2) or match.group(3)
    return f'"{key}":'


def normalize_jsonish(text: str) -> str:
    """Rewrite JS-style object literals into something `json.loads` accepts."""
    text = _OBJECT_KEY.sub(_quote_key, text)
    return _SINGLE_QUOTED_VALUE.sub(r': "\1"', text)


def _is_bracketed(text: str) -> bool:
    return (text.startswith('{') and text.endswith('}')) or (text.startswith('[') and text.endswith(']'))


def safe_parse(value: Any) -> Any:
    """Parse a possibly-stringified, possibly-malformed JSON fragment.

    Non-strings pass through. Leading labels before the first bracket are
    dropped, trailing commas repaired, and single-quoted object literals
    normalized as a last resort. When nothing parses, the original string is
    returned untouched so callers can treat it as an opaque scalar.
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    starts = [i for i in (text.find('{'), text.find('[')) if i != -1]
    if starts and min(starts) > 0:
        text = text[min(starts):].strip()

    if not text.startswith(('{', '[')):
        return value

    parsed = _try_json(text)
    if parsed is not _FAILED:
        return parsed

    if _is_bracketed(text):
        parsed = _try_json(normalize_jsonish(text))
        if parsed is not _FAILED:
            return parsed

    return value


def coerce_children(container: Any) -> Any:
    """Unwrap one level of stringified JSON inside a list or dict."""
    if isinstance(container, list):
        return [safe_parse(item) for item in container]
    if isinstance(container, dict):
        return {key: safe_parse(val) for key, val in container.items()}
    return container

"""Pull the JSON object out of a model reply.

The reply is expected to be a single JSON object, possibly wrapped in
markdown code fences and possibly surrounded by prose. Matching is
deliberately greedy: everything from the first ``{`` to the last ``}``
is handed to ``json.loads``. Nested objects are fine; a stray ``{``
before the object or a stray ``}`` after it breaks the match and the
reply is rejected.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from slip_parser.core.errors import ExtractionError

logger = logging.getLogger(__name__)

JSON_FENCE = "```json"
FENCE = "```"

NO_OBJECT_FOUND = "No JSON object found in AI response"
INVALID_JSON = "Invalid JSON in AI response"


def _reject_constant(name: str):
    # NaN and Infinity are not JSON.
    raise ValueError(f"non-standard JSON constant {name}")


def strip_code_fences(text: str) -> str:
    """Drop every fence marker (tagged ``json`` or bare), wherever it occurs."""
    return text.replace(JSON_FENCE, "").replace(FENCE, "").strip()


def find_object_span(text: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the first ``{`` .. last ``}`` span, end exclusive."""
    start = text.find("{")
    if start == -1:
        return None
    end = text.rfind("}")
    if end < start:
        return None
    return start, end + 1


def extract_json_object(raw: str) -> dict[str, Any]:
    """Return the JSON object embedded in *raw* or raise ``ExtractionError``."""
    cleaned = strip_code_fences(raw or "")

    span = find_object_span(cleaned)
    if span is None:
        raise ExtractionError(NO_OBJECT_FOUND, raw_text=raw or "")

    candidate = cleaned[span[0] : span[1]]
    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ExtractionError(f"{INVALID_JSON}: {exc}", raw_text=raw) from exc

    if not isinstance(parsed, dict):
        raise ExtractionError(INVALID_JSON, raw_text=raw)
    return parsed

"""Derived fields: status, clamped confidence, cost and image size estimates."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping, Optional

from .contracts import ExtractedSlipData, SlipStatus

_DATA_URI_PREFIX = re.compile(r"^data:image/\w+;base64,")

CONFIDENCE_MIN = 0
CONFIDENCE_MAX = 100


def derive_status(parsed: Mapping[str, Any]) -> SlipStatus:
    has_transaction = bool(parsed.get("transactionId"))
    has_account = bool(parsed.get("toAccountNumber"))

    if has_transaction and has_account:
        return "complete"
    if has_transaction or has_account:
        return "partial"
    return "empty"


def clamp_confidence(value: Any) -> Optional[float]:
    """Clamp a numeric score into [0, 100]; anything non-numeric becomes ``None``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return min(CONFIDENCE_MAX, max(CONFIDENCE_MIN, value))


def estimate_cost(
    input_tokens: int,
    output_tokens: int,
    *,
    rate_per_1k_input: float,
    rate_per_1k_output: float,
) -> float:
    input_cost = (input_tokens / 1000) * rate_per_1k_input
    output_cost = (output_tokens / 1000) * rate_per_1k_output
    return round(input_cost + output_cost, 6)


def estimate_image_size_kb(base64_image: str) -> int:
    """Approximate decoded size in KB from the base64 length (padding ignored).

    Halves round up so values line up with earlier telemetry.
    """
    base = _DATA_URI_PREFIX.sub("", base64_image, count=1)
    return int(math.floor(len(base) * 3 / 4 / 1024 + 0.5))


def _clean_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value) if value else None
    if isinstance(value, str):
        return value.strip() or None
    return None


def normalize_slip_data(parsed: Mapping[str, Any]) -> ExtractedSlipData:
    return ExtractedSlipData(
        transaction_id=_clean_text(parsed.get("transactionId")),
        to_account_number=_clean_text(parsed.get("toAccountNumber")),
        confidence_score=clamp_confidence(parsed.get("confidenceScore")),
        raw_text=_clean_text(parsed.get("rawText")),
    )

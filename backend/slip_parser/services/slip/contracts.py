"""Slip extraction contracts.

Python attributes are snake_case; the wire format is camelCase.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SlipStatus = Literal["complete", "partial", "empty"]
Score = Optional[Union[int, float]]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SlipExtractionRequest(_WireModel):
    # Optional so that a missing image is reported as "Missing image", not as a schema error.
    base64_image: Optional[str] = None


class ExtractedSlipData(_WireModel):
    """Fields read off the slip. Anything the model did not return is ``None``."""

    transaction_id: Optional[str] = None
    to_account_number: Optional[str] = None
    confidence_score: Score = None
    raw_text: Optional[str] = None


class TokenUsage(_WireModel):
    input: int = 0
    output: int = 0
    total: int = 0
    estimated_cost_usd: float = Field(default=0.0, alias="estimatedCostUSD")


class SlipMeta(_WireModel):
    process_time_ms: int
    ai_time_ms: int
    image_size_kb: int = Field(alias="imageSizeKB")
    model: str
    tokens: TokenUsage


class SlipExtractionResult(_WireModel):
    request_id: str
    status: SlipStatus
    data: ExtractedSlipData
    ai_score: Score = None
    meta: SlipMeta


class ErrorResponse(_WireModel):
    request_id: str
    status: Literal["error"] = "error"
    error: str
    process_time_ms: int


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str

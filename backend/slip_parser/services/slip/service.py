"""Slip extraction service: prompt, model call, JSON extraction, normalisation.

Errors are raised, never returned: ``MissingInputError`` for an absent
image, ``UpstreamInvocationError`` when the model API call fails and
``ExtractionError`` when the reply holds no usable JSON object. The HTTP
layer turns all of them into the error envelope.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from slip_parser.core.config import Settings
from slip_parser.core.errors import ExtractionError, MissingInputError, UpstreamInvocationError
from slip_parser.core.request_context import RequestContext
from slip_parser.services.ai.providers import BaseProvider, ProviderResult
from slip_parser.services.slip.contracts import SlipExtractionResult, SlipMeta, TokenUsage
from slip_parser.services.slip.json_tools import extract_json_object
from slip_parser.services.slip.normalize import (
    derive_status,
    estimate_cost,
    estimate_image_size_kb,
    normalize_slip_data,
)
from slip_parser.services.slip.prompt import build_slip_prompt

logger = logging.getLogger(__name__)


async def _invoke(provider: BaseProvider, base64_image: str, settings: Settings, ctx: RequestContext) -> ProviderResult:
    prompt = build_slip_prompt(base64_image)
    try:
        return await provider.generate(
            prompt.text,
            image_url=prompt.image_url,
            model=settings.slip_model,
            timeout_seconds=settings.ai_timeout_seconds,
        )
    except Exception as exc:
        logger.exception(
            "parse_slip.upstream_failed",
            extra={"requestId": ctx.request_id, "provider": provider.name, "error": str(exc)},
        )
        raise UpstreamInvocationError(str(exc)) from exc


async def parse_slip(
    base64_image: Optional[str],
    *,
    ctx: RequestContext,
    provider: BaseProvider,
    settings: Settings,
) -> SlipExtractionResult:
    if not base64_image:
        logger.warning("parse_slip.missing_image", extra={"requestId": ctx.request_id})
        raise MissingInputError()

    image_size_kb = estimate_image_size_kb(base64_image)
    logger.debug("parse_slip.image_received", extra={"requestId": ctx.request_id, "imageSizeKB": image_size_kb})

    ai_start = time.monotonic()
    result = await _invoke(provider, base64_image, settings, ctx)
    ai_time_ms = int((time.monotonic() - ai_start) * 1000)

    logger.debug(
        "parse_slip.ai_response_received",
        extra={"requestId": ctx.request_id, "aiTimeMs": ai_time_ms, "model": settings.slip_model},
    )

    try:
        parsed = extract_json_object(result.raw_text)
    except ExtractionError as exc:
        logger.error(
            "parse_slip.json_parse_failed",
            extra={"requestId": ctx.request_id, "error": exc.detail, "rawOutput": exc.raw_text},
        )
        raise

    estimated_cost = estimate_cost(
        result.input_tokens,
        result.output_tokens,
        rate_per_1k_input=settings.cost_per_1k_input_tokens,
        rate_per_1k_output=settings.cost_per_1k_output_tokens,
    )

    data = normalize_slip_data(parsed)
    status = derive_status(parsed)
    process_time_ms = ctx.elapsed_ms()

    logger.info(
        "parse_slip.success",
        extra={
            "requestId": ctx.request_id,
            "status": status,
            "confidenceScore": data.confidence_score,
            "processTimeMs": process_time_ms,
            "aiTimeMs": ai_time_ms,
            "totalTokens": result.total_tokens,
            "estimatedCostUSD": estimated_cost,
            "imageSizeKB": image_size_kb,
            "hasTransactionId": bool(parsed.get("transactionId")),
            "hasAccountNumber": bool(parsed.get("toAccountNumber")),
        },
    )

    return SlipExtractionResult(
        request_id=ctx.request_id,
        status=status,
        data=data,
        ai_score=data.confidence_score,
        meta=SlipMeta(
            process_time_ms=process_time_ms,
            ai_time_ms=ai_time_ms,
            image_size_kb=image_size_kb,
            model=settings.slip_model,
            tokens=TokenUsage(
                input=result.input_tokens,
                output=result.output_tokens,
                total=result.total_tokens,
                estimated_cost_usd=estimated_cost,
            ),
        ),
    )

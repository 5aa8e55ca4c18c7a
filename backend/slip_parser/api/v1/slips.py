"""Slip parsing endpoint."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from slip_parser.core.config import Settings, get_settings
from slip_parser.core.errors import SlipParserError
from slip_parser.core.middleware import scope_request_context
from slip_parser.core.request_context import RequestContext
from slip_parser.services.ai.providers import BaseProvider, get_slip_provider
from slip_parser.services.slip.contracts import ErrorResponse, SlipExtractionRequest, SlipExtractionResult
from slip_parser.services.slip.service import parse_slip

logger = logging.getLogger(__name__)

router = APIRouter()


def get_request_context(request: Request) -> RequestContext:
    return scope_request_context(request.scope)


@router.post(
    "/parse-slip",
    response_model=SlipExtractionResult,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Extract transaction id and destination account from a transfer slip image",
)
async def parse_slip_endpoint(
    body: Optional[SlipExtractionRequest] = None,
    ctx: RequestContext = Depends(get_request_context),
    provider: BaseProvider = Depends(get_slip_provider),
    settings: Settings = Depends(get_settings),
):
    logger.info("parse_slip.start", extra={"requestId": ctx.request_id})

    try:
        return await parse_slip(
            body.base64_image if body else None,
            ctx=ctx,
            provider=provider,
            settings=settings,
        )
    except SlipParserError:
        raise
    except Exception as exc:
        logger.exception(
            "parse_slip.unhandled_error",
            extra={"requestId": ctx.request_id, "error": str(exc), "processTimeMs": ctx.elapsed_ms()},
        )
        raise SlipParserError(str(exc)) from exc

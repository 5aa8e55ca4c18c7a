import logging
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse

from slip_parser.api.v1.slips import get_request_context
from slip_parser.api.v1.slips import router as slips_router
from slip_parser.core.config import get_settings
from slip_parser.core.errors import InvalidRequestError, SlipParserError
from slip_parser.core.logging import configure_logging
from slip_parser.core.middleware import BodySizeLimitMiddleware, error_response
from slip_parser.services.slip.contracts import HealthResponse

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Slip Parser API",
    version="1.0.0",
    docs_url="/docs" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.openapi_enabled else None,
)

app.include_router(slips_router, tags=["slips"])

# Registered before the request-context middleware so it runs inside it.
app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@app.on_event("startup")
async def _log_startup():
    logger.info("server.start", extra={"port": settings.port, "model": settings.slip_model, "provider": settings.ai_provider})
    if settings.ai_provider == "openai" and not settings.openai_api_key:
        logger.error("server.provider_not_configured", extra={"provider": settings.ai_provider, "reason": "OPENAI_API_KEY not set"})


@app.exception_handler(SlipParserError)
async def _slip_error_handler(request: Request, exc: SlipParserError):
    return error_response(get_request_context(request), exc)


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError):
    ctx = get_request_context(request)
    logger.warning("request.invalid_body", extra={"requestId": ctx.request_id, "errors": str(exc.errors())})
    return error_response(ctx, InvalidRequestError())


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    ctx = get_request_context(request)
    logger.exception("request.unhandled_error", extra={"requestId": ctx.request_id})
    return error_response(ctx, SlipParserError())


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    ctx = get_request_context(request)
    response = await call_next(request)
    response.headers.setdefault("X-Request-ID", ctx.request_id)
    return response


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


@app.get("/tester")
async def tester_page():
    return FileResponse(STATIC_DIR / "tester.html")


@app.get("/api-docs")
async def api_docs_page():
    return FileResponse(STATIC_DIR / "api-docs.html")


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()

"""FastAPI application factory for the AppDesk category and registration-form API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.config import settings
from src.database.engine import engine
from src.exceptions import AppException

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

# Form saves and submissions share one per-client budget
limiter = Limiter(key_func=get_remote_address, default_limits=["60/minute"])


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("AppDesk API starting (environment=%s)", settings.environment)
    yield
    await engine.dispose()
    logger.info("AppDesk API stopped, connection pool disposed")


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _envelope(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: list | None = None,
) -> JSONResponse:
    """Every error leaves the API in the same shape: {"error": {...}}."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or [],
                "requestId": _request_id(request),
            }
        },
    )


def _field_errors(exc: RequestValidationError) -> list[dict]:
    # Drop the leading "body"/"query"/"path" segment so clients see the field name
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        details.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return details


def _register_exception_handlers(application: FastAPI) -> None:
    @application.exception_handler(AppException)
    async def on_app_exception(request: Request, exc: AppException) -> JSONResponse:
        logger.debug("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
        return _envelope(request, exc.status_code, exc.code, exc.message, exc.details)

    @application.exception_handler(RequestValidationError)
    async def on_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _envelope(request, 422, "VALIDATION_ERROR", "Validation failed", _field_errors(exc))

    @application.exception_handler(RateLimitExceeded)
    async def on_rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.warning("Rate limit hit by %s on %s", get_remote_address(request), request.url.path)
        return _envelope(request, 429, "RATE_LIMITED", str(exc.detail))

    @application.exception_handler(Exception)
    async def on_unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _envelope(request, 500, "INTERNAL_ERROR", "An unexpected error occurred.")


def create_app() -> FastAPI:
    _configure_logging()

    application = FastAPI(
        title="AppDesk Admin API",
        description="Per-app category trees, registration forms, and registrant submissions.",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    application.state.limiter = limiter

    # Starlette wraps in reverse order: request IDs must be assigned before CORS runs
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    from src.middleware.request_id import RequestIdMiddleware

    application.add_middleware(RequestIdMiddleware)

    from src.api.v1 import v1_router

    application.include_router(v1_router)
    _register_exception_handlers(application)

    @application.get("/health")
    async def health_check() -> dict:
        return {"status": "ok", "version": API_VERSION}

    return application


app = create_app()

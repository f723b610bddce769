"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리기 및 라우터 등록.

FastAPI application entry point — Middleware, exception handlers, and router
registration. Every error leaves the API as
``{success: false, message, errors?, request_id}``.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from complaint_portal.api import api_router
from complaint_portal.config import settings
from complaint_portal.middleware.request_logging import (
    REQUEST_ID_HEADER,
    RequestIdFilter,
    RequestLoggingMiddleware,
)
from complaint_portal.schemas.common import field_errors
from complaint_portal.utils.exceptions import InvalidTransitionError, ValidationError


def configure_logging(level: str) -> None:
    """루트 로거 설정 — Root logger with the request id in every line."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s")
    )
    logging.basicConfig(level=level.upper(), handlers=[handler])


configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# 요청 로깅 미들웨어 — Request id + request logging (Axiom when configured)
app.add_middleware(RequestLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    request_id: str | None = getattr(request.state, "request_id", None)
    body: dict[str, Any] = {"success": False, "message": message, **extra, "request_id": request_id}
    response_headers = dict(headers or {})
    if request_id:
        response_headers[REQUEST_ID_HEADER] = request_id
    return JSONResponse(status_code=status_code, content=body, headers=response_headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    extra: dict[str, Any] = {}
    if isinstance(exc, ValidationError) and exc.errors:
        extra["errors"] = exc.errors
    if isinstance(exc, InvalidTransitionError):
        extra["current_status"] = exc.current_status
        extra["allowed"] = exc.allowed
    return _error_response(request, exc.status_code, str(exc.detail), exc.headers, **extra)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(request, 422, "Validation failed", errors=field_errors(list(exc.errors())))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("db.integrity_error path=%s error=%s", request.url.path, exc.orig)
    return _error_response(request, 409, "Resource already exists or violates a constraint")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error path=%s", request.url.path)
    return _error_response(request, 500, "Internal server error")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")

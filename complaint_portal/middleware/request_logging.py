"""요청 로깅 미들웨어 — 요청 ID 부여, 구조화 로그, Axiom 전송.

Request logging middleware.
Tags every request with an ``X-Request-ID`` (client-supplied or generated),
logs one line per request through the stdlib logger, and, when Axiom is
configured, ships the same event with sensitive fields masked.
"""

import json
import logging
import re
import time
import uuid
from contextvars import ContextVar
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from complaint_portal.config import Settings, settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER: str = "X-Request-ID"

# 현재 요청 ID — Request id of the request being handled
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|admin_key|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


class RequestIdFilter(logging.Filter):
    """로그 레코드에 request_id 추가 — Adds ``request_id`` to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청에 요청 ID를 붙이고 로그를 남기는 미들웨어.

    Args:
        app: ASGI 애플리케이션
        config: 애플리케이션 설정 (Axiom token and dataset)
    """

    def __init__(self, app: Any, config: Settings = settings) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = config.AXIOM_DATASET

        if config.AXIOM_API_TOKEN and config.AXIOM_DATASET:
            self._client = AxiomClient(token=config.AXIOM_API_TOKEN)

    async def _read_body(self, request: Request) -> Any:
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        if not request.headers.get("content-type", "").startswith("application/json"):
            return None
        try:
            body_bytes = await request.body()
            if not body_bytes:
                return None
            return _truncate(_mask_dict(json.loads(body_bytes)))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            if request.url.path in _SKIP_PATHS:
                response = await call_next(request)
                response.headers[REQUEST_ID_HEADER] = request_id
                return response
            return await self._dispatch_logged(request, call_next, request_id)
        finally:
            request_id_var.reset(token)

    async def _dispatch_logged(
        self, request: Request, call_next: RequestResponseEndpoint, request_id: str
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        request_body = await self._read_body(request) if self._client else None

        status_code: int = 500
        error_detail: str | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            log = logger.warning if status_code >= 500 else logger.info
            log("http.request method=%s path=%s status=%s duration_ms=%s", method, path, status_code, duration_ms)

            if self._client:
                event: dict[str, Any] = {
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                }
                if request.query_params:
                    event["query_params"] = _mask_dict(dict(request.query_params))
                if request_body is not None:
                    event["request_body"] = request_body
                if error_detail:
                    event["error"] = error_detail
                self._ingest(event)

    def _ingest(self, event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure
            logger.warning("axiom.ingest_failed dataset=%s", self._dataset, exc_info=True)

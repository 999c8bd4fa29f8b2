"""
HTTP integration — StatusCode→HTTP status mapping and response builders.

Framework-agnostic core with an optional FastAPI adapter.

Usage (standalone):
    status = HttpStatusMapper.map_status(StatusCode.NOT_FOUND)  # → 404
    body, status = build_response(result)

Usage (FastAPI):
    from fluent_result.http_support import build_fastapi_response

    @app.get("/users/{user_id}")
    async def get_user(user_id: int):
        return build_fastapi_response(await service.get_user(user_id))
"""

from __future__ import annotations

from typing import Any, Awaitable, Optional, TypeVar, Union

import structlog

from fluent_result.errors import UnsupportedStatusError
from fluent_result.result import Result
from fluent_result.settings import ResultSettings, get_settings
from fluent_result.status import StatusCode

T = TypeVar("T")

log = structlog.get_logger(__name__)


# ──────────────────────── Status → HTTP Status Mapping ────────────────────────


class HttpStatusMapper:
    """Maps StatusCode values to HTTP status codes."""

    _STATUS_TO_HTTP: dict[StatusCode, int] = {
        StatusCode.SUCCESS: 200,
        StatusCode.NOT_FOUND: 404,
        StatusCode.INVALID_ARGUMENT: 400,
        StatusCode.OPERATION_FAILED: 500,
        StatusCode.CONFLICT: 409,
    }

    @classmethod
    def map_status(cls, status: Any) -> int:
        """
        Map a StatusCode to an HTTP status code.

        Raises UnsupportedStatusError for anything outside the table; an
        unmapped status is a configuration fault, not a client error.
        """
        try:
            return cls._STATUS_TO_HTTP[status]
        except (KeyError, TypeError):
            log.error("http.unsupported_status", status=repr(status))
            raise UnsupportedStatusError(status) from None


# ──────────────────────── Generic Response Builder ────────────────────────


def build_response(
    result: Result[T],
    settings: Optional[ResultSettings] = None,
) -> tuple[dict[str, Any], int]:
    """
    Build a (body, status_code) tuple from a Result.

    Framework-agnostic — works with any web framework. The body is the
    serialized Result: {data, status, messages} plus metadata for a
    ResultOfItems.

        body, status = build_response(result)
    """
    settings = settings or get_settings()
    http_status = HttpStatusMapper.map_status(result.status)
    body = result.to_dict()
    if not settings.expose_messages:
        body["messages"] = None
    return body, http_status


async def build_response_async(
    pending: Union[Result[T], Awaitable[Result[T]]],
    settings: Optional[ResultSettings] = None,
) -> tuple[dict[str, Any], int]:
    """Await a pending Result, then build the (body, status_code) tuple."""
    result = pending if isinstance(pending, Result) else await pending
    return build_response(result, settings)


# ──────────────────────── FastAPI Adapter ────────────────────────


def build_fastapi_response(
    result: Result[T],
    settings: Optional[ResultSettings] = None,
) -> Any:
    """
    Build a FastAPI JSONResponse from a Result.

    Requires fastapi to be installed.

        @app.post("/orders")
        def create_order(request: CreateOrderRequest):
            return build_fastapi_response(handler.handle(request))
    """
    try:
        from fastapi.encoders import jsonable_encoder
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError("FastAPI is required: pip install fluent-result[fastapi]")

    body, status = build_response(result, settings)
    return JSONResponse(content=jsonable_encoder(body), status_code=status)

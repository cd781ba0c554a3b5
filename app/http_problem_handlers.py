# app/http_problem_handlers.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.problem import ProblemDetail, make_problem
from app.services.order_query_errors import InvalidFilterField, InvalidSortField, OrderQueryError

logger = logging.getLogger("erp")


def _new_trace_id() -> str:
    return f"t_{uuid.uuid4().hex[:12]}"


def _ctx(req: Request) -> Dict[str, Any]:
    return {"path": getattr(req.url, "path", ""), "method": req.method}


def _order_query_details(exc: OrderQueryError) -> List[ProblemDetail]:
    if isinstance(exc, InvalidSortField):
        return [
            {
                "type": "query",
                "path": "sorters",
                "field": exc.column,
                "token": exc.token,
                "reason": str(exc),
            }
        ]
    if isinstance(exc, InvalidFilterField):
        return [{"type": "query", "path": "reverse", "field": exc.field, "reason": str(exc)}]
    return [{"type": "query", "reason": str(exc)}]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def _unhandled_exc(req: Request, exc: Exception):
        trace_id = _new_trace_id()
        logger.exception("UNHANDLED_EXC[%s]: %s", trace_id, exc)
        content = make_problem(
            status_code=500,
            error_code="internal_error",
            message="系统异常，请稍后重试",
            context=_ctx(req),
            trace_id=trace_id,
        )
        return JSONResponse(status_code=500, content=content)

    @app.exception_handler(OrderQueryError)
    async def _order_query_exc(req: Request, exc: OrderQueryError):
        content = make_problem(
            status_code=422,
            error_code=exc.error_code,
            message="订单查询条件不合法",
            context=_ctx(req),
            details=_order_query_details(exc),
            trace_id=_new_trace_id(),
        )
        return JSONResponse(status_code=422, content=content)

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(req: Request, exc: RequestValidationError):
        details: List[ProblemDetail] = []
        for i, e in enumerate(exc.errors()):
            if not isinstance(e, dict):
                continue
            details.append(
                {
                    "type": "validation",
                    "path": f"validation[{i}]",
                    "reason": str(e.get("msg") or e.get("type") or "invalid"),
                }
            )

        content = make_problem(
            status_code=422,
            error_code="request_validation_error",
            message="请求参数不合法",
            context=_ctx(req),
            details=details,
            trace_id=_new_trace_id(),
        )
        return JSONResponse(status_code=422, content=content)

    @app.exception_handler(HTTPException)
    async def _http_exc(req: Request, exc: HTTPException):
        msg = str(exc.detail) if exc.detail is not None else "请求被拒绝"
        content = make_problem(
            status_code=int(exc.status_code),
            error_code="http_error",
            message=msg,
            context=_ctx(req),
            details=[{"type": "state", "reason": msg}],
            trace_id=_new_trace_id(),
        )
        return JSONResponse(status_code=int(exc.status_code), content=content)

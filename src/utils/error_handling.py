"""
Centralized Error Handling and Logging
Structured error logs with trace ids, and JSON error responses for the API.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime
from typing import Dict, Optional
from contextvars import ContextVar

import asyncpg
import httpx
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True
    MAX_DETAIL_LOG_SIZE = 5000

    @classmethod
    def truncate(cls, value: str) -> str:
        if len(value) > cls.MAX_DETAIL_LOG_SIZE:
            return value[:cls.MAX_DETAIL_LOG_SIZE] + "...[TRUNCATED]"
        return value

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log structured error with full context, returning its trace id"""

        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": ErrorHandlingConfig.truncate(message),
            "level": "ERROR"
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else None
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": ErrorHandlingConfig.truncate(str(exception)),
                "module": getattr(exception, '__module__', 'unknown')
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = extra_context

        logger.error(json.dumps(log_entry, indent=2, default=str))

        return trace_id

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to tag each request with a trace id"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)
        # Trace ID header for client-side debugging
        response.headers["X-Trace-ID"] = trace_id
        return response

def _error_response(status_code: int, error: str, message, trace_id: Optional[str] = None, **extra) -> JSONResponse:
    response_content = {
        "error": error,
        "message": message,
    }
    response_content.update(extra)

    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        response_content["trace_id"] = trace_id

    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        response_content["timestamp"] = datetime.utcnow().isoformat()

    return JSONResponse(status_code=status_code, content=response_content)

# Global Exception Handlers
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions, logging server-side ones"""
    trace_id = None
    if exc.status_code >= 500:
        trace_id = StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc
        )

    return _error_response(exc.status_code, f"HTTP {exc.status_code}", exc.detail, trace_id)

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI validation errors (HTTP 422)"""
    validation_details = [
        {
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        }
        for error in exc.errors()
    ]

    return _error_response(
        422,
        "Validation Error",
        "Request validation failed",
        request_id_var.get('') or None,
        detail=validation_details,
        error_count=len(validation_details)
    )

async def unique_violation_handler(request: Request, exc: asyncpg.UniqueViolationError) -> JSONResponse:
    """Store constraint violations, e.g. a duplicate external_id"""
    trace_id = StructuredLogger.log_error(
        "unique_violation",
        f"Unique constraint violated: {exc}",
        request=request,
        exception=exc,
        extra_context={"constraint": getattr(exc, "constraint_name", None)},
        include_traceback=False
    )
    return _error_response(409, "Conflict", "A post with the same unique key already exists", trace_id)

async def upstream_exception_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    """Failures talking to the remote posts source"""
    trace_id = StructuredLogger.log_error(
        "upstream_error",
        f"Posts source request failed: {exc}",
        request=request,
        exception=exc,
        include_traceback=False
    )
    return _error_response(502, "Bad Gateway", "Posts source is unavailable", trace_id)

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internal details"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc
    )
    return _error_response(500, "Internal Server Error", "An unexpected error occurred", trace_id)

def setup_error_handling(app):
    """Setup error handling for FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    # Most specific first
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(asyncpg.UniqueViolationError, unique_violation_handler)
    app.add_exception_handler(httpx.HTTPError, upstream_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")

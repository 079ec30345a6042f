"""
Consolidated middleware for the Meal Planner API
"""

import math
import time
import logging
from datetime import datetime, timezone
from typing import Dict, List, Tuple
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import MealPlannerError

logger = logging.getLogger("mealplanner.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def error_body(message: str, errors: List[dict] = None, **extra) -> dict:
    """Standard failure envelope."""
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    return body


def format_validation_errors(raw_errors) -> List[dict]:
    """Flatten pydantic error locations into ``{field, message}`` pairs."""
    out = []
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        out.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return out


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one line when it finishes.

    The id and the handling time are echoed back as ``X-Request-ID`` and
    ``X-Process-Time``.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s failed after %.4fs [%s]",
                request.method,
                request.url.path,
                time.perf_counter() - started,
                request_id,
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        logger.info(
            "%s %s -> %d in %.4fs [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
            request_id,
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


# ============================================================================
# Rate Limiting Middleware
# ============================================================================


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request limit per client address.

    Counters live in process memory, so each worker process limits on its own.
    """

    def __init__(self, app, max_requests: int, window_sec: int, prune_above: int = 10_000):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_sec = window_sec
        self.prune_above = prune_above
        self._windows: Dict[str, Tuple[float, int]] = {}

    def _prune(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_sec]
        for key in expired:
            del self._windows[key]

    def hit(self, client: str, now: float) -> Tuple[bool, int, float]:
        """Count one request; returns (allowed, remaining, seconds until reset)."""
        start, count = self._windows.get(client, (now, 0))
        if now - start >= self.window_sec:
            start, count = now, 0
        count += 1
        self._windows[client] = (start, count)
        if len(self._windows) > self.prune_above:
            self._prune(now)
        reset_in = self.window_sec - (now - start)
        return count <= self.max_requests, max(self.max_requests - count, 0), reset_in

    async def dispatch(self, request: Request, call_next):
        if self.max_requests <= 0:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        allowed, remaining, reset_in = self.hit(client, time.monotonic())
        if not allowed:
            logger.warning("Rate limit exceeded for %s on %s", client, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=error_body("Too many requests, please try again later."),
                headers={"Retry-After": str(math.ceil(reset_in))},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request schema errors (malformed body, params)"""
    errors = format_validation_errors(exc.errors())
    logger.warning(f"Validation error on {request.url}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (unknown routes, wrong methods)"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Not Found - {request.url.path}"

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(message)),
        headers=getattr(exc, "headers", None),
    )


async def app_exception_handler(request: Request, exc: MealPlannerError):
    """Handle the application's own errors (400/401/404)"""
    logger.warning(
        f"{exc.__class__.__name__} ({exc.http_status}) on {request.url}: {exc.message}"
    )
    payload = exc.to_dict()
    message = payload.pop("message")

    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(message, payload.pop("errors", None), **payload),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )

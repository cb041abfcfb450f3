"""HTTP middleware and exception handlers shared by every API route.

Every error leaves the API in the same envelope as successful responses:
``{"success": false, "error": "..."}``.
"""

import logging
import time
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from alfred.config import Settings
from alfred.domain.exceptions import EntityNotFoundError
from alfred.infrastructure.rate_limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


# ── Exception handlers ──────────────────────────────────────────────


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, f"Validation failed: {_describe_validation(exc)}")


async def not_found_exception_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _error(404, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    response = _error(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(EntityNotFoundError, not_found_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


# ── Middleware ──────────────────────────────────────────────────────


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Install the HTTP middleware stack.

    Registration order matters: the last one registered runs first, so the
    request logger wraps the rate limiter and catches anything that escapes.
    """

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        limiter: SlidingWindowRateLimiter | None = getattr(request.app.state, "rate_limiter", None)
        if limiter is None or not request.url.path.startswith("/api/"):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        decision = limiter.hit(limiter.key_for(client_ip, request.url.path))
        if not decision.allowed:
            logger.warning("Rate limit hit for %s %s", client_ip, request.url.path)
            response = _error(429, decision.reason)
            response.headers["Retry-After"] = str(decision.retry_after)
            return response
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            extra = {} if settings.is_production else {"stack": traceback.format_exc()}
            response = _error(500, str(exc) or type(exc).__name__, **extra)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

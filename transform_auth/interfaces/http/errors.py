import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from ...domain.errors import AuthError

logger = structlog.get_logger()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def auth_error_handler(request: Request, exc: AuthError):
    logger.info(
        "auth_error",
        path=request.url.path,
        error=type(exc).__name__,
        reason=exc.reason,
    )
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # field-level details stay server side
    logger.info("request_rejected", path=request.url.path, errors=len(exc.errors()))
    return error_response(400, "Invalid request")


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limited", path=request.url.path, limit=str(exc.detail))
    return error_response(429, "Too many requests")


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("store_error", path=request.url.path)
    return error_response(503, "Service unavailable")


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path)
    return error_response(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

import time
import logging
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from .config import settings, validate_runtime_config
from .infrastructure.db import engine
from .infrastructure.models import Base
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.rate_limit import limiter
from .interfaces.http.errors import register_error_handlers
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import users as users_router

log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="Transform Auth Service", version="0.1.0")
app.state.limiter = limiter
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    method = request.method

    response = await call_next(request)

    # label by route template so user ids don't explode the series count
    route = request.scope.get("route")
    path = getattr(route, "path", request.url.path)
    duration = time.time() - start_time
    status_code = response.status_code
    http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

    logger.info(
        "http_request",
        method=method,
        path=request.url.path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )

    return response


@app.on_event("startup")
def on_startup():
    logger.info("Starting auth service", version="0.1.0", env=settings.APP_ENV)
    validate_runtime_config()
    Base.metadata.create_all(bind=engine)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection established")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(auth_router.router)
app.include_router(auth_router.legacy_router)
app.include_router(users_router.router)

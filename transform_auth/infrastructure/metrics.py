from contextlib import contextmanager

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

from ..domain.errors import AuthError

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# signup / login / validate / logout / promote, by outcome
auth_events_total = Counter(
    'auth_events_total',
    'Authentication events',
    ['event', 'outcome']
)


def metrics_endpoint():
    """Endpoint for Prometheus metrics"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@contextmanager
def track_auth_event(event: str):
    """Count the outcome of an auth event; errors still propagate."""
    try:
        yield
    except AuthError as e:
        auth_events_total.labels(event=event, outcome=type(e).__name__).inc()
        raise
    except Exception:
        auth_events_total.labels(event=event, outcome="error").inc()
        raise
    auth_events_total.labels(event=event, outcome="success").inc()

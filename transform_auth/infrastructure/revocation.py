from datetime import datetime, timezone
from typing import Optional

import redis
import structlog

from ..config import settings
from ..application.interfaces import IRevocationList

logger = structlog.get_logger()

_redis_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True
        )
    return _redis_client


class RedisRevocationList(IRevocationList):
    """Revoked token ids, kept in redis until the token would have expired anyway.

    If redis is unreachable lookups report "not revoked" and a warning is
    logged, so an outage degrades logout rather than every login.
    """
    prefix = "revoked:"

    def __init__(self, client_factory=get_redis):
        self.client_factory = client_factory

    def revoke(self, jti: str, expires_at: datetime) -> None:
        ttl = int((expires_at - datetime.now(timezone.utc)).total_seconds())
        if ttl <= 0:
            return
        try:
            self.client_factory().setex(self.prefix + jti, ttl, "1")
        except redis.RedisError as e:
            logger.warning("token_revocation_unavailable", jti=jti, error=str(e))

    def is_revoked(self, jti: str) -> bool:
        try:
            return bool(self.client_factory().exists(self.prefix + jti))
        except redis.RedisError as e:
            logger.warning("token_revocation_check_unavailable", jti=jti, error=str(e))
            return False


class NullRevocationList(IRevocationList):
    def revoke(self, jti: str, expires_at: datetime) -> None:
        return None

    def is_revoked(self, jti: str) -> bool:
        return False


def get_revocation_list() -> IRevocationList:
    if settings.REVOCATION_ENABLED:
        return RedisRevocationList()
    return NullRevocationList()

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request

from quizboard.core.config import settings
from quizboard.core.redis_client import get_redis


@dataclass(frozen=True)
class RateLimit:
    key: str
    limit: int
    window_seconds: int


def _client_ip(request: Request) -> str:
    if bool(getattr(settings, "trust_proxy_headers", False)):
        xri = str(request.headers.get("x-real-ip") or "").strip()
        if xri:
            return xri
        xff = request.headers.get("x-forwarded-for")
        if xff:
            ip = xff.split(",")[0].strip()
            if ip:
                return ip
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit(*, key_prefix: str, limit: int | Callable[[], int], window_seconds: int):
    """Fixed-window request limiter keyed by client ip.

    ``limit`` may be a callable so the value is read from settings on every
    request instead of once at import.
    """

    # Plain def: redis calls block, so FastAPI runs this in its threadpool.
    def _dep(request: Request) -> RateLimit | None:
        if not bool(settings.rate_limit_enabled):
            return None

        max_requests = int(limit() if callable(limit) else limit)
        ip = _client_ip(request)
        key = f"rl:{key_prefix}:{request.method}:{request.url.path}:{ip}"

        try:
            r = get_redis()
            # EXPIRE NX on every hit: a key whose first EXPIRE was lost still gets a window.
            pipe = r.pipeline()
            pipe.incr(key)
            pipe.expire(key, int(window_seconds), nx=True)
            current, _ = pipe.execute()

            ttl = r.ttl(key) if int(current) > max_requests else None
        except Exception:
            # Redis down: let the request through rather than fail writes.
            return RateLimit(key=key, limit=max_requests, window_seconds=int(window_seconds))

        if int(current) > max_requests:
            retry_after = int(ttl) if ttl and ttl > 0 else int(window_seconds)
            raise HTTPException(
                status_code=429,
                detail="rate limit exceeded",
                headers={"Retry-After": str(retry_after)},
            )

        return RateLimit(key=key, limit=max_requests, window_seconds=int(window_seconds))

    return Depends(_dep)

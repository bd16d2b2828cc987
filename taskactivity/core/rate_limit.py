"""
Per-IP rate limiting for the authentication endpoints
"""
import logging
import math
import time
from threading import Lock
from typing import Dict, Iterable, Optional, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from taskactivity.core.config import settings
from taskactivity.core.templating import templates

logger = logging.getLogger(__name__)

RATE_LIMITED_PATHS = ("/login", "/api/auth/login", "/api/auth/refresh")


class TokenBucketRegistry:
    """
    One bucket per key. Each bucket holds `capacity` tokens and is refilled in
    full once `refill_seconds` have passed since its window opened.
    """

    def __init__(self, capacity: int, refill_seconds: float, clock=time.monotonic):
        self.capacity = capacity
        self.refill_seconds = refill_seconds
        self._clock = clock
        self._buckets: Dict[str, Tuple[int, float]] = {}
        self._lock = Lock()

    def try_consume(self, key: str) -> Tuple[bool, int]:
        """
        Take one token for `key`.

        Returns (allowed, retry_after_seconds); retry_after is 0 when allowed.
        """
        with self._lock:
            now = self._clock()
            tokens, window_start = self._buckets.get(key, (self.capacity, now))

            if now - window_start >= self.refill_seconds:
                tokens, window_start = self.capacity, now

            if tokens > 0:
                self._buckets[key] = (tokens - 1, window_start)
                return True, 0

            self._buckets[key] = (tokens, window_start)
            retry_after = max(1, math.ceil(self.refill_seconds - (now - window_start)))
            return False, retry_after

    def clear(self):
        with self._lock:
            self._buckets.clear()


def client_ip(request: Request) -> str:
    """CF-Connecting-IP when behind Cloudflare, otherwise the socket peer"""
    cf_ip = request.headers.get("CF-Connecting-IP")
    if cf_ip:
        return cf_ip.strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):

    def __init__(
        self,
        app,
        enabled: Optional[bool] = None,
        capacity: Optional[int] = None,
        refill_minutes: Optional[int] = None,
        paths: Iterable[str] = RATE_LIMITED_PATHS,
    ):
        super().__init__(app)
        self.enabled = settings.RATE_LIMIT_ENABLED if enabled is None else enabled
        capacity = capacity or settings.RATE_LIMIT_CAPACITY
        refill_minutes = refill_minutes or settings.RATE_LIMIT_REFILL_MINUTES
        self.paths = frozenset(paths)
        self.buckets = TokenBucketRegistry(capacity, refill_minutes * 60)

    def _applies(self, request: Request) -> bool:
        if not self.enabled or request.url.path not in self.paths:
            return False
        # GET /login only renders the form
        return request.method == "POST"

    async def dispatch(self, request: Request, call_next):
        if not self._applies(request):
            return await call_next(request)

        ip = client_ip(request)
        allowed, retry_after = self.buckets.try_consume(ip)
        if allowed:
            return await call_next(request)

        logger.warning(f"Rate limit exceeded for IP: {ip} on endpoint: {request.url.path}")
        headers = {"Retry-After": str(retry_after)}

        if "text/html" in request.headers.get("Accept", ""):
            return templates.TemplateResponse(
                request,
                "rate-limit.html",
                {"retryAfter": retry_after},
                status_code=429,
                headers=headers,
            )

        return JSONResponse(
            status_code=429,
            content={
                "error": "Too Many Requests",
                "message": "Rate limit exceeded. Please try again later.",
            },
            headers=headers,
        )

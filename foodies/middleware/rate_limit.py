"""
Foodies Backend — Rate Limiting Middleware
============================================

What:  Per-IP sliding window limit on form submissions.
Why:   Every share writes an image to disk and a row to the store; reads
       (listing, detail, images) are cheap and never limited.
How:   Keeps a list of submission timestamps per IP. On each mutating
       request, timestamps older than the window are dropped; if the
       remaining count has reached the limit, the request is answered with
       429 and a Retry-After header without reaching the route.

Single-process only: each uvicorn worker keeps its own counters.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from foodies.config import settings
from foodies.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

LIMITED_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter for mutating requests.

    Configuration (from settings unless overridden):
        rate_limit_requests: max submissions per window
        rate_limit_window:   window length in seconds
    """

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window: Optional[int] = None,
    ):
        super().__init__(app)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window = window or settings.rate_limit_window
        self._requests: Dict[str, List[float]] = defaultdict(list)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method not in LIMITED_METHODS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - self.window

        recent = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = recent

        if len(recent) >= self.max_requests:
            retry_after = int(recent[0] + self.window - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d submissions in %ds window",
                client_ip,
                len(recent),
                self.window,
            )
            exc = RateLimitExceededError(retry_after=retry_after)
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                },
                headers={"Retry-After": str(exc.retry_after)},
            )

        recent.append(now)
        self._forget_idle(window_start)
        return await call_next(request)

    def _forget_idle(self, window_start: float) -> None:
        """Drop IPs whose newest submission has left the window."""
        idle = [ip for ip, stamps in self._requests.items() if not stamps or stamps[-1] <= window_start]
        for ip in idle:
            del self._requests[ip]
        if idle:
            logger.debug("Forgot %d idle IP entries", len(idle))

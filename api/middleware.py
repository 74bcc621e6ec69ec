"""Response caching middleware backed by the application's TTL cache."""

import json
import logging
from typing import Iterable, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from services.cache import SerializationError, TTLCache

logger = logging.getLogger(__name__)

NOCACHE_PARAM = "nocache"
_MISS = object()


def build_cache_key(request: Request) -> str:
    """Compose a key from method, path and the sorted query parameters."""
    params = sorted(
        (name, value) for name, value in request.query_params.multi_items()
        if name != NOCACHE_PARAM
    )
    return f"{request.method}:{request.url.path}?{urlencode(params)}"


def _bypass_requested(request: Request) -> bool:
    return request.query_params.get(NOCACHE_PARAM, "").lower() in ("1", "true", "yes")


class ResponseCacheMiddleware(BaseHTTPMiddleware):
    """Serve repeated GET requests for the configured paths from the cache.

    The cache itself lives on ``app.state.cache``.
    """

    def __init__(self, app, ttl_seconds: float = 300, path_prefixes: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.ttl_seconds = ttl_seconds
        self.path_prefixes = tuple(path_prefixes or ())

    def _cacheable(self, request: Request) -> bool:
        return request.method == "GET" and request.url.path.startswith(self.path_prefixes)

    def _headers(self, status: str) -> dict:
        return {
            "X-Cache": status,
            "Cache-Control": f"public, max-age={int(self.ttl_seconds)}",
        }

    async def dispatch(self, request: Request, call_next):
        if not self._cacheable(request):
            return await call_next(request)

        if _bypass_requested(request):
            response = await call_next(request)
            response.headers["X-Cache"] = "BYPASS"
            return response

        cache: TTLCache = request.app.state.cache
        key = build_cache_key(request)

        cached = cache.get(key, _MISS)
        if cached is not _MISS:
            return JSONResponse(content=cached, headers=self._headers("HIT"))

        response = await call_next(request)
        content_type = response.headers.get("content-type", "")
        if response.status_code != 200 or not content_type.startswith("application/json"):
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        try:
            cache.set(key, json.loads(body), self.ttl_seconds)
        except (SerializationError, ValueError) as e:
            logger.warning(f"Serving {key} uncached: {e}")

        buffered = Response(content=body, status_code=response.status_code)
        # Raw headers keep repeated names such as Set-Cookie
        buffered.raw_headers = list(response.raw_headers)
        buffered.headers.update(self._headers("MISS"))
        return buffered

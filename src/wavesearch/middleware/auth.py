"""API key authentication middleware."""

import secrets
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

PUBLIC_PATHS = frozenset(
    {
        "/api/v1/health/live",
        "/api/v1/health/ready",
    }
)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Requires a matching X-API-Key header outside of health probes."""

    def __init__(self, app: Callable[..., Awaitable[Response]], api_key: str) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._api_key = api_key

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Reject requests with a missing or wrong key with 401."""
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        provided = request.headers.get("X-API-Key", "")
        if not provided:
            return JSONResponse(status_code=401, content={"error": "Missing X-API-Key header"})
        if not secrets.compare_digest(provided, self._api_key):
            return JSONResponse(status_code=401, content={"error": "Invalid API key"})

        return await call_next(request)

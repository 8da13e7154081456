"""Shared-secret API key check applied to the product API."""

from __future__ import annotations

import secrets

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

UNAUTHORIZED_BODY = "Invalid API Key"


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests under ``path_prefix`` whose API key header does not match.

    The key is fixed when the middleware is constructed and never changes for
    the life of the process. Requests outside the prefix pass straight through.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        api_key: str,
        header_name: str = "X-API-Key",
        path_prefix: str = "/api",
    ) -> None:
        super().__init__(app)
        if not api_key:
            raise ValueError("API key must not be empty")
        self._api_key = api_key.encode("utf-8")
        self._header_name = header_name
        self._path_prefix = path_prefix.rstrip("/")

    def is_protected(self, path: str) -> bool:
        if not self._path_prefix:
            return True
        return path == self._path_prefix or path.startswith(f"{self._path_prefix}/")

    def is_authorized(self, provided: str | None) -> bool:
        if provided is None:
            return False
        return secrets.compare_digest(provided.encode("utf-8"), self._api_key)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.is_protected(request.url.path):
            return await call_next(request)

        provided = request.headers.get(self._header_name)
        if not self.is_authorized(provided):
            logger.warning(
                "Rejected {} {}: {} API key",
                request.method,
                request.url.path,
                "missing" if provided is None else "invalid",
            )
            return PlainTextResponse(UNAUTHORIZED_BODY, status_code=401)

        return await call_next(request)

"""Per-request logging with a correlation id."""

import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind ``request_id`` to every log record emitted while handling a request.

    The id is taken from the incoming ``X-Request-ID`` header when present and
    echoed back on the response. Unhandled errors are logged with their
    traceback and turned into a JSON 500 that carries the id.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        client_ip = request.client.host if request.client else "unknown"
        started = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            logger.info("{} {} from {}", request.method, request.url.path, client_ip)
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "{} {} failed after {:.1f} ms",
                    request.method,
                    request.url.path,
                    _elapsed_ms(started),
                )
                return JSONResponse(
                    status_code=500,
                    content={"detail": "Internal Server Error", "request_id": request_id},
                    headers={REQUEST_ID_HEADER: request_id},
                )

            logger.info(
                "{} {} -> {} in {:.1f} ms",
                request.method,
                request.url.path,
                response.status_code,
                _elapsed_ms(started),
            )
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
            return response


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000

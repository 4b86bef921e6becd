"""Request logging middleware.

Logs one structured record per request with method, path, status and
duration, tagged with a request id echoed back in X-Request-ID. The id is
also kept on request.state so error handlers can echo it.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("api.access")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            # Unhandled exceptions re-raise here and are reported as 500
            logger.log(
                logging.WARNING if status_code >= 500 else logging.INFO,
                "Request handled",
                extra={
                    "requestId": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "statusCode": status_code,
                    "durationMs": round((time.perf_counter() - start) * 1000, 2),
                },
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

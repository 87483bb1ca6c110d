import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs one line per response.

    An id sent by the caller (e.g. a gateway) is kept so log lines can be
    joined across services; the error envelope reuses the same id.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} failed after "
                f"{self._elapsed_ms(started)}ms: {exc}",
                extra={"request_id": request_id, "path": request.url.path},
            )
            raise

        elapsed = self._elapsed_ms(started)
        logger.log(
            logging.WARNING if response.status_code >= 400 else logging.INFO,
            f"[{request_id}] {request.method} {request.url.path} - {response.status_code} ({elapsed}ms)",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": elapsed,
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("request")


class TimingMiddleware(BaseHTTPMiddleware):
    """요청 로그 + 응답 헤더 X-Latency-Ms"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({latency_ms} ms)")
        return response

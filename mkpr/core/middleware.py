"""
HTTP 요청 로깅 미들웨어

- 요청마다 request_id 발급 (X-Request-ID 헤더가 있으면 재사용)
- 처리 시간과 상태 코드 로깅
- 응답에 X-Request-ID 헤더 추가
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from mkpr.core.context import clear_context, set_request_id
from mkpr.core.logging import get_logger

logger = get_logger(__name__)

SKIP_PATHS = frozenset({"/health", "/docs", "/openapi.json", "/redoc"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """요청 단위 로깅 및 request_id 관리"""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        request_id = set_request_id(request.headers.get("X-Request-ID"))
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "요청 처리 중 예외",
                method=request.method,
                path=request.url.path,
                error=type(e).__name__,
                elapsed_ms=_elapsed_ms(started),
            )
            raise
        else:
            logger.info(
                "요청 처리 완료",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                elapsed_ms=_elapsed_ms(started),
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)

from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from mkpr.api.routers import api_router
from mkpr.core.config import settings
from mkpr.core.exceptions import register_exception_handlers
from mkpr.core.limiter import limiter
from mkpr.core.logging import get_logger, setup_logging
from mkpr.core.middleware import RequestLoggingMiddleware
from mkpr.infra.llm.factory import reset_clients

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 이벤트 관리"""
    if settings.is_production:
        errors = settings.validate_for_production()
        if errors:
            raise RuntimeError(f"프로덕션 설정 오류: {', '.join(errors)}")
    logger.info("mkpr 시작", provider=settings.llm_provider, diff_budget=settings.diff_budget)
    yield
    reset_clients()


app = FastAPI(
    title="mkpr",
    description="Pull request description generator",
    version="1.0.0",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url=None if settings.is_production else "/openapi.json",
    lifespan=lifespan,
)


app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health")
@limiter.exempt
async def health_check():
    return {"status": "UP"}

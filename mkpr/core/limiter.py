from slowapi import Limiter
from slowapi.util import get_remote_address

from mkpr.core.config import settings

# 모델 호출 비용이 드는 엔드포인트 보호용 클라이언트 IP 기준 제한
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)

"""Ollama 모델 조회

로컬 Ollama 서버의 /api/tags로 설치된 모델 목록을 가져오고,
요청한 모델 이름을 설치된 모델 이름으로 해석한다.
"""

import httpx
from pydantic import BaseModel

from mkpr.core.config import settings
from mkpr.core.exceptions import ModelListError
from mkpr.core.logging import get_logger

logger = get_logger(__name__)

SIZE_UNITS = ("B", "KB", "MB", "GB")


class OllamaModel(BaseModel):
    """설치된 Ollama 모델"""

    name: str
    size: int | None = None


def format_size(size: int) -> str:
    """바이트 수를 사람이 읽기 쉬운 단위로 변환"""
    if size <= 0:
        return "0 B"
    idx = 0
    value = float(size)
    while value >= 1024 and idx < len(SIZE_UNITS) - 1:
        value /= 1024
        idx += 1
    return f"{value:.2f} {SIZE_UNITS[idx]}"


def parse_tags_response(data: dict) -> list[OllamaModel]:
    """/api/tags 응답에서 모델 목록 추출"""
    if not isinstance(data, dict):
        return []

    models = []
    for item in data.get("models") or []:
        if not isinstance(item, dict):
            continue
        name = item.get("name") or item.get("model")
        if name:
            models.append(OllamaModel(name=name, size=item.get("size")))
    return models


async def list_models(client: httpx.AsyncClient | None = None) -> list[OllamaModel]:
    """Ollama 서버에 설치된 모델 목록 조회

    Raises:
        ModelListError: 서버 연결 실패 또는 비정상 응답
    """
    url = f"{settings.ollama_base_url.rstrip('/')}/api/tags"

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.models_timeout) as owned:
                response = await owned.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        logger.warning("Ollama 모델 목록 조회 실패", url=url, error=type(e).__name__)
        raise ModelListError(detail=f"{type(e).__name__}: {e}") from e
    except ValueError as e:
        raise ModelListError(detail=f"잘못된 응답 형식: {e}") from e

    models = parse_tags_response(data)
    logger.info("Ollama 모델 목록 조회 완료", count=len(models))
    return models


def resolve_model_name(requested: str, available: list[str]) -> str | None:
    """요청한 모델 이름을 설치된 모델 이름으로 해석

    정확히 일치하는 이름을 우선하고, 없으면 태그를 생략한 이름
    ("llama3.2" → "llama3.2:latest")으로 찾는다.
    """
    if requested in available:
        return requested

    for name in available:
        if name.startswith(f"{requested}:") or name.split(":")[0] == requested:
            return name
    return None

from typing import Literal

from mkpr.core.config import settings
from mkpr.core.logging import get_logger
from mkpr.infra.llm.base import BaseLLMClient
from mkpr.infra.llm.ollama_client import OllamaClient
from mkpr.infra.llm.openai_client import OpenAIClient

logger = get_logger(__name__)

LLMProvider = Literal["ollama", "openai"]

_generator_client: BaseLLMClient | None = None


def get_generator_client() -> BaseLLMClient:
    """PR 설명 생성용 LLM 클라이언트 반환"""
    global _generator_client

    if _generator_client is not None:
        return _generator_client

    provider = settings.llm_provider

    if provider == "ollama":
        _generator_client = OllamaClient()
        logger.info("Ollama 클라이언트 초기화", model=settings.ollama_model)
    elif provider == "openai":
        _generator_client = OpenAIClient()
        logger.info("OpenAI 클라이언트 초기화", model=settings.openai_model)
    else:
        raise ValueError(f"지원하지 않는 LLM 프로바이더: {provider}")

    return _generator_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화 - 테스트용"""
    global _generator_client
    _generator_client = None

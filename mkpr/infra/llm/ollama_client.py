from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from mkpr.core.config import settings
from mkpr.infra.llm.base import BaseLLMClient

# Ollama의 OpenAI 호환 엔드포인트는 키를 검사하지 않지만 클라이언트는 값을 요구한다
OLLAMA_PLACEHOLDER_KEY = "ollama"


def ollama_openai_url(base_url: str) -> str:
    """Ollama 서버 주소를 OpenAI 호환 엔드포인트 주소로 변환"""
    base_url = base_url.rstrip("/")
    if base_url.endswith("/v1"):
        return base_url
    return f"{base_url}/v1"


class OllamaClient(BaseLLMClient):
    """로컬 Ollama 클라이언트 (OpenAI 호환 API 사용)"""

    def __init__(self, model: str | None = None):
        if not settings.ollama_base_url:
            raise ValueError("OLLAMA_BASE_URL이 설정되지 않았습니다")

        self._model_name = model or settings.ollama_model
        self._model = ChatOpenAI(
            model=self._model_name,
            api_key=OLLAMA_PLACEHOLDER_KEY,
            base_url=ollama_openai_url(settings.ollama_base_url),
            timeout=settings.ollama_timeout,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            max_retries=settings.llm_max_retries,
        )

    def get_chat_model(self) -> BaseChatModel:
        """LangChain ChatOpenAI 모델 반환"""
        return self._model

    def get_model_name(self) -> str:
        """사용 중인 모델 이름 반환"""
        return self._model_name

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택: "ollama" 또는 "openai"
    llm_provider: str = "ollama"

    # Ollama 설정 - 로컬 기본값
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"
    ollama_timeout: float = 180.0

    # OpenAI 설정
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # 생성 파라미터
    llm_temperature: float = 0.4
    llm_max_tokens: int = 1500
    llm_max_retries: int = 0

    # diff 처리 설정
    diff_budget: int = 8000
    exclude_patterns: str = ""

    # PR 설정
    default_base_branch: str = "main"
    pr_language: str = "English"

    # 요청 제한 (slowapi 형식)
    rate_limit: str = "60/minute"
    rate_limit_enabled: bool = True

    # Ollama 모델 조회 설정
    models_timeout: float = 10.0

    # 로깅 설정
    log_level: str = "INFO"

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def exclude_pattern_list(self) -> list[str]:
        """콤마로 구분된 제외 패턴을 리스트로 반환"""
        return [p.strip() for p in self.exclude_patterns.split(",") if p.strip()]

    def validate_for_production(self) -> list[str]:
        """프로덕션 환경에서 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if self.llm_provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY")
        if self.llm_provider == "ollama" and not self.ollama_base_url:
            errors.append("OLLAMA_BASE_URL")
        if self.llm_provider not in ("ollama", "openai"):
            errors.append("LLM_PROVIDER")
        return errors

    @model_validator(mode="after")
    def validate_production_settings(self):
        """프로덕션 환경에서 필수 설정 검증"""
        if self.is_production:
            missing = self.validate_for_production()
            if missing:
                raise ValueError(f"프로덕션 환경에서 필수 설정 누락: {', '.join(missing)}")
        return self


settings = Settings()

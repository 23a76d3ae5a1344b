from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

from mkpr.core.config import settings


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    LLM_ERROR = "LLM_ERROR"
    LLM_API_ERROR = "LLM_API_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    NO_CHANGES = "NO_CHANGES"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
        retryable: bool = False,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        self.retryable = retryable
        super().__init__(message)


class LLMError(CustomException):
    """모델 호출 실패 (타임아웃, 비정상 응답, 네트워크 오류)

    현재 생성 시도만 중단되며 호출자는 재생성을 시도할 수 있다.
    """

    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.LLM_ERROR,
            message="LLM 호출에 실패했습니다",
            detail=detail,
            retryable=True,
        )


class ModelListError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.LLM_API_ERROR,
            message="Ollama 모델 목록 조회에 실패했습니다",
            detail=detail,
            retryable=True,
        )


class ValidationError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message="입력값이 올바르지 않습니다",
            detail=detail,
        )


class NoChangesError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=422,
            error_code=ErrorCode.NO_CHANGES,
            message="베이스 브랜치와 비교해 변경 사항이 없습니다",
            detail=detail,
        )


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        content = {
            "error_code": exc.error_code,
            "message": exc.message,
            "retryable": exc.retryable,
        }
        if exc.detail and not settings.is_production:
            content["detail"] = exc.detail

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
        )

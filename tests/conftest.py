"""테스트 공통 fixture"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from mkpr.core.limiter import limiter
from mkpr.domain.pr.schemas import FileChange, PRRequest, PRType, RunContext, StructuredPR
from mkpr.main import app
from tests._fixtures.diff_builder import make_file_diff


@pytest.fixture
def lockfile_and_app_diff() -> str:
    """package-lock.json과 src/app.js를 함께 수정한 diff"""
    return "\n".join(
        [
            make_file_diff("package-lock.json", ['"version": "2.0.0"'], ['"version": "1.0.0"']),
            make_file_diff("src/app.js", ["const port = 8080;", "app.listen(port);"]),
        ]
    )


@pytest.fixture
def sample_pr() -> StructuredPR:
    """테스트용 StructuredPR"""
    return StructuredPR(
        title="Add request logging middleware",
        type=PRType.FEATURE,
        summary="Adds a middleware that logs every request with its duration.",
        changes=["Add RequestLoggingMiddleware", "Register middleware in app factory"],
        breaking_changes=[],
        testing="",
        notes="",
    )


@pytest.fixture
def sample_run_context() -> RunContext:
    """테스트용 실행 컨텍스트"""
    return RunContext(
        current_branch="feature/request-logging",
        base_branch="origin/main",
        commit_count=3,
        added_count=1,
        modified_count=2,
        deleted_count=0,
        total_file_count=3,
    )


@pytest.fixture
def sample_pr_request() -> PRRequest:
    """테스트용 PR 생성 입력"""
    return PRRequest(
        current_branch="feature/request-logging",
        base_branch="origin/main",
        diff=make_file_diff("src/middleware.py", ["class RequestLoggingMiddleware:", "    pass"]),
        commits=["a1b2c3d feat: add request logging", "d4e5f6a test: cover middleware"],
        files=[
            FileChange(status="added", path="src/middleware.py"),
            FileChange(status="modified", path="src/main.py"),
        ],
        stats=" 2 files changed, 40 insertions(+)",
    )


@pytest.fixture
def valid_model_reply() -> str:
    """스키마를 만족하는 모델 응답"""
    return """```json
{
  "title": "Add request logging middleware",
  "type": "feat",
  "summary": "Logs every request with method, path and duration.",
  "changes": ["Add RequestLoggingMiddleware", "Register it in main"],
  "breaking_changes": [],
  "testing": "Unit tests for the middleware",
  "notes": ""
}
```"""


@pytest.fixture
def async_client():
    """비동기 HTTP 클라이언트"""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def mock_generator_client():
    """PR 설명 생성용 LLM 클라이언트 mock"""
    with patch("mkpr.infra.llm.client.get_generator_client") as mock_get:
        mock_client = MagicMock()
        mock_client.provider = "ollama"
        mock_client.get_model_name.return_value = "llama3.2"
        mock_client.get_chat_model.return_value.ainvoke = AsyncMock()
        mock_get.return_value = mock_client
        yield mock_client


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("GET", "http://localhost:11434/api/tags"),
            response=httpx.Response(status_code),
        )

    return _create


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """테스트 간 요청 제한 카운터 초기화"""
    limiter.reset()
    yield

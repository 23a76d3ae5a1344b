"""PR API 엔드포인트 테스트"""

from unittest.mock import AsyncMock, patch

import pytest
from langchain_core.messages import AIMessage

from mkpr.core.exceptions import LLMError, ModelListError
from mkpr.infra.llm.models import OllamaModel
from tests._fixtures.diff_builder import make_file_diff


def _generate_payload(**overrides) -> dict:
    payload = {
        "currentBranch": "feature/request-logging",
        "baseBranch": "main",
        "diff": make_file_diff("src/middleware.py", ["class RequestLoggingMiddleware:"]),
        "commits": ["a1b2c3d feat: add request logging"],
        "nameStatus": "A\tsrc/middleware.py\nM\tsrc/main.py",
    }
    payload.update(overrides)
    return payload


class TestGenerateEndpoint:
    """POST /api/v1/pr/generate 테스트"""

    @pytest.mark.asyncio
    async def test_success(self, async_client, mock_generator_client, valid_model_reply):
        chat_model = mock_generator_client.get_chat_model.return_value
        chat_model.ainvoke.return_value = AIMessage(content=valid_model_reply)

        async with async_client as client:
            response = await client.post("/api/v1/pr/generate", json=_generate_payload())

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Add request logging middleware"
        assert body["type"] == "feature"
        assert body["fallbackUsed"] is False
        assert body["filename"] == "feature_request-logging_pr.md"
        assert "- **Added:** 1" in body["markdown"]
        assert "- **Modified:** 1" in body["markdown"]

    @pytest.mark.asyncio
    async def test_commit_log_parsed(self, async_client, mock_generator_client, valid_model_reply):
        """commits 대신 commitLog 원문 사용"""
        chat_model = mock_generator_client.get_chat_model.return_value
        chat_model.ainvoke.return_value = AIMessage(content=valid_model_reply)
        payload = _generate_payload(commits=[], commitLog="a1 one\nb2 two\nc3 three\n")

        async with async_client as client:
            response = await client.post("/api/v1/pr/generate", json=payload)

        assert response.status_code == 200
        assert "- **Commits:** 3" in response.json()["markdown"]

    @pytest.mark.asyncio
    async def test_no_changes_returns_422(self, async_client, mock_generator_client):
        payload = _generate_payload(diff=make_file_diff("yarn.lock", ["x"]))

        async with async_client as client:
            response = await client.post("/api/v1/pr/generate", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "NO_CHANGES"
        assert body["retryable"] is False

    @pytest.mark.asyncio
    async def test_same_branch_returns_400(self, async_client, mock_generator_client):
        payload = _generate_payload(currentBranch="main", baseBranch="main")

        async with async_client as client:
            response = await client.post("/api/v1/pr/generate", json=payload)

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_INPUT"

    @pytest.mark.asyncio
    async def test_llm_failure_returns_502(self, async_client):
        with patch(
            "mkpr.domain.pr.service.request_pr_description",
            new=AsyncMock(side_effect=LLMError(detail="ReadTimeout")),
        ):
            async with async_client as client:
                response = await client.post("/api/v1/pr/generate", json=_generate_payload())

        assert response.status_code == 502
        body = response.json()
        assert body["error_code"] == "LLM_ERROR"
        assert body["retryable"] is True

    @pytest.mark.asyncio
    async def test_missing_branch_returns_422(self, async_client):
        payload = _generate_payload()
        del payload["currentBranch"]

        async with async_client as client:
            response = await client.post("/api/v1/pr/generate", json=payload)

        assert response.status_code == 422


class TestRenderEndpoint:
    """POST /api/v1/pr/render 테스트"""

    @pytest.mark.asyncio
    async def test_render_valid_reply(self, async_client, valid_model_reply):
        payload = {
            "rawResponse": valid_model_reply,
            "currentBranch": "feature/x",
            "baseBranch": "main",
            "commitCount": 4,
            "files": [{"status": "deleted", "path": "old.py"}],
        }

        async with async_client as client:
            response = await client.post("/api/v1/pr/render", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["fallbackUsed"] is False
        assert "- **Commits:** 4" in body["markdown"]
        assert "- **Deleted:** 1" in body["markdown"]
        assert body["pr"]["type"] == "feature"

    @pytest.mark.asyncio
    async def test_render_fallback(self, async_client):
        payload = {"rawResponse": "not json at all", "currentBranch": "feature/x"}

        async with async_client as client:
            response = await client.post("/api/v1/pr/render", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["fallbackUsed"] is True
        assert body["type"] == "chore"
        assert "`feature/x` → `main`" in body["markdown"]


class TestModelsEndpoint:
    """GET /api/v1/models 테스트"""

    @pytest.mark.asyncio
    async def test_lists_models(self, async_client):
        models = [
            OllamaModel(name="llama3.2:latest", size=2019393189),
            OllamaModel(name="qwen2.5-coder:7b", size=None),
        ]
        with patch("mkpr.api.v1.models.list_models", new=AsyncMock(return_value=models)):
            async with async_client as client:
                response = await client.get("/api/v1/models")

        assert response.status_code == 200
        body = response.json()
        assert body["currentModel"] == "llama3.2:latest"
        assert body["models"][0] == {"name": "llama3.2:latest", "size": "1.88 GB", "current": True}
        assert body["models"][1]["size"] == "N/A"
        assert body["models"][1]["current"] is False

    @pytest.mark.asyncio
    async def test_ollama_unreachable_returns_502(self, async_client):
        with patch(
            "mkpr.api.v1.models.list_models",
            new=AsyncMock(side_effect=ModelListError(detail="ConnectError")),
        ):
            async with async_client as client:
                response = await client.get("/api/v1/models")

        assert response.status_code == 502
        assert response.json()["error_code"] == "LLM_API_ERROR"

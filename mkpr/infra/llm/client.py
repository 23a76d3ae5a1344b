import asyncio
import json
import os

import httpx
import openai
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler

from mkpr.core.config import settings
from mkpr.core.exceptions import LLMError
from mkpr.core.logging import get_logger
from mkpr.domain.pr.constants import PR_TYPES
from mkpr.domain.pr.prompts import (
    PR_DESCRIBER_HUMAN,
    PR_DESCRIBER_SCHEMA_HINT,
    PR_DESCRIBER_SYSTEM,
)
from mkpr.domain.pr.schemas import FileChange, PRRequest, StructuredPR
from mkpr.infra.llm.factory import get_generator_client

logger = get_logger(__name__)

MAX_PROMPT_FILES = 200

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def format_commits(commits: list[str]) -> str:
    """커밋 목록을 프롬프트용 텍스트로 포맷"""
    if not commits:
        return "None"
    return "\n".join(f"- {c}" for c in commits)


def format_files(files: list[FileChange]) -> str:
    """변경 파일 목록을 프롬프트용 텍스트로 포맷"""
    if not files:
        return "None"

    lines = [f"- [{f.status}] {f.path}" for f in files[:MAX_PROMPT_FILES]]
    if len(files) > MAX_PROMPT_FILES:
        lines.append(f"- ... and {len(files) - MAX_PROMPT_FILES} more files")
    return "\n".join(lines)


def _get_json_schema_prompt(model_class: type) -> str:
    """Pydantic 모델의 JSON 스키마를 프롬프트용 문자열로 변환"""
    schema = model_class.model_json_schema()
    return json.dumps(schema, indent=2, ensure_ascii=False)


def build_messages(request: PRRequest, compacted_diff: str) -> list[BaseMessage]:
    """시스템 지시문과 사용자 페이로드 메시지 생성"""
    system_content = PR_DESCRIBER_SYSTEM.format(
        language=settings.pr_language,
        types=", ".join(PR_TYPES),
    )

    human_content = PR_DESCRIBER_HUMAN.format(
        current_branch=request.current_branch,
        base_branch=request.base_branch,
        commit_count=len(request.commits),
        commits=format_commits(request.commits),
        file_count=len(request.files),
        files=format_files(request.files),
        stats=request.stats.strip() or "None",
        diff=compacted_diff,
    )
    human_content += PR_DESCRIBER_SCHEMA_HINT.format(
        json_schema=_get_json_schema_prompt(StructuredPR)
    )

    return [
        SystemMessage(content=system_content),
        HumanMessage(content=human_content),
    ]


def _content_text(content: str | list) -> str:
    """AIMessage.content에서 텍스트만 추출"""
    if isinstance(content, str):
        return content

    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


async def request_pr_description(
    request: PRRequest,
    compacted_diff: str,
    session_id: str | None = None,
) -> str:
    """모델에 PR 설명을 요청하고 원문 응답 반환

    Raises:
        LLMError: 타임아웃, 비정상 응답, 네트워크 오류
    """
    client = get_generator_client()
    messages = build_messages(request, compacted_diff)

    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["pr", "describe", client.provider],
        },
    }

    logger.debug(
        "PR 설명 요청",
        provider=client.provider,
        model=client.get_model_name(),
        diff_length=len(compacted_diff),
    )

    try:
        response = await client.get_chat_model().ainvoke(messages, config=config)
    except (openai.APIError, httpx.HTTPError, TimeoutError, asyncio.TimeoutError) as e:
        logger.error(
            "LLM 호출 실패",
            provider=client.provider,
            error=type(e).__name__,
        )
        raise LLMError(detail=f"{type(e).__name__}: {e}") from e

    text = _content_text(response.content)
    logger.debug("PR 설명 응답 수신", length=len(text))
    return text

import uuid

from fastapi import APIRouter

from mkpr.api.v1.schemas import GenerateRequest, PRDescriptionResponse, RenderRequest
from mkpr.core.context import new_attempt_id
from mkpr.core.logging import get_logger
from mkpr.domain.pr.parsers import build_run_context
from mkpr.domain.pr.schemas import PRDescription
from mkpr.domain.pr.service import describe_from_response, generate_pr_description

router = APIRouter(prefix="/pr", tags=["pr"])
logger = get_logger(__name__)


def _to_response(description: PRDescription) -> PRDescriptionResponse:
    return PRDescriptionResponse(
        title=description.pr.title,
        type=description.pr.type.value,
        markdown=description.markdown,
        filename=description.filename,
        fallback_used=description.fallback_used,
        pr=description.pr,
    )


@router.post("/generate", response_model=PRDescriptionResponse)
async def generate(request: GenerateRequest) -> PRDescriptionResponse:
    """diff와 커밋 정보로 PR 설명 생성

    실패 시 LLMError(502, retryable)가 반환되며 같은 요청으로 재시도하면 된다.
    """
    session_id = str(uuid.uuid4())
    description = await generate_pr_description(request.to_pr_request(), session_id=session_id)
    return _to_response(description)


@router.post("/render", response_model=PRDescriptionResponse)
async def render(request: RenderRequest) -> PRDescriptionResponse:
    """모델 응답 원문을 모델 호출 없이 강제 변환 후 렌더링"""
    new_attempt_id()
    ctx = build_run_context(
        request.current_branch,
        request.base_branch,
        request.commit_count,
        request.resolved_files(),
    )
    description = describe_from_response(request.raw_response, ctx)
    logger.info("PR 설명 렌더링 완료", fallback_used=description.fallback_used)
    return _to_response(description)

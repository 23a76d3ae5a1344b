from mkpr.core.config import settings
from mkpr.core.context import new_attempt_id
from mkpr.core.exceptions import NoChangesError, ValidationError
from mkpr.core.logging import get_logger
from mkpr.domain.pr.coercer import coerce_response
from mkpr.domain.pr.compactor import compact_diff
from mkpr.domain.pr.diff_filter import filter_diff
from mkpr.domain.pr.exclusions import build_matcher
from mkpr.domain.pr.parsers import build_run_context, output_filename
from mkpr.domain.pr.renderer import render_markdown
from mkpr.domain.pr.schemas import PRDescription, PRRequest, RunContext
from mkpr.infra.llm.client import request_pr_description

logger = get_logger(__name__)


def prepare_diff(request: PRRequest, budget: int | None = None) -> str:
    """제외 패턴 필터링 후 예산에 맞게 diff 압축

    Raises:
        ValidationError: 현재 브랜치와 베이스 브랜치가 같은 경우
        NoChangesError: 필터링 후 남은 변경 사항이 없는 경우
    """
    if request.current_branch.strip() == request.base_branch.strip():
        raise ValidationError(detail=f"현재 브랜치와 베이스 브랜치가 같음: {request.base_branch}")

    matcher = build_matcher([*settings.exclude_pattern_list, *request.exclude_patterns])
    filtered = filter_diff(request.diff, matcher)

    if not filtered.strip():
        raise NoChangesError(detail=f"{request.current_branch} → {request.base_branch}")

    return compact_diff(filtered, settings.diff_budget if budget is None else budget)


def describe_from_response(raw: str, ctx: RunContext) -> PRDescription:
    """모델 원문 응답을 강제 변환해 마크다운으로 렌더링"""
    result = coerce_response(raw)
    markdown = render_markdown(result.pr, ctx)

    return PRDescription(
        pr=result.pr,
        markdown=markdown,
        filename=output_filename(ctx.current_branch),
        fallback_used=result.fallback_used,
    )


async def generate_pr_description(
    request: PRRequest,
    session_id: str | None = None,
    budget: int | None = None,
) -> PRDescription:
    """PR 설명 생성 1회 시도

    재생성은 이 함수를 다시 호출하면 되며, 이전 시도의 상태는 쓰지 않는다.

    Args:
        request: 브랜치, diff, 커밋, 파일 목록, 통계
        session_id: Langfuse 세션 id
        budget: diff 문자 예산. None이면 settings.diff_budget

    Returns:
        구조화된 PR, 마크다운, 저장 파일명

    Raises:
        ValidationError: 현재 브랜치와 베이스 브랜치가 같은 경우
        NoChangesError: 필터링 후 diff가 비어 있는 경우
        LLMError: 모델 호출 실패
    """
    attempt_id = new_attempt_id()
    logger.info(
        "PR 설명 생성 시작",
        branch=request.current_branch,
        base=request.base_branch,
        commits=len(request.commits),
        files=len(request.files),
    )

    compacted = prepare_diff(request, budget)
    raw = await request_pr_description(request, compacted, session_id=session_id or attempt_id)

    ctx = build_run_context(
        request.current_branch, request.base_branch, len(request.commits), request.files
    )
    description = describe_from_response(raw, ctx)

    logger.info(
        "PR 설명 생성 완료",
        type=description.pr.type.value,
        fallback_used=description.fallback_used,
        filename=description.filename,
    )
    return description

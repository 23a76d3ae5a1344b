import re
from functools import wraps
from typing import Callable, TypeVar

from mkpr.core.logging import get_logger
from mkpr.domain.pr.constants import FILE_STATUS_MAP, MAX_FILENAME_LENGTH
from mkpr.domain.pr.schemas import FileChange, RunContext

logger = get_logger(__name__)

T = TypeVar("T")

UNSAFE_FILENAME_CHARS = re.compile(r'[/\\:*?"<>|]')
WHITESPACE = re.compile(r"\s+")
REPEATED_SEPARATORS = re.compile(r"_{2,}")


def _log_parsed(kind: str) -> Callable:
    """파싱 결과 건수 로깅 데코레이터"""

    def decorator(func: Callable[[str], list[T]]) -> Callable[[str], list[T]]:
        @wraps(func)
        def wrapper(content: str) -> list[T]:
            result = func(content)
            logger.debug(f"{kind} 파싱 완료", count=len(result))
            return result

        return wrapper

    return decorator


@_log_parsed("name-status")
def parse_name_status(content: str) -> list[FileChange]:
    """`git diff --name-status` 출력을 FileChange 목록으로 변환

    R100/C075처럼 점수가 붙은 상태는 첫 글자로 판단하고, 이름 변경은
    새 경로를 사용한다. 알 수 없는 상태(C, T 등)는 modified로 취급한다.
    """
    changes = []
    for line in content.splitlines():
        if not line.strip():
            continue
        status, _, rest = line.partition("\t")
        if not rest:
            continue
        paths = rest.split("\t")
        changes.append(
            FileChange(
                status=FILE_STATUS_MAP.get(status.strip()[:1].upper(), "modified"),
                path=paths[-1],
            )
        )
    return changes


@_log_parsed("commit log")
def parse_commit_log(content: str) -> list[str]:
    """`git log --oneline` 출력을 커밋 요약 목록으로 변환"""
    return [line.strip() for line in content.splitlines() if line.strip()]


def sanitize_branch_name(branch_name: str) -> str:
    """브랜치 이름을 파일명에 안전한 형태로 변환"""
    name = UNSAFE_FILENAME_CHARS.sub("_", branch_name)
    name = WHITESPACE.sub("_", name)
    name = REPEATED_SEPARATORS.sub("_", name)
    name = name.strip(".")[:MAX_FILENAME_LENGTH]
    return name or "branch"


def output_filename(branch_name: str) -> str:
    return f"{sanitize_branch_name(branch_name)}_pr.md"


def build_run_context(
    current_branch: str,
    base_branch: str,
    commit_count: int,
    files: list[FileChange],
) -> RunContext:
    """커밋 수와 파일 목록으로 렌더링 컨텍스트 생성"""
    counts = {"added": 0, "modified": 0, "deleted": 0}
    for f in files:
        if f.status in counts:
            counts[f.status] += 1

    return RunContext(
        current_branch=current_branch,
        base_branch=base_branch,
        commit_count=commit_count,
        added_count=counts["added"],
        modified_count=counts["modified"],
        deleted_count=counts["deleted"],
        total_file_count=len(files),
    )

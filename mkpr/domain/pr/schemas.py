from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mkpr.domain.pr.constants import MAX_TITLE_LENGTH


class PRType(str, Enum):
    """PR 타입 정규 열거값"""

    FEATURE = "feature"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    CHORE = "chore"
    CI = "ci"
    REVERT = "revert"


class StructuredPR(BaseModel):
    """모델 응답을 강제 변환한 PR 설명. 생성 후 변경 불가"""

    model_config = ConfigDict(frozen=True)

    title: str = Field(max_length=MAX_TITLE_LENGTH, description="PR title, max 72 characters")
    type: PRType = Field(description="Kind of change")
    summary: str = Field(description="What the PR does and why")
    changes: list[str] = Field(default_factory=list, description="Main changes, one per item")
    breaking_changes: list[str] = Field(
        default_factory=list, description="Breaking changes, empty if none"
    )
    testing: str = Field(default="", description="How the change was tested")
    notes: str = Field(default="", description="Anything else reviewers should know")


class FileChange(BaseModel):
    """변경 파일 정보"""

    status: Literal["added", "modified", "deleted", "renamed"]
    path: str


class RunContext(BaseModel):
    """렌더링에 쓰이는 실행 컨텍스트"""

    model_config = ConfigDict(frozen=True)

    current_branch: str
    base_branch: str
    commit_count: int = 0
    added_count: int = 0
    modified_count: int = 0
    deleted_count: int = 0
    total_file_count: int = 0


class PRRequest(BaseModel):
    """PR 설명 생성 입력"""

    current_branch: str
    base_branch: str
    diff: str
    commits: list[str] = Field(default_factory=list)
    files: list[FileChange] = Field(default_factory=list)
    stats: str = ""
    exclude_patterns: list[str] = Field(default_factory=list)


class Parsed(BaseModel):
    """JSON 파싱과 스키마 검증에 성공한 결과"""

    model_config = ConfigDict(frozen=True)

    pr: StructuredPR
    fallback_used: Literal[False] = False


class FallbackUsed(BaseModel):
    """휴리스틱 추출로 복구한 결과"""

    model_config = ConfigDict(frozen=True)

    pr: StructuredPR
    reason: str
    fallback_used: Literal[True] = True


CoercionResult = Parsed | FallbackUsed


class PRDescription(BaseModel):
    """생성 시도 1회의 최종 결과"""

    model_config = ConfigDict(frozen=True)

    pr: StructuredPR
    markdown: str
    filename: str
    fallback_used: bool = False

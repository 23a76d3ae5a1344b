"""PR 설명 API 스키마."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mkpr.core.config import settings
from mkpr.domain.pr.parsers import parse_commit_log, parse_name_status
from mkpr.domain.pr.schemas import FileChange, PRRequest, StructuredPR


def _default_base_branch() -> str:
    return settings.default_base_branch


class _FileListMixin(BaseModel):
    files: list[FileChange] = Field(default_factory=list)
    name_status: str | None = Field(default=None, alias="nameStatus")

    def resolved_files(self) -> list[FileChange]:
        """files가 비어 있으면 nameStatus 원문을 파싱해 사용"""
        if self.files or not self.name_status:
            return list(self.files)
        return parse_name_status(self.name_status)


class GenerateRequest(_FileListMixin):
    """PR 설명 생성 요청."""

    model_config = ConfigDict(populate_by_name=True)

    current_branch: str = Field(alias="currentBranch", min_length=1)
    base_branch: str = Field(default_factory=_default_base_branch, alias="baseBranch")
    diff: str
    commits: list[str] = Field(default_factory=list)
    commit_log: str | None = Field(default=None, alias="commitLog")
    stats: str = ""
    exclude_patterns: list[str] = Field(default_factory=list, alias="excludePatterns")

    @field_validator("base_branch")
    @classmethod
    def validate_base_branch(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("baseBranch는 비어 있을 수 없습니다")
        return v.strip()

    def to_pr_request(self) -> PRRequest:
        commits = list(self.commits)
        if not commits and self.commit_log:
            commits = parse_commit_log(self.commit_log)

        return PRRequest(
            current_branch=self.current_branch,
            base_branch=self.base_branch,
            diff=self.diff,
            commits=commits,
            files=self.resolved_files(),
            stats=self.stats,
            exclude_patterns=self.exclude_patterns,
        )


class RenderRequest(_FileListMixin):
    """모델 응답 원문 렌더링 요청."""

    model_config = ConfigDict(populate_by_name=True)

    raw_response: str = Field(alias="rawResponse")
    current_branch: str = Field(alias="currentBranch", min_length=1)
    base_branch: str = Field(default_factory=_default_base_branch, alias="baseBranch")
    commit_count: int = Field(default=0, alias="commitCount", ge=0)


class PRDescriptionResponse(BaseModel):
    """PR 설명 응답."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    type: str
    markdown: str
    filename: str
    fallback_used: bool = Field(alias="fallbackUsed")
    pr: StructuredPR


class ModelInfo(BaseModel):
    """Ollama 모델 정보."""

    name: str
    size: str
    current: bool


class ModelListResponse(BaseModel):
    """Ollama 모델 목록 응답."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    current_model: str | None = Field(alias="currentModel")
    models: list[ModelInfo]

from mkpr.domain.pr.coercer import coerce_response
from mkpr.domain.pr.compactor import compact_diff
from mkpr.domain.pr.diff_filter import filter_diff
from mkpr.domain.pr.exclusions import ExclusionMatcher, build_matcher, matches
from mkpr.domain.pr.renderer import render_markdown
from mkpr.domain.pr.schemas import (
    CoercionResult,
    FallbackUsed,
    FileChange,
    Parsed,
    PRDescription,
    PRRequest,
    PRType,
    RunContext,
    StructuredPR,
)

__all__ = [
    "ExclusionMatcher",
    "build_matcher",
    "matches",
    "filter_diff",
    "compact_diff",
    "coerce_response",
    "render_markdown",
    "PRType",
    "StructuredPR",
    "FileChange",
    "RunContext",
    "PRRequest",
    "PRDescription",
    "Parsed",
    "FallbackUsed",
    "CoercionResult",
]

import re

from mkpr.core.logging import get_logger
from mkpr.domain.pr.exclusions import ExclusionMatcher

logger = get_logger(__name__)

DIFF_HEADER_PREFIX = "diff --git "
_TARGET_PATH_PATTERN = re.compile(r'^diff --git .*\s"?b/(.*?)"?$')


def is_file_header(line: str) -> bool:
    return line.startswith(DIFF_HEADER_PREFIX)


def parse_target_path(header: str) -> str:
    """'diff --git a/X b/Y' 헤더에서 대상 경로 Y 추출"""
    match = _TARGET_PATH_PATTERN.search(header)
    if match:
        return match.group(1)
    return header[len(DIFF_HEADER_PREFIX) :].split(" ")[-1]


def filter_diff(diff: str, matcher: ExclusionMatcher) -> str:
    """제외 대상 파일의 블록 전체를 diff에서 제거

    헤더를 만나면 제외 여부를 판단하고 다음 헤더까지 유지한다.
    헤더가 없는 diff는 그대로 반환된다.

    Args:
        diff: unified diff 텍스트
        matcher: 컴파일된 제외 패턴

    Returns:
        필터링된 diff. 모든 파일이 제외되면 빈 문자열
    """
    kept: list[str] = []
    excluding = False
    excluded_files = 0

    for line in diff.split("\n"):
        if is_file_header(line):
            excluding = matcher.matches(parse_target_path(line))
            if excluding:
                excluded_files += 1
        if not excluding:
            kept.append(line)

    if excluded_files:
        logger.info("diff 파일 제외", excluded=excluded_files)

    return "\n".join(kept)

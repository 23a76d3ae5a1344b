"""diff 컴팩션

큰 diff를 문자 예산 안으로 줄인다.
- 파일 순서 유지, 파일마다 헤더는 항상 포함
- 컨텍스트 줄보다 추가/삭제 줄 우선
- 잘라낸 줄과 생략한 파일은 항상 마커로 표시
"""

from dataclasses import dataclass, field

from mkpr.core.config import settings
from mkpr.core.logging import get_logger
from mkpr.domain.pr.constants import (
    CHARS_PER_LINE_ESTIMATE,
    MAX_OMITTED_NAMES,
    MIN_CHARS_PER_FILE,
    MIN_LINES_PER_FILE,
    OMITTED_NAMES_BUDGET_DIVISOR,
)
from mkpr.domain.pr.diff_filter import is_file_header, parse_target_path

logger = get_logger(__name__)

HUNK_PREFIX = "@@"


@dataclass
class FileChunk:
    """diff 한 파일 분량. lines에는 hunk 마커와 추가/삭제 줄만 담긴다"""

    header: str
    path: str
    lines: list[str] = field(default_factory=list)


def _is_change_line(line: str) -> bool:
    return line.startswith("+") or line.startswith("-")


def split_file_chunks(diff: str) -> list[FileChunk]:
    """diff를 파일 단위로 분리하고 컨텍스트/메타데이터 줄 제거

    첫 hunk 마커 이전의 ---/+++, index, mode 줄은 메타데이터로 보고 버린다.
    헤더 이전에 나오는 줄은 헤더 없는 청크 하나로 모으며, hunk 마커가
    나오기 전까지는 빈 줄을 제외한 모든 줄을 유지한다.
    """
    chunks: list[FileChunk] = []
    current: FileChunk | None = None
    in_hunk = False

    for line in diff.split("\n"):
        if is_file_header(line):
            current = FileChunk(header=line, path=parse_target_path(line))
            chunks.append(current)
            in_hunk = False
            continue

        if current is None:
            current = FileChunk(header="", path="")
            chunks.append(current)

        if line.startswith(HUNK_PREFIX):
            in_hunk = True
            current.lines.append(line)
        elif in_hunk and _is_change_line(line):
            current.lines.append(line)
        elif not in_hunk and not current.header and line.strip():
            # 헤더 없는 앞부분은 원문 줄 유지
            current.lines.append(line)

    return [c for c in chunks if c.header or c.lines]


def line_allowance(budget: int, file_count: int) -> int:
    """파일당 허용 줄 수"""
    if budget <= 0:
        return 0
    return max(MIN_LINES_PER_FILE, budget // (CHARS_PER_LINE_ESTIMATE * max(file_count, 1)))


def char_allowance(budget: int, file_count: int) -> int:
    """파일당 허용 문자 수. 긴 줄 몇 개가 예산을 독차지하지 않도록 제한"""
    if budget <= 0:
        return 0
    return max(MIN_CHARS_PER_FILE, budget // max(file_count, 1))


def _hidden_marker(count: int, path: str) -> str:
    return f"... [{count} more lines hidden in {path or 'diff'}]"


def _omitted_marker(chunks: list[FileChunk], max_chars: int) -> str:
    """생략 파일 마커. 이름은 최대 MAX_OMITTED_NAMES개, max_chars 이내로만 나열"""
    names: list[str] = []
    used = 0
    for chunk in chunks:
        if not chunk.path:
            continue
        cost = len(chunk.path) + 2
        if len(names) >= MAX_OMITTED_NAMES or used + cost > max_chars:
            break
        names.append(chunk.path)
        used += cost

    if not names:
        return f"... [{len(chunks)} more files omitted]"

    listed = ", ".join(names)
    rest = len(chunks) - len(names)
    if rest:
        listed += f", and {rest} more"
    return f"... [{len(chunks)} more files omitted: {listed}]"


def _emit_chunk(chunk: FileChunk, max_lines: int, max_chars: int) -> list[str]:
    out = [chunk.header] if chunk.header else []
    used = 0
    shown = 0

    for line in chunk.lines[:max_lines]:
        cost = len(line) + 1
        if used + cost > max_chars:
            break
        out.append(line)
        used += cost
        shown += 1

    hidden = len(chunk.lines) - shown
    if hidden > 0:
        out.append(_hidden_marker(hidden, chunk.path))
    return out


def compact_diff(diff: str, budget: int | None = None) -> str:
    """diff를 문자 예산에 맞게 압축

    예산 이하의 diff는 그대로 반환한다. 결과 길이는 예산의 작은 상수배
    이내이며 하드 상한은 아니다.

    Args:
        diff: (필터링된) unified diff
        budget: 목표 문자 수. None이면 settings.diff_budget

    Returns:
        압축된 diff 텍스트
    """
    if budget is None:
        budget = settings.diff_budget
    if len(diff) <= budget:
        return diff

    chunks = split_file_chunks(diff)
    max_lines = line_allowance(budget, len(chunks))
    max_chars = char_allowance(budget, len(chunks))

    out: list[str] = []
    emitted = 0
    omitted: list[FileChunk] = []

    for idx, chunk in enumerate(chunks):
        if budget > 0 and emitted > budget:
            omitted = chunks[idx:]
            break
        lines = _emit_chunk(chunk, max_lines, max_chars)
        out.extend(lines)
        emitted += sum(len(line) + 1 for line in lines)

    if omitted:
        out.append(_omitted_marker(omitted, budget // OMITTED_NAMES_BUDGET_DIVISOR))

    result = "\n".join(out)
    logger.info(
        "diff 컴팩션 완료",
        original=len(diff),
        compacted=len(result),
        budget=budget,
        files=len(chunks),
        omitted_files=len(omitted),
    )
    return result

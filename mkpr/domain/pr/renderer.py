from mkpr.domain.pr.constants import DEFAULT_TYPE_EMOJI, PR_CHECKLIST, TYPE_EMOJI
from mkpr.domain.pr.schemas import RunContext, StructuredPR

NO_CHANGES_BULLET = "No notable changes listed"


def _section(lines: list[str], heading: str, body: list[str]) -> None:
    lines.append(f"## {heading}")
    lines.append("")
    lines.extend(body)
    lines.append("")


def _bullets(items: list[str]) -> list[str]:
    return [f"- {item}" for item in items]


def _stats(ctx: RunContext) -> list[str]:
    rows = [
        f"- **Commits:** {ctx.commit_count}",
        f"- **Files changed:** {ctx.total_file_count}",
    ]
    for label, count in (
        ("Added", ctx.added_count),
        ("Modified", ctx.modified_count),
        ("Deleted", ctx.deleted_count),
    ):
        if count:
            rows.append(f"- **{label}:** {count}")
    return rows


def render_markdown(pr: StructuredPR, ctx: RunContext) -> str:
    """StructuredPR과 실행 컨텍스트를 마크다운 문서로 변환

    같은 입력이면 항상 같은 문자열을 반환한다.
    비어 있는 Breaking Changes, Testing, Notes 섹션은 생략한다.
    """
    type_value = getattr(pr.type, "value", pr.type)
    emoji = TYPE_EMOJI.get(type_value, DEFAULT_TYPE_EMOJI)

    lines = [
        f"# {pr.title}",
        "",
        f"**Type:** {emoji} {type_value}",
        "",
        f"**Branch:** `{ctx.current_branch}` → `{ctx.base_branch}`",
        "",
    ]

    _section(lines, "Description", [pr.summary])
    _section(lines, "Changes", _bullets(pr.changes) or _bullets([NO_CHANGES_BULLET]))

    if pr.breaking_changes:
        _section(lines, "Breaking Changes", _bullets(pr.breaking_changes))
    if pr.testing:
        _section(lines, "Testing", [pr.testing])

    _section(lines, "Stats", _stats(ctx))

    if pr.notes:
        _section(lines, "Notes", [pr.notes])

    _section(lines, "Checklist", [f"- [ ] {item}" for item in PR_CHECKLIST])

    return "\n".join(lines).rstrip("\n") + "\n"

"""테스트용 unified diff 생성 helper"""


def make_file_diff(path: str, added: list[str], removed: list[str] | None = None) -> str:
    """단일 파일 unified diff 생성"""
    removed = removed or []
    lines = [
        f"diff --git a/{path} b/{path}",
        "index 1111111..2222222 100644",
        f"--- a/{path}",
        f"+++ b/{path}",
        f"@@ -1,{len(removed) + 1} +1,{len(added) + 1} @@",
        " unchanged context line",
    ]
    lines.extend(f"-{line}" for line in removed)
    lines.extend(f"+{line}" for line in added)
    return "\n".join(lines)

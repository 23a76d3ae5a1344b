import pytest

from mkpr.domain.pr.renderer import NO_CHANGES_BULLET, render_markdown
from mkpr.domain.pr.schemas import PRType, RunContext


class TestRenderMarkdown:
    """render_markdown 함수 테스트."""

    def test_section_order(self, sample_pr, sample_run_context):
        """섹션 순서 고정."""
        md = render_markdown(sample_pr, sample_run_context)

        headings = [line for line in md.splitlines() if line.startswith("#")]
        assert headings == [
            "# Add request logging middleware",
            "## Description",
            "## Changes",
            "## Stats",
            "## Checklist",
        ]

    def test_header_lines(self, sample_pr, sample_run_context):
        md = render_markdown(sample_pr, sample_run_context)

        assert "**Type:** ✨ feature" in md
        assert "**Branch:** `feature/request-logging` → `origin/main`" in md

    def test_empty_optional_sections_omitted(self, sample_pr, sample_run_context):
        """빈 Breaking Changes/Testing/Notes 섹션 생략."""
        md = render_markdown(sample_pr, sample_run_context)

        assert "## Breaking Changes" not in md
        assert "## Testing" not in md
        assert "## Notes" not in md

    def test_optional_sections_rendered(self, sample_pr, sample_run_context):
        pr = sample_pr.model_copy(
            update={
                "breaking_changes": ["Drop Python 3.9 support"],
                "testing": "pytest",
                "notes": "Deploy after migration",
            }
        )

        md = render_markdown(pr, sample_run_context)

        assert "## Breaking Changes\n\n- Drop Python 3.9 support\n" in md
        assert "## Testing\n\npytest\n" in md
        assert "## Notes\n\nDeploy after migration\n" in md
        assert md.index("## Testing") < md.index("## Stats") < md.index("## Notes")

    def test_deterministic(self, sample_pr, sample_run_context):
        """같은 입력이면 같은 출력."""
        assert render_markdown(sample_pr, sample_run_context) == render_markdown(
            sample_pr, sample_run_context
        )

    def test_ends_with_single_newline(self, sample_pr, sample_run_context):
        md = render_markdown(sample_pr, sample_run_context)

        assert md.endswith("\n")
        assert not md.endswith("\n\n")

    def test_stats_hide_zero_counts(self, sample_pr, sample_run_context):
        """0인 Added/Modified/Deleted는 표시하지 않음."""
        md = render_markdown(sample_pr, sample_run_context)

        assert "- **Commits:** 3" in md
        assert "- **Files changed:** 3" in md
        assert "- **Added:** 1" in md
        assert "- **Modified:** 2" in md
        assert "Deleted" not in md

    def test_empty_changes_uses_default_bullet(self, sample_pr, sample_run_context):
        pr = sample_pr.model_copy(update={"changes": []})

        md = render_markdown(pr, sample_run_context)

        assert f"## Changes\n\n- {NO_CHANGES_BULLET}\n" in md

    def test_checklist_unchecked(self, sample_pr, sample_run_context):
        md = render_markdown(sample_pr, sample_run_context)

        checklist = md.split("## Checklist\n\n")[1].splitlines()
        assert checklist
        assert all(line.startswith("- [ ] ") for line in checklist)

    @pytest.mark.parametrize(
        "pr_type, emoji",
        [
            (PRType.FIX, "🐛"),
            (PRType.DOCS, "📝"),
            (PRType.CHORE, "🔧"),
            (PRType.REVERT, "⏪"),
        ],
    )
    def test_type_emoji(self, sample_pr, pr_type, emoji):
        pr = sample_pr.model_copy(update={"type": pr_type})
        ctx = RunContext(current_branch="a", base_branch="b")

        assert f"**Type:** {emoji} {pr_type.value}" in render_markdown(pr, ctx)

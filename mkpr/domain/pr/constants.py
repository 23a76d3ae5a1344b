"""PR 설명 생성 상수

타입 열거값, 동의어 매핑, 배지 이모지, 기본 제외 패턴, 체크리스트
"""

PR_TYPES = (
    "feature",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "chore",
    "ci",
    "revert",
)

DEFAULT_PR_TYPE = "chore"

TYPE_SYNONYMS: dict[str, str] = {
    "feat": "feature",
    "bug": "fix",
    "bugfix": "fix",
    "doc": "docs",
    "documentation": "docs",
    "tests": "test",
    "testing": "test",
    "performance": "perf",
    "maintenance": "chore",
    "build": "chore",
}

TYPE_EMOJI: dict[str, str] = {
    "feature": "✨",
    "fix": "🐛",
    "docs": "📝",
    "style": "💄",
    "refactor": "♻️",
    "perf": "⚡",
    "test": "✅",
    "chore": "🔧",
    "ci": "👷",
    "revert": "⏪",
}

DEFAULT_TYPE_EMOJI = "📦"

MAX_TITLE_LENGTH = 72
MAX_FALLBACK_SUMMARY_LENGTH = 500
FALLBACK_TITLE = "Update code"
FALLBACK_SUMMARY_LINES = 3

# lockfile, 번들/압축 산출물, 빌드 디렉토리, 소스맵, 생성 코드
BUILTIN_EXCLUDE_PATTERNS = frozenset(
    {
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "npm-shrinkwrap.json",
        "bun.lockb",
        "poetry.lock",
        "uv.lock",
        "Pipfile.lock",
        "composer.lock",
        "Gemfile.lock",
        "Cargo.lock",
        "go.sum",
        "*.min.js",
        "*.min.css",
        "*.bundle.js",
        "*.chunk.js",
        "*.map",
        "dist/*",
        "build/*",
        "out/*",
        ".next/*",
        "coverage/*",
        "node_modules/*",
        "*.generated.*",
        "*_generated.*",
        "*.pb.go",
        "*_pb2.py",
    }
)

# 컴팩션 기본값
MIN_LINES_PER_FILE = 10
CHARS_PER_LINE_ESTIMATE = 60
MIN_CHARS_PER_FILE = 500
# 생략 마커에 이름을 나열할 최대 파일 수와 예산 대비 비율
MAX_OMITTED_NAMES = 50
OMITTED_NAMES_BUDGET_DIVISOR = 4

PR_CHECKLIST = (
    "Code follows the project's style guidelines",
    "Self-review of the changes has been performed",
    "Tests have been added or updated where applicable",
    "Documentation has been updated where applicable",
)

FILE_STATUS_MAP: dict[str, str] = {
    "A": "added",
    "M": "modified",
    "D": "deleted",
    "R": "renamed",
}

MAX_FILENAME_LENGTH = 100

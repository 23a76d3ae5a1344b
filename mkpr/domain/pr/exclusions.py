"""diff 제외 패턴 매칭

패턴 종류:
    - 정확한 경로: "package-lock.json"
    - 접미사: "*.min.js"
    - 디렉토리 접두사: "dist/*"
    - 중간 와일드카드: "src/*.generated.ts"
    - 파일명: "yarn.lock" (트리 어디서든 매칭)

패턴 집합은 한 번만 컴파일해 ExclusionMatcher 스냅샷으로 재사용한다.
"""

import re
from functools import lru_cache
from typing import Callable, Iterable

from mkpr.domain.pr.constants import BUILTIN_EXCLUDE_PATTERNS

PathCheck = Callable[[str], bool]


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """'*'만 와일드카드로 해석하고 나머지는 리터럴로 이스케이프"""
    return re.compile(re.escape(pattern).replace(r"\*", ".*"))


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


class ExclusionMatcher:
    """컴파일된 제외 패턴 집합 (불변)"""

    __slots__ = ("_patterns", "_exact", "_suffixes", "_dir_prefixes", "_regexes", "_checks")

    def __init__(self, patterns: Iterable[str]):
        unique = tuple(dict.fromkeys(p for p in patterns if p))

        self._patterns = unique
        self._exact = frozenset(unique)
        self._suffixes = tuple(p[1:] for p in unique if p.startswith("*"))
        self._dir_prefixes = tuple(p[:-2] for p in unique if p.endswith("/*"))
        self._regexes = tuple(_glob_to_regex(p) for p in unique if "*" in p)

        # 순서대로 평가, 첫 매칭에서 종료
        self._checks: tuple[PathCheck, ...] = (
            self._match_exact,
            self._match_suffix,
            self._match_dir_prefix,
            self._match_glob,
            self._match_basename,
        )

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"ExclusionMatcher(patterns={len(self._patterns)})"

    def matches(self, path: str) -> bool:
        return any(check(path) for check in self._checks)

    __call__ = matches

    def _match_exact(self, path: str) -> bool:
        return path in self._exact

    def _match_suffix(self, path: str) -> bool:
        return bool(self._suffixes) and path.endswith(self._suffixes)

    def _match_dir_prefix(self, path: str) -> bool:
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self._dir_prefixes)

    def _match_glob(self, path: str) -> bool:
        return any(regex.fullmatch(path) for regex in self._regexes)

    def _match_basename(self, path: str) -> bool:
        return _basename(path) in self._exact


@lru_cache(maxsize=32)
def _compiled(patterns: tuple[str, ...]) -> ExclusionMatcher:
    return ExclusionMatcher(patterns)


def matches(path: str, patterns: Iterable[str]) -> bool:
    """경로가 패턴 중 하나와 매칭되는지 여부

    같은 패턴 집합은 캐시된 매처를 재사용한다.
    """
    if isinstance(patterns, ExclusionMatcher):
        return patterns.matches(path)
    return _compiled(tuple(patterns)).matches(path)


def build_matcher(user_patterns: Iterable[str] = ()) -> ExclusionMatcher:
    """사용자 패턴과 기본 제외 패턴을 합친 매처 생성"""
    merged = [p.strip() for p in user_patterns if p and p.strip()]
    merged.extend(sorted(BUILTIN_EXCLUDE_PATTERNS))
    return ExclusionMatcher(merged)

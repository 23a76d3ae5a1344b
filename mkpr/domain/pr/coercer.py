"""모델 응답 강제 변환

모델의 원문 응답에서 JSON 객체를 추출해 StructuredPR로 변환한다.
파싱이나 검증에 실패하면 원문에서 휴리스틱으로 추출한다.
어떤 입력이든 예외 없이 결과를 반환한다.
"""

import json
import re
from typing import Any

from pydantic import ValidationError

from mkpr.core.logging import get_logger
from mkpr.domain.pr.constants import (
    DEFAULT_PR_TYPE,
    FALLBACK_SUMMARY_LINES,
    FALLBACK_TITLE,
    MAX_FALLBACK_SUMMARY_LENGTH,
    MAX_TITLE_LENGTH,
    PR_TYPES,
    TYPE_SYNONYMS,
)
from mkpr.domain.pr.schemas import CoercionResult, FallbackUsed, Parsed, StructuredPR

logger = get_logger(__name__)

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")
_BULLET_PREFIXES = ("-", "*")
_REQUIRED_FIELDS = ("title", "type", "summary")


class SchemaMismatch(ValueError):
    """필수 필드 누락 또는 타입 불일치"""


def strip_code_fences(text: str) -> str:
    """앞뒤 ``` / ```json 펜스 제거"""
    text = _LEADING_FENCE.sub("", text, count=1)
    return _TRAILING_FENCE.sub("", text, count=1).strip()


def extract_json_span(text: str) -> str:
    """첫 '{'부터 마지막 '}'까지 잘라 주변 설명문 제거"""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise SchemaMismatch("JSON 객체를 찾을 수 없음")
    return text[start : end + 1]


def normalize_type(value: str) -> str:
    """정규 타입 또는 동의어면 정규 타입, 그 외는 chore"""
    key = value.strip().lower()
    if key in PR_TYPES:
        return key
    return TYPE_SYNONYMS.get(key, DEFAULT_PR_TYPE)


def coerce_string_list(value: Any) -> list[str]:
    """문자열 배열로 강제 변환. 단일 문자열은 한 원소 배열로 감싼다"""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _optional_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _validate(data: Any) -> StructuredPR:
    if not isinstance(data, dict):
        raise SchemaMismatch(f"최상위 값이 객체가 아님: {type(data).__name__}")

    for name in _REQUIRED_FIELDS:
        if not isinstance(data.get(name), str):
            raise SchemaMismatch(f"필수 필드 누락 또는 타입 오류: {name}")

    title = data["title"].strip()
    if not title:
        raise SchemaMismatch("title이 비어 있음")

    return StructuredPR(
        title=title[:MAX_TITLE_LENGTH],
        type=normalize_type(data["type"]),
        summary=data["summary"].strip(),
        changes=coerce_string_list(data.get("changes")),
        breaking_changes=coerce_string_list(data.get("breaking_changes")),
        testing=_optional_text(data.get("testing")),
        notes=_optional_text(data.get("notes")),
    )


def extract_fallback(text: str) -> StructuredPR:
    """JSON이 아닌 응답에서 휴리스틱으로 필드 추출"""
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    title = lines[0].lstrip("#").strip() if lines else ""
    summary = " ".join(lines[:FALLBACK_SUMMARY_LINES])
    changes = [
        line[1:].strip()
        for line in lines
        # "---", "***" 같은 구분선은 제외
        if line.startswith(_BULLET_PREFIXES) and line.strip("-*_ ")
    ]

    return StructuredPR(
        title=(title or FALLBACK_TITLE)[:MAX_TITLE_LENGTH],
        type=DEFAULT_PR_TYPE,
        summary=summary[:MAX_FALLBACK_SUMMARY_LENGTH],
        changes=changes,
    )


def coerce_response(raw: str | None) -> CoercionResult:
    """모델 원문 응답을 StructuredPR로 변환

    Args:
        raw: 모델 응답 원문

    Returns:
        Parsed 또는 FallbackUsed. fallback_used로 복구 여부 확인 가능
    """
    text = strip_code_fences(raw if isinstance(raw, str) else "")

    try:
        data = json.loads(extract_json_span(text))
        pr = _validate(data)
    except (ValueError, TypeError, RecursionError) as e:
        # json.JSONDecodeError, pydantic ValidationError 모두 ValueError 하위
        reason = _describe(e)
        logger.warning("모델 응답 검증 실패, 휴리스틱 추출 사용", reason=reason)
        return FallbackUsed(pr=extract_fallback(text), reason=reason)

    logger.debug("모델 응답 파싱 완료", type=pr.type.value, changes=len(pr.changes))
    return Parsed(pr=pr)


def _describe(error: Exception) -> str:
    if isinstance(error, json.JSONDecodeError):
        return f"JSON 파싱 실패: {error.msg}"
    if isinstance(error, ValidationError):
        return f"스키마 검증 실패: {error.error_count()}건"
    return str(error) or type(error).__name__

"""
요청 및 생성 시도 컨텍스트 관리 모듈

contextvars로 request_id와 attempt_id를 관리한다.
attempt_id는 PR 설명 생성 시도(재생성 포함)마다 새로 발급된다.
"""

import uuid
from contextvars import ContextVar

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
attempt_id_var: ContextVar[str | None] = ContextVar("attempt_id", default=None)


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


def get_request_id() -> str | None:
    """현재 컨텍스트의 request_id 반환"""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """
    request_id 설정

    인자가 없으면 8자리 UUID 자동 생성
    """
    if request_id is None:
        request_id = _short_id()
    request_id_var.set(request_id)
    return request_id


def get_attempt_id() -> str | None:
    """현재 컨텍스트의 attempt_id 반환"""
    return attempt_id_var.get()


def new_attempt_id() -> str:
    """새 생성 시도 id 발급 후 컨텍스트에 설정"""
    attempt_id = _short_id()
    attempt_id_var.set(attempt_id)
    return attempt_id


def clear_context() -> None:
    """모든 컨텍스트 변수 초기화"""
    request_id_var.set(None)
    attempt_id_var.set(None)

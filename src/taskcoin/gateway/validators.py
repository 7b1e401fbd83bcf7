"""入口输入校验 -- 纯函数谓词链

每个检查返回违反约束时的错误描述，满足时返回 None；
first_violation 按顺序执行检查并返回第一条违反的约束。
"""

from collections.abc import Callable, Iterable
from urllib.parse import urlparse

from taskcoin.core.config import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)

Check = Callable[[str], str | None]


def min_length(limit: int, field: str) -> Check:
    def check(value: str) -> str | None:
        if len(value) < limit:
            return f"{field} must be at least {limit} characters"
        return None

    return check


def max_length(limit: int, field: str) -> Check:
    def check(value: str) -> str | None:
        if len(value) > limit:
            return f"{field} must be at most {limit} characters"
        return None

    return check


def not_blank(field: str) -> Check:
    def check(value: str) -> str | None:
        if not value.strip():
            return f"{field} must not be blank"
        return None

    return check


def is_http_url(value: str) -> str | None:
    """链接必须是带主机名的 http(s) URL"""
    try:
        parsed = urlparse(value)
    except ValueError:
        return "link must be a valid URL"
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return "link must be a valid URL"
    if any(ch.isspace() for ch in value):
        return "link must be a valid URL"
    return None


def first_violation(value: str, checks: Iterable[Check]) -> str | None:
    """返回第一条违反的约束，全部满足时返回 None"""
    for check in checks:
        error = check(value)
        if error is not None:
            return error
    return None


USERNAME_CHECKS: tuple[Check, ...] = (
    not_blank("username"),
    min_length(USERNAME_MIN_LENGTH, "username"),
    max_length(USERNAME_MAX_LENGTH, "username"),
)

PASSWORD_CHECKS: tuple[Check, ...] = (
    min_length(PASSWORD_MIN_LENGTH, "password"),
)

LINK_CHECKS: tuple[Check, ...] = (
    not_blank("link"),
    is_http_url,
)


def ensure_valid(value: str, checks: Iterable[Check]) -> str:
    """pydantic field_validator 适配：违反约束时抛出 ValueError"""
    error = first_violation(value, checks)
    if error is not None:
        raise ValueError(error)
    return value

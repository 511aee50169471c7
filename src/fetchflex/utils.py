"""日志脱敏工具

客户端只在日志中输出三样东西：组合后的请求头、最终 URL、调用方传入的参数。
三者都是扁平的键值结构，这里按键名（不区分大小写）把敏感值替换为 mask
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import unquote, urlsplit, urlunsplit

MASK = "***"

# 组合后的请求头键名都是小写
DEFAULT_SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "x-api-key",
        "x-auth-token",
        "ntag",
    }
)

DEFAULT_SENSITIVE_PARAMS = frozenset(
    {
        "token",
        "password",
        "pwd",
        "secret",
        "api_key",
        "access_token",
        "session",
    }
)


def _lowered(keys: Iterable[str]) -> frozenset[str]:
    return frozenset(k.lower() for k in keys)


def mask_values(data: Mapping[str, Any], sensitive_keys: Iterable[str], mask: str = MASK) -> dict[str, Any]:
    """返回新字典，键名命中 sensitive_keys 的值替换为 mask，只处理第一层"""
    lowered = _lowered(sensitive_keys)
    return {key: mask if key.lower() in lowered else value for key, value in data.items()}


def sanitize_headers(headers: Mapping[str, str], sensitive_keys: Iterable[str] | None = None, mask: str = MASK) -> dict[str, str]:
    """
    脱敏请求头，默认隐藏 ntag 会话标签和常见认证头

    示例:
        >>> sanitize_headers({"ntag": "abc123", "accept": "application/json"})
        {'ntag': '***', 'accept': 'application/json'}
    """
    return mask_values(headers, DEFAULT_SENSITIVE_HEADERS if sensitive_keys is None else sensitive_keys, mask)


def sanitize_params(params: Mapping[str, Any], sensitive_keys: Iterable[str] | None = None, mask: str = MASK) -> dict[str, Any]:
    """脱敏调用方参数，默认同时使用敏感请求头和敏感参数两组键名"""
    if sensitive_keys is None:
        sensitive_keys = DEFAULT_SENSITIVE_HEADERS | DEFAULT_SENSITIVE_PARAMS
    return mask_values(params, sensitive_keys, mask)


def sanitize_url(url: str, sensitive_params: Iterable[str] | None = None, mask: str = MASK) -> str:
    """
    脱敏 URL 查询字符串中的敏感参数

    只替换命中键的值，其余 key=value 片段保持原有编码和顺序不变；
    键名先做百分号解码再比较，因此 %74oken 也会命中 token

    示例:
        >>> sanitize_url("/items?token=abc123&page=1")
        '/items?token=***&page=1'
    """
    parts = urlsplit(url)
    if not parts.query:
        return url

    lowered = _lowered(DEFAULT_SENSITIVE_PARAMS if sensitive_params is None else sensitive_params)
    pairs = parts.query.split("&")
    masked = []
    for pair in pairs:
        key = pair.split("=", 1)[0]
        masked.append(f"{key}={mask}" if unquote(key).lower() in lowered else pair)

    if masked == pairs:
        return url
    return urlunsplit(parts._replace(query="&".join(masked)))

"""
请求头合并模块

合并动词默认请求头、会话标签和调用方请求头，优先级由动词策略决定:
    - POST/PUT/DELETE: {ntag} < 默认请求头 < 调用方请求头
    - GET: 调用方请求头 < 默认请求头，且不附加 ntag
"""

from __future__ import annotations

from collections.abc import Mapping

from fetchflex.constants import HEADER_NTAG
from fetchflex.session import SessionContext
from fetchflex.verbs import Verb


def lower_keys(headers: Mapping[str, str] | None) -> dict[str, str]:
    """将请求头名称统一转为小写，值保持不变"""
    return {key.lower(): value for key, value in (headers or {}).items()}


def compose_headers(
    verb: Verb,
    caller_headers: Mapping[str, str] | None,
    session: SessionContext,
) -> dict[str, str]:
    """
    组合最终发送的请求头

    参数:
        verb: 请求动词
        caller_headers: 调用方传入的请求头（名称大小写不敏感）
        session: 提供 ntag 的会话上下文

    返回:
        名称均为小写的请求头字典
    """
    policy = verb.policy
    sanitised = lower_keys(caller_headers)

    composed: dict[str, str] = {}
    if policy.sends_session_tag:
        composed[HEADER_NTAG] = session.ntag

    if policy.caller_headers_win:
        composed.update(policy.default_headers)
        composed.update(sanitised)
    else:
        composed.update(sanitised)
        composed.update(policy.default_headers)
    return composed

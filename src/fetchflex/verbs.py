"""
HTTP 动词策略模块

每个动词携带自己的策略数据（是否带查询、是否带请求体、默认请求头、
是否附加会话标签、调用方请求头是否最终生效），避免在各处按字符串分支
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from fetchflex.constants import (
    BODY_DEFAULT_HEADERS,
    DEFAULT_HEADERS,
    HTTP_METHOD_DELETE,
    HTTP_METHOD_GET,
    HTTP_METHOD_POST,
    HTTP_METHOD_PUT,
)


@dataclass(frozen=True)
class VerbPolicy:
    """
    动词策略

    属性:
        method: 发送给传输层的 HTTP 方法名
        has_query: 剩余参数是否放入查询字符串
        has_body: 剩余参数是否放入请求体
        default_headers: 该动词的默认请求头
        sends_session_tag: 是否附加 ntag 会话标签
        caller_headers_win: 合并时调用方请求头是否覆盖默认请求头。
            GET 为 False：默认请求头最后合并，调用方无法覆盖 accept
    """

    method: str
    has_query: bool
    has_body: bool
    default_headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    sends_session_tag: bool = False
    caller_headers_win: bool = True


class Verb(Enum):
    """受支持的 HTTP 动词"""

    GET = VerbPolicy(
        method=HTTP_METHOD_GET,
        has_query=True,
        has_body=False,
        default_headers=MappingProxyType(DEFAULT_HEADERS),
        sends_session_tag=False,
        caller_headers_win=False,
    )
    POST = VerbPolicy(
        method=HTTP_METHOD_POST,
        has_query=False,
        has_body=True,
        default_headers=MappingProxyType(BODY_DEFAULT_HEADERS),
        sends_session_tag=True,
    )
    PUT = VerbPolicy(
        method=HTTP_METHOD_PUT,
        has_query=False,
        has_body=True,
        default_headers=MappingProxyType(BODY_DEFAULT_HEADERS),
        sends_session_tag=True,
    )
    DELETE = VerbPolicy(
        method=HTTP_METHOD_DELETE,
        has_query=True,
        has_body=False,
        default_headers=MappingProxyType(DEFAULT_HEADERS),
        sends_session_tag=True,
    )

    @property
    def policy(self) -> VerbPolicy:
        return self.value

    @property
    def method(self) -> str:
        return self.value.method

    @classmethod
    def from_method(cls, method: str) -> Verb:
        """
        根据方法名（不区分大小写）查找动词，"del" 视为 DELETE

        异常:
            ValueError: 不支持的方法名
        """
        name = method.upper()
        if name == "DEL":
            return cls.DELETE
        for verb in cls:
            if verb.method == name:
                return verb
        raise ValueError(f"Unsupported HTTP method: {name}")

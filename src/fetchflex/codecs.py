"""
编解码器模块

请求体和响应体的编解码方式由内容类型唯一确定，只有三种:
    - json: 请求体序列化为 JSON；响应体按 JSON 解析
    - urlencoded: 请求体编码为 key=value&key=value
    - text: 响应体按文本读取
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from fetchflex.constants import HEADER_CONTENT_TYPE, MEDIA_TYPE_JSON
from fetchflex.encoder import to_json
from fetchflex.url import build_query

logger = logging.getLogger(__name__)


class Codec(Enum):
    JSON = "json"
    URLENCODED = "urlencoded"
    TEXT = "text"

    def encode_body(self, params: Mapping[str, Any]) -> str:
        """
        将剩余参数编码为请求体

        异常:
            ValueError: TEXT 编解码器不支持编码请求体
        """
        if self is Codec.JSON:
            return to_json(dict(params))
        if self is Codec.URLENCODED:
            return "&".join(build_query(params))
        raise ValueError(f"Codec {self.value} cannot encode a request body")

    async def decode_response(self, response) -> Any:
        """
        读取并解码响应体

        参数:
            response: 传输层响应对象，需提供 json() 和 text() 协程方法

        返回:
            JSON 解析结果或文本

        异常:
            ValueError: URLENCODED 编解码器不支持解码响应
        """
        if self is Codec.JSON:
            return await response.json()
        if self is Codec.TEXT:
            return await response.text()
        raise ValueError(f"Codec {self.value} cannot decode a response body")


def is_json(content_type: str | None) -> bool:
    """判断内容类型是否为 JSON（不区分大小写的包含匹配）"""
    return bool(content_type) and MEDIA_TYPE_JSON in content_type.lower()


def select_body_codec(content_type: str | None) -> Codec:
    """根据请求的内容类型选择请求体编解码器：JSON 或 urlencoded"""
    return Codec.JSON if is_json(content_type) else Codec.URLENCODED


def select_response_codec(content_type: str | None) -> Codec:
    """根据响应的内容类型选择响应体编解码器：JSON 或文本"""
    return Codec.JSON if is_json(content_type) else Codec.TEXT


def find_content_type(headers: Mapping[str, str]) -> str | None:
    """
    在已小写化的请求头中查找内容类型

    返回第一个名称包含 "content-type" 的请求头的值，没有时返回 None
    """
    for name, value in headers.items():
        if HEADER_CONTENT_TYPE in name.lower():
            logger.debug(f"Request content type resolved from header {name!r}: {value}")
            return value
    return None

"""
响应归一化模块

把传输层响应统一转换为 {data, status, response} 结构:
    1. 捕获 ntag 响应头并写入会话上下文（成功与错误响应都会捕获，且只捕获一次）
    2. 204 直接返回，不读取响应体
    3. 按响应内容类型解码响应体（JSON 或文本）
    4. 状态码 < 400 返回结果，>= 400 抛出 HttpError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fetchflex.codecs import select_response_codec
from fetchflex.constants import HEADER_CONTENT_TYPE, HEADER_NTAG, HTTP_BAD_REQUEST, HTTP_NO_CONTENT
from fetchflex.exceptions import DecodeError, HttpError
from fetchflex.session import SessionContext
from fetchflex.transport import TransportResponse

logger = logging.getLogger(__name__)


@dataclass
class NormalizedResult:
    """
    成功请求的归一化结果

    属性:
        status: HTTP 状态码
        response: 传输层响应对象
        data: 解码后的响应体，204 时为 None
    """

    status: int
    response: Any
    data: Any = None

    @property
    def has_content(self) -> bool:
        return self.status != HTTP_NO_CONTENT

    def to_dict(self) -> dict[str, Any]:
        """转换为字典，204 响应不包含 data 字段"""
        result = {"response": self.response, "status": self.status}
        if self.has_content:
            result["data"] = self.data
        return result


class ResponseNormalizer:
    """
    响应归一化器

    参数:
        session: 接收 ntag 的会话上下文
    """

    def __init__(self, session: SessionContext):
        self.session = session

    def capture_session_tag(self, response: TransportResponse) -> bool:
        """响应头中存在 ntag 时覆盖会话标签，返回是否发生了覆盖"""
        return self.session.update(response.headers.get(HEADER_NTAG))

    async def decode(self, response: TransportResponse) -> Any:
        """
        按响应内容类型解码响应体

        异常:
            DecodeError: 响应体无法按内容类型解析
        """
        content_type = response.headers.get(HEADER_CONTENT_TYPE)
        codec = select_response_codec(content_type)
        logger.debug(f"Decoding {response.status} response body as {codec.value}")
        try:
            return await codec.decode_response(response)
        except ValueError as e:
            raise DecodeError(
                f"Failed to decode response body as {codec.value}: {e}",
                response=response,
                status=response.status,
            ) from e

    async def normalize(self, response: TransportResponse) -> NormalizedResult:
        """
        归一化单个响应

        参数:
            response: 传输层响应对象

        返回:
            NormalizedResult 实例

        异常:
            HttpError: 状态码 >= 400，data 中为解码后的响应体
            DecodeError: 响应体解码失败
        """
        self.capture_session_tag(response)
        status = response.status

        if status >= HTTP_BAD_REQUEST:
            data = await self.decode(response)
            raise HttpError(f"HTTP {status}", response=response, data=data, status=status)

        if status == HTTP_NO_CONTENT:
            return NormalizedResult(status=status, response=response)

        data = await self.decode(response)
        return NormalizedResult(status=status, response=response, data=data)

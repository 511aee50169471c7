"""
HTTP 客户端异常模块

定义所有请求构建和响应归一化相关的异常类，提供统一的错误处理机制。

分两类:
    - 构造阶段异常（InvalidUrlError, MissingParameterError）：调用动词方法时同步抛出，不会发起网络请求
    - 传输阶段异常（HttpError, DecodeError, TransportError）：在 await 结果时抛出，
      均带有 response、data、status 三个属性，与成功结果的结构保持一致
"""

from __future__ import annotations

from typing import Any


class FetchClientError(Exception):
    """
    客户端异常基类

    所有自定义异常的基类，用于统一捕获和处理客户端相关错误
    """


class InvalidUrlError(FetchClientError):
    """
    URL 无效异常

    当传入的 url 为空或假值时抛出
    """

    def __init__(self, message: str = "Invalid URL"):
        super().__init__(message)


class MissingParameterError(FetchClientError):
    """
    路径参数缺失异常

    当 URL 模板中的占位符在参数字典中没有对应的值时抛出

    参数:
        name: 缺失的占位符名称

    属性:
        name: 缺失的占位符名称
    """

    def __init__(self, name: str):
        super().__init__(f"unknown parameter {name}")
        self.name = name


class ResponseError(FetchClientError):
    """
    传输阶段异常基类

    属性:
        response: 原始响应对象（没有响应时为 None）
        data: 已解码的响应体（没有时为 None）
        status: HTTP 状态码（没有响应时为 None）
    """

    def __init__(
        self,
        message: str,
        response: Any = None,
        data: Any = None,
        status: int | None = None,
    ):
        super().__init__(message)
        self.response = response
        self.data = data
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        """返回与成功结果一致的 {response, data, status} 结构"""
        return {"response": self.response, "data": self.data, "status": self.status}


class HttpError(ResponseError):
    """
    HTTP 错误响应异常

    当服务器返回 4xx 或 5xx 状态码时抛出，响应体已按内容类型解码后放入 data
    """


class DecodeError(ResponseError):
    """
    响应体解码异常

    当响应体无法按内容类型对应的解码器解析时抛出（如 JSON 格式错误）
    """


class TransportError(ResponseError):
    """
    传输层异常

    当传输层在拿到响应之前失败时抛出（连接失败、DNS 解析失败、超时等）
    """

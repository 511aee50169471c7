"""
传输层模块

定义客户端与底层 fetch 能力之间的契约，并提供基于 requests.Session 的默认实现:
    - BaseTransport: fetch(url, options) -> TransportResponse 协程接口
    - TransportResponse: 暴露 status、headers.get()、json()、text()
    - RequestsTransport: 默认传输层，Session 持久化 cookie，对应 credentials="include"
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

from fetchflex.constants import CREDENTIALS_INCLUDE
from fetchflex.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchOptions:
    """
    传给传输层的请求选项

    属性:
        method: HTTP 方法名（大写）
        headers: 已组合好的请求头
        body: 请求体字符串，没有请求体时为 None
        credentials: 凭据策略，固定为 "include"
    """

    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None
    credentials: str = CREDENTIALS_INCLUDE


class TransportResponse(ABC):
    """传输层响应接口"""

    status: int

    @property
    @abstractmethod
    def headers(self) -> Mapping[str, str]:
        """响应头，get(name) 需大小写不敏感"""

    @abstractmethod
    async def json(self) -> Any:
        """将响应体解析为 JSON，格式错误时抛出 ValueError"""

    @abstractmethod
    async def text(self) -> str:
        """以文本形式返回响应体"""


class BaseTransport(ABC):
    """传输层基类，子类实现具体的网络请求方式"""

    @abstractmethod
    async def fetch(self, url: str, options: FetchOptions) -> TransportResponse:
        """
        发送请求并返回响应

        参数:
            url: 完整的请求 URL
            options: 请求选项

        返回:
            TransportResponse 实例

        异常:
            TransportError: 在拿到响应之前失败
        """

    def close(self) -> None:
        """释放传输层资源，默认无操作"""


class RequestsResponse(TransportResponse):
    """
    requests.Response 的适配器

    参数:
        response: 已完整读取响应体的 requests.Response 对象
    """

    def __init__(self, response: requests.Response):
        self.raw = response
        self.status = response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        # requests 的 CaseInsensitiveDict 已经是大小写不敏感的
        return self.raw.headers

    @property
    def url(self) -> str:
        return self.raw.url

    async def json(self) -> Any:
        return self.raw.json()

    async def text(self) -> str:
        return self.raw.text

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} [{self.status}]>"


class RequestsTransport(BaseTransport):
    """
    基于 requests.Session 的默认传输层

    阻塞的 Session.request 调用通过 asyncio.to_thread 执行，不阻塞事件循环。
    Session 在多次请求之间保留 cookie。

    参数:
        session: 复用的 requests.Session，None 时新建
        verify: SSL 证书验证开关
        timeout: 请求超时时间（秒），None 表示不设超时
        **request_kwargs: 其他传递给 Session.request 的参数（如 proxies、cert）
    """

    verify: bool = True
    timeout: float | None = None

    def __init__(
        self,
        session: requests.Session | None = None,
        verify: bool | None = None,
        timeout: float | None = None,
        **request_kwargs,
    ):
        self.session = session or requests.Session()
        self.verify = verify if verify is not None else self.verify
        self.timeout = timeout if timeout is not None else self.timeout
        self.request_kwargs = request_kwargs

    def _send(self, url: str, options: FetchOptions) -> requests.Response:
        body = options.body.encode("utf-8") if options.body is not None else None
        return self.session.request(
            **{
                **self.request_kwargs,
                "method": options.method,
                "url": url,
                "headers": dict(options.headers),
                "data": body,
                "timeout": self.timeout,
                "verify": self.verify,
            }
        )

    async def fetch(self, url: str, options: FetchOptions) -> RequestsResponse:
        try:
            response = await asyncio.to_thread(self._send, url, options)
        except requests.exceptions.Timeout as e:
            # 情况1: 超时异常（仅在显式配置了 timeout 时出现）
            raise TransportError(f"Request to {url} timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            # 情况2: 其他网络异常（连接失败、DNS 解析失败等）
            raise TransportError(f"Request to {url} failed: {e}") from e
        return RequestsResponse(response)

    def close(self) -> None:
        if self.session:
            self.session.close()
            logger.info("Transport session closed")

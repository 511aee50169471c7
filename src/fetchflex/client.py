"""HTTP 客户端核心模块

在 fetch 风格的传输层之上构建请求并归一化响应，支持：
- URL 模板占位符替换（{name}）
- 剩余参数按动词自动放入查询字符串或请求体
- JSON / urlencoded 请求体，JSON / 文本响应体
- ntag 会话标签在请求之间自动传递
- 请求钩子与脱敏日志

构造阶段（URL 校验、路径参数替换、请求头和请求体构建）在调用动词方法时同步完成，
错误立即抛出；网络请求和响应归一化在 await 返回值时执行。
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from fetchflex.codecs import find_content_type, select_body_codec
from fetchflex.exceptions import FetchClientError, InvalidUrlError
from fetchflex.headers import compose_headers
from fetchflex.normalizer import NormalizedResult, ResponseNormalizer
from fetchflex.session import SessionContext
from fetchflex.transport import BaseTransport, FetchOptions, RequestsTransport, TransportResponse
from fetchflex.url import build_query, build_url, partition_params, resolve_path
from fetchflex.utils import (
    DEFAULT_SENSITIVE_HEADERS,
    DEFAULT_SENSITIVE_PARAMS,
    sanitize_headers,
    sanitize_params,
    sanitize_url,
)
from fetchflex.verbs import Verb

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestSpec:
    """
    单次调用的请求描述，每次调用重新构建

    属性:
        url_template: 可包含 {name} 占位符的 URL 模板
        verb: 请求动词
        params: 调用方传入的全部参数
        headers: 调用方传入的请求头
    """

    url_template: str
    verb: Verb
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PreparedRequest:
    """已构建完成、可以交给传输层的请求"""

    url: str
    verb: Verb
    headers: Mapping[str, str]
    body: str | None = None

    @property
    def method(self) -> str:
        return self.verb.method

    @property
    def options(self) -> FetchOptions:
        return FetchOptions(method=self.method, headers=dict(self.headers), body=self.body)


class FetchClient:
    """
    HTTP 客户端

    类属性:
        base_url: 相对 URL 的前缀，默认为空（URL 原样发送）
        enable_sanitization: 日志输出前是否脱敏
        sensitive_headers: 日志中需要脱敏的请求头名称
        sensitive_params: 日志中需要脱敏的 URL 参数名称
        transport_class: 传输层类或实例
        session_class: 会话上下文类或实例

    使用示例:
        >>> client = FetchClient(base_url="https://api.example.com")
        >>> result = await client.get("/items/{id}", {"id": 5, "sort": "name"})
        >>> result.data
    """

    # ========== 基础配置 ==========
    # 相对 URL 的前缀，所有不带协议的 URL 都会拼接在其后
    base_url: str = ""

    # ========== 安全性配置 ==========
    enable_sanitization: bool = True
    sensitive_headers: frozenset[str] = DEFAULT_SENSITIVE_HEADERS
    sensitive_params: frozenset[str] = DEFAULT_SENSITIVE_PARAMS

    # ========== 可插拔组件配置 ==========
    # 传输层类或实例，负责真正的网络请求，默认基于 requests.Session
    transport_class: type[BaseTransport] | BaseTransport = RequestsTransport

    # 会话上下文类或实例，保存 ntag；传入同一个实例可以让多个客户端共享标签
    session_class: type[SessionContext] | SessionContext = SessionContext

    def __init__(
        self,
        base_url: str | None = None,
        transport: BaseTransport | type[BaseTransport] | None = None,
        session: SessionContext | type[SessionContext] | None = None,
        enable_sanitization: bool | None = None,
    ):
        """
        初始化客户端实例

        参数:
            base_url: 相对 URL 的前缀（覆盖类属性）
            transport: 传输层类或实例
            session: 会话上下文类或实例
            enable_sanitization: 是否启用日志脱敏

        异常:
            FetchClientError: 组件类型无效或实例化失败
        """
        base_url = base_url if base_url is not None else self.base_url
        self.base_url = base_url.rstrip("/")
        self.enable_sanitization = (
            enable_sanitization if enable_sanitization is not None else self.enable_sanitization
        )

        self.transport = self._resolve_component(transport, "transport_class", BaseTransport)
        self.session = self._resolve_component(session, "session_class", SessionContext)
        self.normalizer = ResponseNormalizer(self.session)

        # 用于存储注册的钩子函数，支持请求前后的自定义处理
        self._hooks: dict[str, list[Callable]] = {
            "before_request": [],
            "after_request": [],
            "on_request_error": [],
        }

    def _resolve_component(self, component, class_attr_name: str, base_class: type):
        """
        统一的组件解析方法

        参数:
            component: 传入的组件配置（类或实例）
            class_attr_name: 类属性名称
            base_class: 基类类型

        返回:
            组件实例
        """
        source = component if component is not None else getattr(self, class_attr_name)

        if isinstance(source, type) and issubclass(source, base_class):
            try:
                return source()
            except Exception as e:
                logger.error(f"Failed to instantiate {source.__name__}: {e}")
                raise FetchClientError(f"{class_attr_name} instantiation failed: {e}") from e

        if isinstance(source, base_class):
            return source

        raise FetchClientError(f"{class_attr_name} must be a {base_class.__name__} subclass or instance")

    # ========== 钩子机制 ==========

    def register_hook(self, hook_name: str, callback: Callable) -> None:
        """
        注册钩子函数

        参数:
            hook_name: 钩子名称，可选值："before_request", "after_request", "on_request_error"
            callback: 钩子回调函数

        异常:
            ValueError: 当钩子名称不合法时抛出
        """
        if hook_name not in self._hooks:
            raise ValueError(f"Invalid hook name: {hook_name}. Must be one of: {list(self._hooks.keys())}")
        self._hooks[hook_name].append(callback)
        logger.debug(f"Registered hook: {hook_name}")

    def before_request(self, request_id: str, prepared: PreparedRequest) -> PreparedRequest:
        """
        请求发送前的钩子方法，回调签名 (client, request_id, prepared) -> PreparedRequest

        子类可以重写此方法，例如添加签名请求头
        """
        for hook in self._hooks["before_request"]:
            try:
                prepared = hook(self, request_id, prepared)
            except Exception:
                logger.exception(f"[{request_id}] before_request hook failed")
        return prepared

    def after_request(self, request_id: str, response: TransportResponse) -> TransportResponse:
        """请求收到响应后、归一化之前的钩子方法，回调签名 (client, request_id, response) -> response"""
        for hook in self._hooks["after_request"]:
            try:
                response = hook(self, request_id, response)
            except Exception:
                logger.exception(f"[{request_id}] after_request hook failed")
        return response

    def on_request_error(self, request_id: str, error: Exception) -> None:
        """请求失败时的钩子方法，回调签名 (client, request_id, error)"""
        for hook in self._hooks["on_request_error"]:
            try:
                hook(self, request_id, error)
            except Exception:
                logger.exception(f"[{request_id}] on_request_error hook failed")

    # ========== 请求构建 ==========

    def _build_full_url(self, url: str) -> str:
        """为相对 URL 拼接 base_url"""
        if not self.base_url or "://" in url.split("?", 1)[0]:
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    def prepare(self, spec: RequestSpec) -> PreparedRequest:
        """
        同步构建请求

        参数:
            spec: 请求描述

        返回:
            PreparedRequest 实例

        执行步骤:
            1. 校验 URL 非空
            2. 划分路径参数和剩余参数
            3. 用全部参数替换路径占位符
            4. GET/DELETE 用剩余参数构建查询字符串
            5. 组合请求头
            6. POST/PUT 用剩余参数构建请求体，编码方式由 content-type 决定
            7. 拼接最终 URL

        异常:
            InvalidUrlError: URL 为空
            MissingParameterError: 占位符缺少对应参数
        """
        if not spec.url_template:
            raise InvalidUrlError()

        policy = spec.verb.policy
        _, remaining = partition_params(spec.url_template, spec.params)
        path = resolve_path(spec.url_template, spec.params)

        query = build_query(remaining) if policy.has_query else None
        headers = compose_headers(spec.verb, spec.headers, self.session)

        body = None
        if policy.has_body:
            codec = select_body_codec(find_content_type(headers))
            body = codec.encode_body(remaining)

        url = self._build_full_url(build_url(path, query))
        return PreparedRequest(url=url, verb=spec.verb, headers=headers, body=body)

    def generate_request_id(self) -> str:
        """生成全局唯一的请求 ID"""
        timestamp = int(time.time() * 1000)  # 毫秒级时间戳
        short_uuid = uuid.uuid4().hex[:8]
        return f"REQ-{timestamp}-{short_uuid}"

    def _log_request(self, request_id: str, prepared: PreparedRequest, params: Mapping[str, Any]) -> None:
        if self.enable_sanitization:
            safe_url = sanitize_url(prepared.url, self.sensitive_params)
        else:
            safe_url = prepared.url
        logger.info(f"[{request_id}] Starting {prepared.method} request to {safe_url}")

        if logger.isEnabledFor(logging.DEBUG):
            if self.enable_sanitization:
                safe_headers = sanitize_headers(prepared.headers, self.sensitive_headers)
                safe_params = sanitize_params(params, self.sensitive_headers | self.sensitive_params)
            else:
                safe_headers, safe_params = dict(prepared.headers), dict(params)
            logger.debug(f"[{request_id}] Request headers: {safe_headers}, params: {safe_params}")

    async def send(self, prepared: PreparedRequest, params: Mapping[str, Any] | None = None) -> NormalizedResult:
        """
        发送已构建的请求并归一化响应

        参数:
            prepared: 已构建的请求
            params: 原始参数，仅用于调试日志

        返回:
            NormalizedResult 实例

        异常:
            HttpError: 状态码 >= 400
            DecodeError: 响应体解码失败
            TransportError: 传输层在拿到响应之前失败

        传输层抛出的任何异常都会记录 ERROR 日志并触发 on_request_error 钩子，然后原样抛出
        """
        request_id = self.generate_request_id()
        prepared = self.before_request(request_id, prepared)
        self._log_request(request_id, prepared, params or {})

        try:
            response = await self.transport.fetch(prepared.url, prepared.options)
            response = self.after_request(request_id, response)
            logger.info(f"[{request_id}] Received {response.status} response")
            return await self.normalizer.normalize(response)
        except Exception as error:
            logger.error(f"[{request_id}] Request failed: {error}")
            self.on_request_error(request_id, error)
            raise

    def request(
        self,
        verb: Verb | str,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Awaitable[NormalizedResult]:
        """
        构建并发送请求的统一入口

        构造阶段的错误（InvalidUrlError、MissingParameterError）在调用时同步抛出，
        不会发起网络请求；返回值需要 await，之后的错误在 await 时抛出

        参数:
            verb: Verb 枚举或方法名（不区分大小写）
            url: URL 模板
            params: 参数字典
            headers: 请求头字典

        返回:
            可等待对象，结果为 NormalizedResult
        """
        if not isinstance(verb, Verb):
            verb = Verb.from_method(verb)
        spec = RequestSpec(url_template=url, verb=verb, params=params or {}, headers=headers or {})
        prepared = self.prepare(spec)
        return self.send(prepared, spec.params)

    def get(self, url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
        """GET 请求，剩余参数放入查询字符串"""
        return self.request(Verb.GET, url, params, headers)

    def post(self, url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
        """POST 请求，剩余参数放入请求体"""
        return self.request(Verb.POST, url, params, headers)

    def put(self, url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
        """PUT 请求，剩余参数放入请求体"""
        return self.request(Verb.PUT, url, params, headers)

    def delete(self, url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
        """DELETE 请求，剩余参数放入查询字符串"""
        return self.request(Verb.DELETE, url, params, headers)

    del_ = delete

    def close(self):
        """关闭传输层，释放连接资源"""
        if self.transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()

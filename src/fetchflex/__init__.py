"""
fetchflex HTTP 请求构建与响应归一化模块

在 fetch 风格的传输层之上提供 GET/POST/PUT/DELETE 调用

主要组件:
    - FetchClient: 客户端，负责请求构建、发送和响应归一化
    - 异常类: FetchClientError 及其子类
    - 传输层: BaseTransport, RequestsTransport
    - 会话上下文: SessionContext（ntag 会话标签）

使用示例:
    >>> import asyncio
    >>> from fetchflex import FetchClient
    >>>
    >>> async def main():
    ...     async with FetchClient(base_url="https://api.example.com") as client:
    ...         result = await client.get("/items/{id}", {"id": 5, "sort": "name"})
    ...         return result.data
    >>>
    >>> asyncio.run(main())
"""

# 核心客户端
from fetchflex.client import FetchClient, PreparedRequest, RequestSpec

# 模块级请求函数
from fetchflex.api import default_client, del_, delete, get, post, put, set_default_client

# 异常类
from fetchflex.exceptions import (
    DecodeError,
    FetchClientError,
    HttpError,
    InvalidUrlError,
    MissingParameterError,
    ResponseError,
    TransportError,
)

# 编码与 URL 构建
from fetchflex.encoder import encode
from fetchflex.url import build_query, build_url, extract_placeholder_names, partition_params, resolve_path

# 编解码器与动词
from fetchflex.codecs import Codec, select_body_codec, select_response_codec
from fetchflex.verbs import Verb, VerbPolicy

# 请求头与会话
from fetchflex.headers import compose_headers
from fetchflex.session import SessionContext

# 响应归一化
from fetchflex.normalizer import NormalizedResult, ResponseNormalizer

# 传输层
from fetchflex.transport import (
    BaseTransport,
    FetchOptions,
    RequestsResponse,
    RequestsTransport,
    TransportResponse,
)

# 常量配置
from fetchflex.constants import (
    HTTP_METHOD_DELETE,
    HTTP_METHOD_GET,
    HTTP_METHOD_POST,
    HTTP_METHOD_PUT,
    NO_NTAG_RECEIVED_YET,
)

__all__ = [
    # 核心类
    "FetchClient",
    "RequestSpec",
    "PreparedRequest",
    # 模块级请求函数
    "get",
    "post",
    "put",
    "delete",
    "del_",
    "default_client",
    "set_default_client",
    # 异常
    "FetchClientError",
    "InvalidUrlError",
    "MissingParameterError",
    "ResponseError",
    "HttpError",
    "DecodeError",
    "TransportError",
    # 编码与 URL
    "encode",
    "extract_placeholder_names",
    "resolve_path",
    "partition_params",
    "build_query",
    "build_url",
    # 编解码器与动词
    "Codec",
    "select_body_codec",
    "select_response_codec",
    "Verb",
    "VerbPolicy",
    # 请求头与会话
    "compose_headers",
    "SessionContext",
    # 响应归一化
    "NormalizedResult",
    "ResponseNormalizer",
    # 传输层
    "BaseTransport",
    "TransportResponse",
    "FetchOptions",
    "RequestsTransport",
    "RequestsResponse",
    # 常量
    "HTTP_METHOD_GET",
    "HTTP_METHOD_POST",
    "HTTP_METHOD_PUT",
    "HTTP_METHOD_DELETE",
    "NO_NTAG_RECEIVED_YET",
]

__version__ = "0.1.0"

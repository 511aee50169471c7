"""
模块级请求函数

get/post/put/delete 使用同一个显式的默认客户端，因此共享该客户端的 ntag 会话标签。
需要隔离会话时请直接创建 FetchClient 实例
"""

from __future__ import annotations

import threading
from collections.abc import Awaitable

from fetchflex.client import FetchClient
from fetchflex.normalizer import NormalizedResult

_default_client: FetchClient | None = None
_default_client_lock = threading.Lock()


def default_client() -> FetchClient:
    """返回默认客户端，首次调用时创建"""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = FetchClient()
        return _default_client


def set_default_client(client: FetchClient | None) -> None:
    """替换默认客户端，传入 None 时下次调用重新创建"""
    global _default_client
    with _default_client_lock:
        _default_client = client


def get(url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
    return default_client().get(url, params, headers)


def post(url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
    return default_client().post(url, params, headers)


def put(url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
    return default_client().put(url, params, headers)


def delete(url: str, params=None, headers=None) -> Awaitable[NormalizedResult]:
    return default_client().delete(url, params, headers)


del_ = delete

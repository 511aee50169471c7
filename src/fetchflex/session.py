"""
会话上下文模块

保存服务端下发的 ntag 会话标签。每个客户端实例持有一个上下文，
也可以显式地在多个客户端之间共享同一个实例
"""

from __future__ import annotations

import logging
import threading

from fetchflex.constants import NO_NTAG_RECEIVED_YET

logger = logging.getLogger(__name__)


class SessionContext:
    """
    会话标签存储

    写操作通过锁串行化，并发响应之间以最后一次写入为准

    参数:
        ntag: 初始标签，默认为 NO_NTAG_RECEIVED_YET
    """

    def __init__(self, ntag: str = NO_NTAG_RECEIVED_YET):
        self._ntag = ntag
        self._lock = threading.Lock()

    @property
    def ntag(self) -> str:
        return self._ntag

    @property
    def has_received_tag(self) -> bool:
        """是否已经从响应中收到过标签"""
        return self._ntag != NO_NTAG_RECEIVED_YET

    def update(self, ntag: str | None) -> bool:
        """
        用响应中的标签覆盖当前值

        参数:
            ntag: 响应头中的 ntag 值，为空时保持原值不变

        返回:
            是否发生了覆盖
        """
        if not ntag:
            return False
        with self._lock:
            self._ntag = ntag
        logger.debug("Session tag updated")
        return True

    def reset(self) -> None:
        """恢复为初始的未收到标签状态"""
        with self._lock:
            self._ntag = NO_NTAG_RECEIVED_YET

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(has_received_tag={self.has_received_tag})"

"""物理索引名生成工具模块."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable

from .exceptions import NameResolutionError
from .models import (
    MAX_DISAMBIGUATION_ATTEMPTS,
    SUFFIX_SEPARATOR,
    TIMESTAMP_FORMAT,
    NamingPolicy,
)

if TYPE_CHECKING:
    from ..index_manager.tool import IndexLifecycleManager

logger = logging.getLogger(__name__)


class NameResolver:
    """物理索引名解析器.

    PLAIN 策略直接返回基础索引名；TIME_SUFFIXED 策略返回
    ``<基础索引名>-<微秒时间戳>``，并保证：

    - 同一解析器实例内时间戳严格递增，时钟回拨或同一微秒内的重复调用
      会在上次时间戳的基础上加一微秒
    - 候选名称已存在于引擎时追加 ``-1``、``-2`` 等序号，直到不存在为止

    只执行只读的 index_exists 检查。检查与随后的创建之间的并发竞争不做处理，
    此时创建会以 IndexAlreadyExistsError 失败。

    Args:
        clock: 时间源，默认 datetime.now
        separator: 基础索引名与后缀的分隔符
        timestamp_format: 时间戳格式
        max_attempts: 追加序号的最大尝试次数

    Example:
        >>> resolver = NameResolver()
        >>> resolver.resolve(manager, NamingPolicy.TIME_SUFFIXED)
        'catalog-2024.05.01-093015123456'
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        separator: str = SUFFIX_SEPARATOR,
        timestamp_format: str = TIMESTAMP_FORMAT,
        max_attempts: int = MAX_DISAMBIGUATION_ATTEMPTS,
    ):
        self._clock = clock or datetime.now
        self.separator = separator
        self.timestamp_format = timestamp_format
        self.max_attempts = max_attempts
        self._last_timestamp: datetime | None = None

    def resolve(
        self,
        manager: IndexLifecycleManager,
        policy: NamingPolicy = NamingPolicy.PLAIN,
    ) -> str:
        """按策略为管理器生成物理索引名.

        Args:
            manager: 索引生命周期管理器
            policy: 命名策略

        Returns:
            物理索引名

        Raises:
            NameResolutionError: 超过最大尝试次数仍未找到空闲名称时抛出
            EngineCommunicationError: 存在性检查失败时抛出
        """
        if policy is NamingPolicy.PLAIN:
            return manager.base_index_name
        if policy is NamingPolicy.TIME_SUFFIXED:
            return self._resolve_time_suffixed(manager)
        raise ValueError(f"不支持的命名策略: {policy}")

    def _next_timestamp(self) -> datetime:
        now = self._clock()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _resolve_time_suffixed(self, manager: IndexLifecycleManager) -> str:
        prefix = (
            f"{manager.base_index_name}{self.separator}"
            f"{self._next_timestamp().strftime(self.timestamp_format)}"
        )

        candidate = prefix
        for attempt in range(1, self.max_attempts + 1):
            if not manager.index_exists(candidate):
                return candidate
            logger.warning(f"索引名 '{candidate}' 已被占用，追加序号重试")
            candidate = f"{prefix}{self.separator}{attempt}"

        raise NameResolutionError(
            f"管理器 '{manager.name}' 在 {self.max_attempts} 次尝试后仍未找到空闲索引名"
        )

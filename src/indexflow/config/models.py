"""配置数据模型定义模块.

提供进程启动时一次性构建的配置模型，包括：
- ManagerConfig: 逻辑管理器配置（名称、基础索引名、映射文档）
- ManagerRegistry: 管理器名称到配置的显式注册表
- AppConfig: 完整的应用配置
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from ..connection.models import ClusterConfig, ConnectionConfig
from ..exceptions import ConfigurationError

# 默认管理器名称
DEFAULT_MANAGER = "default"


@dataclass(frozen=True)
class ManagerConfig:
    """逻辑管理器配置.

    进程启动时从配置构建，生命周期内不可变。别名模式下，
    基础索引名同时也是别名名称。

    Attributes:
        name: 管理器名称（命令行 --manager 引用的名称）
        index_name: 基础索引名
        mapping: 创建索引时发送的请求体（mappings/settings），内容不做解释

    Raises:
        ConfigurationError: 名称或基础索引名为空，或映射文档不是对象时抛出
    """

    name: str
    index_name: str
    mapping: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """校验管理器配置合法性."""
        if not self.name:
            raise ConfigurationError("管理器名称不能为空")
        if not self.index_name:
            raise ConfigurationError(f"管理器 '{self.name}' 未配置 index_name")
        if not isinstance(self.mapping, dict):
            raise ConfigurationError(
                f"管理器 '{self.name}' 的 mapping 必须是 JSON 对象"
            )


class ManagerRegistry:
    """管理器注册表.

    启动时显式构建，并作为参数传递给编排器，不依赖全局状态。

    Args:
        managers: 管理器配置列表，名称不可重复

    Raises:
        ConfigurationError: 存在重名管理器时抛出

    Examples:
        >>> registry = ManagerRegistry([ManagerConfig("default", "catalog")])
        >>> registry.get("default").index_name
        'catalog'
    """

    def __init__(self, managers: Iterable[ManagerConfig] = ()):
        self._managers: dict[str, ManagerConfig] = {}
        for manager in managers:
            if manager.name in self._managers:
                raise ConfigurationError(f"管理器 '{manager.name}' 重复定义")
            self._managers[manager.name] = manager

    def get(self, name: str) -> ManagerConfig:
        """按名称获取管理器配置.

        Raises:
            ConfigurationError: 管理器未注册时抛出
        """
        try:
            return self._managers[name]
        except KeyError:
            raise ConfigurationError(
                f"未找到管理器 '{name}'，可用管理器: {self.names()}"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._managers)

    def __len__(self) -> int:
        return len(self._managers)


@dataclass
class AppConfig:
    """完整的应用配置.

    Attributes:
        cluster: 集群配置
        connection: 连接配置
        registry: 管理器注册表
    """

    cluster: ClusterConfig
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    registry: ManagerRegistry = field(default_factory=ManagerRegistry)

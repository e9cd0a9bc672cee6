"""indexflow - Elasticsearch 索引轮换工具.

通过稳定的逻辑别名管理带版本的物理索引，实现零停机重建索引：
新的映射与文档写入新命名的物理索引，旧索引继续提供查询，
最后通过一次原子的别名切换完成流量切换。

主要功能:
    - NameResolver: 生成当前未被占用的物理索引名
    - IndexLifecycleManager: 索引与别名的增删查
    - RotationOrchestrator: 创建/转储/别名轮换命令的状态机

使用示例:
    from indexflow import (
        CreateIndexOptions,
        ManagerConfig,
        ManagerRegistry,
        RotationOrchestrator,
    )

    registry = ManagerRegistry([ManagerConfig("default", "catalog", mapping)])
    orchestrator = RotationOrchestrator(registry, es_client)
    result = orchestrator.run(CreateIndexOptions(manager="default", alias=True))
"""

__version__ = "0.1.0"

# 导出配置
from indexflow.config import AppConfig, ManagerConfig, ManagerRegistry, load_config

# 导出异常
from indexflow.exceptions import ConfigurationError, IndexFlowError
from indexflow.index_manager import (
    AliasSwapError,
    EngineCommunicationError,
    IndexAlreadyExistsError,
    IndexLifecycleManager,
    IndexNotFoundError,
)

# 导出命名与轮换
from indexflow.naming import NameResolver, NamingPolicy
from indexflow.rotation import (
    CommandResult,
    CreateIndexOptions,
    RotationOrchestrator,
    RotationState,
)

__all__ = [
    # 版本
    "__version__",
    # 配置
    "AppConfig",
    "ManagerConfig",
    "ManagerRegistry",
    "load_config",
    # 核心组件
    "NameResolver",
    "NamingPolicy",
    "IndexLifecycleManager",
    "RotationOrchestrator",
    # 命令模型
    "CreateIndexOptions",
    "CommandResult",
    "RotationState",
    # 异常
    "IndexFlowError",
    "ConfigurationError",
    "IndexAlreadyExistsError",
    "IndexNotFoundError",
    "EngineCommunicationError",
    "AliasSwapError",
]

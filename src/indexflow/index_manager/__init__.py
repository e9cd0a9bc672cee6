"""索引生命周期管理模块.

该模块提供单个逻辑管理器对应的物理索引与别名操作：
- 索引存在性检查、创建与删除
- 索引映射读取
- 别名读取与原子切换

示例用法:
    >>> from indexflow.index_manager import IndexLifecycleManager
    >>> manager = IndexLifecycleManager(manager_config, es_client)
    >>> manager.create_index("catalog-2024.01.01-120000000000", manager.mapping)
    >>> previous = manager.get_aliased_indices("catalog")
    >>> manager.swap_alias("catalog", previous, "catalog-2024.01.01-120000000000")
"""

from .exceptions import (
    AliasSwapError,
    EngineCommunicationError,
    IndexAlreadyExistsError,
    IndexManagerError,
    IndexNotFoundError,
    InvalidIndexNameError,
)
from .models import AliasSwapInfo, IndexBody
from .tool import IndexLifecycleManager

__all__ = [
    # 核心类
    "IndexLifecycleManager",
    # 数据模型
    "AliasSwapInfo",
    "IndexBody",
    # 异常类
    "IndexManagerError",
    "IndexNotFoundError",
    "IndexAlreadyExistsError",
    "InvalidIndexNameError",
    "EngineCommunicationError",
    "AliasSwapError",
]

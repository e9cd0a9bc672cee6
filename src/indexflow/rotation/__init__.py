"""索引轮换模块.

主要组件:
    - RotationOrchestrator: 索引创建/转储/别名轮换的命令状态机
    - CreateIndexOptions: 命令选项
    - CommandResult: 命令执行结果
    - RotationState: 状态枚举

使用示例:
    from indexflow.rotation import CreateIndexOptions, RotationOrchestrator

    orchestrator = RotationOrchestrator(registry, es_client)
    result = orchestrator.run(CreateIndexOptions(manager="default", alias=True))
    print(result.output)
"""

from .models import CommandResult, CreateIndexOptions, RotationState, dump_mapping
from .tool import RotationOrchestrator

__all__ = [
    "RotationOrchestrator",
    "CreateIndexOptions",
    "CommandResult",
    "RotationState",
    "dump_mapping",
]

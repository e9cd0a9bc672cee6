"""索引轮换编排工具模块.

按命令选项依次调用命名解析器和索引生命周期管理器：
普通创建、条件创建、映射转储以及带别名的原子轮换。
"""

import logging

from elasticsearch import Elasticsearch

from ..config.models import ManagerRegistry
from ..exceptions import IndexFlowError
from ..index_manager.tool import IndexLifecycleManager
from ..naming.models import NamingPolicy
from ..naming.tool import NameResolver
from .models import CommandResult, CreateIndexOptions, RotationState, dump_mapping

logger = logging.getLogger(__name__)


class RotationOrchestrator:
    """索引轮换编排器.

    每次 run() 调用对应一次命令执行，是单线程的阻塞调用序列，
    任何错误都不在内部重试，而是转换为 FAILED 结果返回。
    管理器句柄在编排器生命周期内缓存，current_index_name 因此在
    同一进程的多次调用之间保持。

    Args:
        registry: 启动时构建的管理器注册表
        es_client: Elasticsearch 客户端实例
        resolver: 命名解析器，默认 NameResolver()

    Example:
        >>> orchestrator = RotationOrchestrator(registry, es_client)
        >>> result = orchestrator.run(CreateIndexOptions(alias=True))
        >>> result.exit_code
        0
    """

    def __init__(
        self,
        registry: ManagerRegistry,
        es_client: Elasticsearch,
        resolver: NameResolver | None = None,
    ):
        self.registry = registry
        self.es_client = es_client
        self.resolver = resolver or NameResolver()
        self._managers: dict[str, IndexLifecycleManager] = {}

    def get_manager(self, name: str) -> IndexLifecycleManager:
        """获取管理器句柄.

        Raises:
            ConfigurationError: 管理器未注册时抛出
        """
        if name not in self._managers:
            self._managers[name] = IndexLifecycleManager(
                self.registry.get(name), self.es_client
            )
        return self._managers[name]

    def run(self, options: CreateIndexOptions) -> CommandResult:
        """执行一次索引创建命令.

        Args:
            options: 命令选项

        Returns:
            命令执行结果，exit_code 为 0 表示成功
        """
        result = CommandResult(manager=options.manager)
        try:
            manager = self.get_manager(options.manager)
            result.advance(RotationState.MODE_DISPATCH)

            if options.dump:
                self._dump(manager, result)
            else:
                self._create(manager, options, result)

        except IndexFlowError as e:
            logger.error(f"管理器 '{options.manager}' 执行失败: {str(e)}")
            result.fail(e)

        return result

    def _dump(self, manager: IndexLifecycleManager, result: CommandResult) -> None:
        mapping = manager.get_mapping()
        result.index_name = manager.current_index_name
        result.mapping = mapping
        result.messages.append(dump_mapping(mapping))
        result.advance(RotationState.DUMP_AND_EXIT)

    def _create(
        self,
        manager: IndexLifecycleManager,
        options: CreateIndexOptions,
        result: CommandResult,
    ) -> None:
        policy = NamingPolicy.TIME_SUFFIXED if options.rotate else NamingPolicy.PLAIN
        target = self.resolver.resolve(manager, policy)
        result.index_name = target

        # 轮换模式下目标名称总是新生成的，短路只对普通模式有意义
        if (
            options.if_not_exists
            and target == manager.current_index_name
            and manager.index_exists(target)
        ):
            result.messages.append(
                f"Index `{target}` already exists in `{manager.name}` manager."
            )
            result.advance(RotationState.EXISTENCE_SHORT_CIRCUIT)
            return

        result.advance(RotationState.CREATE)
        mapping = None if options.no_mapping else manager.mapping
        manager.create_index(target, mapping)
        manager.current_index_name = target
        result.messages.append(
            f"Created `{target}` index for the `{manager.name}` manager."
        )
        if mapping:
            result.advance(RotationState.MAPPING_APPLIED)

        if options.alias:
            self._swap_alias(manager, target, result)

        result.advance(RotationState.DONE)

    def _swap_alias(
        self,
        manager: IndexLifecycleManager,
        target: str,
        result: CommandResult,
    ) -> None:
        alias = manager.alias_name
        result.alias = alias
        result.advance(RotationState.ALIAS_SWAP)

        previous = manager.get_aliased_indices(alias)
        info = manager.swap_alias(alias, previous, target)

        result.previous_indices = info.removed_from
        for index_name in info.removed_from:
            result.messages.append(
                f"Removed `{alias}` alias from `{index_name}` index."
            )
        result.messages.append(f"Created an alias `{alias}` for the `{target}` index.")
        if info.removed_from:
            logger.info(f"旧索引 {info.removed_from} 保留，需要单独清理")

"""索引生命周期管理器核心工具类."""

import logging
from typing import Any, Iterable

from elasticsearch import (
    ApiError,
    BadRequestError,
    Elasticsearch,
    NotFoundError,
    TransportError,
)

from ..config.models import ManagerConfig
from .exceptions import (
    AliasSwapError,
    EngineCommunicationError,
    IndexAlreadyExistsError,
    IndexManagerError,
    IndexNotFoundError,
    InvalidIndexNameError,
)
from .models import AliasSwapInfo, IndexBody

logger = logging.getLogger(__name__)

# 索引名中不允许出现的字符
_INVALID_NAME_CHARS = frozenset(
    {",", "#", "/", "\\", '"', "<", ">", "|", " ", "\t", "\n", "\r", "*", "?", ":"}
)


def _validate_index_name(index_name: str) -> bool:
    """验证索引名称是否符合 Elasticsearch 规范.

    Note:
        Elasticsearch 索引名称限制：
        - 只能使用小写字母
        - 不能以 . _ - + 开头
        - 不能包含 , # / \\ * ? " < > | : 空格
        - 不能是 . 或 ..
        - 长度不能超过 255 字节
    """
    if not index_name or not isinstance(index_name, str):
        return False

    if len(index_name.encode("utf-8")) > 255:
        return False

    if index_name in (".", "..") or index_name[0] in "._-+":
        return False

    if index_name != index_name.lower():
        return False

    return not any(char in _INVALID_NAME_CHARS for char in index_name)


def _is_error_type(error: ApiError, error_type: str) -> bool:
    """判断 ES 错误响应是否为指定类型（如 resource_already_exists_exception）."""
    return error_type in str(error) or getattr(error, "error", None) == error_type


class IndexLifecycleManager:
    """索引生命周期管理器.

    将一个逻辑管理器（名称、基础索引名、映射文档）绑定到当前物理索引名，
    对外提供索引存在性检查、创建/删除、映射读取以及别名读取和原子切换。
    每个操作都是一次同步的引擎调用，不做重试。

    current_index_name 是唯一的可变状态，初始为基础索引名，
    仅在编排器创建或轮换索引后被更新。方法中 index_name 为 None 时
    均作用于 current_index_name。

    Args:
        config: 管理器配置
        es_client: Elasticsearch 客户端实例（共享，不负责关闭）

    Example:
        >>> manager = IndexLifecycleManager(ManagerConfig("default", "catalog"), es)
        >>> manager.create_index("catalog-2024.01.01-000000000000")
        >>> manager.swap_alias("catalog", set(), "catalog-2024.01.01-000000000000")
    """

    def __init__(self, config: ManagerConfig, es_client: Elasticsearch):
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        self.config = config
        self.es_client = es_client
        self.current_index_name = config.index_name
        logger.debug(f"初始化管理器 '{config.name}'，基础索引 '{config.index_name}'")

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def base_index_name(self) -> str:
        return self.config.index_name

    @property
    def alias_name(self) -> str:
        """别名模式下使用的别名，与基础索引名相同."""
        return self.config.index_name

    @property
    def mapping(self) -> dict[str, Any]:
        return self.config.mapping

    def _target(self, index_name: str | None) -> str:
        return index_name or self.current_index_name

    def index_exists(self, index_name: str | None = None) -> bool:
        """检查物理索引是否存在.

        Args:
            index_name: 索引名称，默认当前索引

        Raises:
            EngineCommunicationError: 与引擎通信失败时抛出
        """
        index_name = self._target(index_name)
        try:
            return bool(self.es_client.indices.exists(index=index_name))
        except (ApiError, TransportError) as e:
            raise EngineCommunicationError(
                f"检查索引 '{index_name}' 是否存在失败: {str(e)}"
            ) from e

    def create_index(
        self,
        index_name: str | None = None,
        mapping: IndexBody | dict[str, Any] | None = None,
    ) -> bool:
        """创建物理索引.

        Args:
            index_name: 索引名称，默认当前索引
            mapping: 创建请求体；为 None 时不发送请求体，由引擎使用默认映射

        Returns:
            引擎是否确认创建

        Raises:
            InvalidIndexNameError: 索引名称不符合规范时抛出
            IndexAlreadyExistsError: 索引已存在时抛出
            IndexManagerError: 引擎拒绝请求（如映射不合法）时抛出
            EngineCommunicationError: 与引擎通信失败时抛出

        Example:
            >>> manager.create_index(
            ...     "catalog", {"mappings": {"properties": {"sku": {"type": "keyword"}}}}
            ... )
        """
        index_name = self._target(index_name)
        if not _validate_index_name(index_name):
            raise InvalidIndexNameError(
                f"索引名称 '{index_name}' 不符合 Elasticsearch 规范"
            )

        kwargs: dict[str, Any] = {"index": index_name}
        if mapping:
            kwargs["body"] = mapping

        try:
            response = self.es_client.indices.create(**kwargs)
        except BadRequestError as e:
            if _is_error_type(e, "resource_already_exists_exception"):
                raise IndexAlreadyExistsError(f"索引 '{index_name}' 已存在") from e
            raise IndexManagerError(f"创建索引 '{index_name}' 失败: {str(e)}") from e
        except (ApiError, TransportError) as e:
            raise EngineCommunicationError(
                f"创建索引 '{index_name}' 失败: {str(e)}"
            ) from e

        acknowledged = bool(response.get("acknowledged", False))
        if acknowledged:
            logger.info(f"索引 '{index_name}' 创建成功")
        else:
            logger.warning(f"索引 '{index_name}' 创建请求未被确认")
        return acknowledged

    def drop_index(self, index_name: str | None = None) -> bool:
        """删除物理索引.

        Args:
            index_name: 索引名称，默认当前索引

        Returns:
            引擎是否确认删除

        Raises:
            IndexNotFoundError: 索引不存在时抛出
            EngineCommunicationError: 与引擎通信失败时抛出
        """
        index_name = self._target(index_name)
        try:
            response = self.es_client.indices.delete(index=index_name)
        except NotFoundError as e:
            raise IndexNotFoundError(f"索引 '{index_name}' 不存在") from e
        except (ApiError, TransportError) as e:
            raise EngineCommunicationError(
                f"删除索引 '{index_name}' 失败: {str(e)}"
            ) from e

        logger.info(f"索引 '{index_name}' 删除成功")
        return bool(response.get("acknowledged", False))

    def get_mapping(self, index_name: str | None = None) -> dict[str, Any]:
        """获取索引映射.

        Args:
            index_name: 索引名称，默认当前索引

        Returns:
            映射文档；未设置映射时为空字典

        Raises:
            IndexNotFoundError: 索引不存在时抛出
            EngineCommunicationError: 与引擎通信失败时抛出
        """
        index_name = self._target(index_name)
        try:
            response = self.es_client.indices.get_mapping(index=index_name)
        except NotFoundError as e:
            raise IndexNotFoundError(f"索引 '{index_name}' 不存在") from e
        except (ApiError, TransportError) as e:
            raise EngineCommunicationError(
                f"获取索引 '{index_name}' 映射失败: {str(e)}"
            ) from e

        index_data = response.get(index_name)
        if index_data is None:
            # 以别名查询时返回的键是物理索引名
            index_data = next(iter(response.values()), {})
        return dict(index_data.get("mappings", {}))

    def alias_exists(self, alias_name: str) -> bool:
        """检查别名是否存在.

        Raises:
            EngineCommunicationError: 与引擎通信失败时抛出
        """
        try:
            return bool(self.es_client.indices.exists_alias(name=alias_name))
        except (ApiError, TransportError) as e:
            raise EngineCommunicationError(
                f"检查别名 '{alias_name}' 是否存在失败: {str(e)}"
            ) from e

    def get_aliased_indices(self, alias_name: str) -> set[str]:
        """获取别名指向的所有物理索引.

        只读操作，别名不存在时返回空集合。

        Raises:
            EngineCommunicationError: 与引擎通信失败时抛出
        """
        try:
            response = self.es_client.indices.get_alias(name=alias_name)
        except NotFoundError:
            return set()
        except (ApiError, TransportError) as e:
            raise EngineCommunicationError(
                f"获取别名 '{alias_name}' 指向的索引失败: {str(e)}"
            ) from e
        return set(response.keys())

    def swap_alias(
        self,
        alias_name: str,
        from_indices: Iterable[str],
        to_index: str,
    ) -> AliasSwapInfo:
        """原子地将别名从旧索引切换到新索引.

        移除与添加放在同一个 update_aliases 请求中，由引擎保证原子性，
        读者不会观察到别名指向零个或两个索引的中间状态。
        旧索引保留不删除。

        Args:
            alias_name: 别名名称
            from_indices: 当前持有别名的索引（可为空，首次轮换时）
            to_index: 切换目标索引

        Returns:
            别名切换结果

        Raises:
            AliasSwapError: 引擎拒绝请求、未确认或通信失败时抛出；
                此时 to_index 已创建但未挂载别名，不会自动回滚
        """
        removed_from = sorted(set(from_indices) - {to_index})
        actions: list[dict[str, Any]] = [
            {"remove": {"index": index, "alias": alias_name}} for index in removed_from
        ]
        actions.append({"add": {"index": to_index, "alias": alias_name}})

        try:
            response = self.es_client.indices.update_aliases(body={"actions": actions})
        except (ApiError, TransportError) as e:
            logger.error(
                f"别名 '{alias_name}' 切换到 '{to_index}' 失败，索引 '{to_index}' 未挂载别名"
            )
            raise AliasSwapError(
                f"别名 '{alias_name}' 切换到索引 '{to_index}' 失败: {str(e)}"
            ) from e

        acknowledged = bool(response.get("acknowledged", False))
        if not acknowledged:
            logger.error(f"别名 '{alias_name}' 切换请求未被确认")
            raise AliasSwapError(f"别名 '{alias_name}' 切换到索引 '{to_index}' 未被确认")

        logger.info(f"别名 '{alias_name}' 已切换: {removed_from} -> '{to_index}'")
        return AliasSwapInfo(
            alias=alias_name,
            new_index=to_index,
            removed_from=removed_from,
            actions=actions,
            acknowledged=acknowledged,
        )

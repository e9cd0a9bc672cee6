"""索引管理器异常定义模块."""

from ..exceptions import IndexFlowError


class IndexManagerError(IndexFlowError):
    """索引管理器基础异常类."""

    pass


class IndexNotFoundError(IndexManagerError):
    """索引不存在异常."""

    pass


class IndexAlreadyExistsError(IndexManagerError):
    """索引已存在异常."""

    pass


class InvalidIndexNameError(IndexManagerError, ValueError):
    """索引名称不符合 Elasticsearch 规范."""

    pass


class EngineCommunicationError(IndexManagerError):
    """与 Elasticsearch 通信失败（传输层或协议错误）."""

    pass


class AliasSwapError(IndexManagerError):
    """别名原子切换失败.

    切换失败时新索引已创建但未挂载别名，需要人工处理。
    """

    pass

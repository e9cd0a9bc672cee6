"""索引命名异常定义模块."""

from ..exceptions import IndexFlowError


class NameResolutionError(IndexFlowError):
    """无法生成未被占用的物理索引名时抛出."""

    pass

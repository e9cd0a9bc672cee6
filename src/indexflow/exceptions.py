"""indexflow 异常定义模块."""


class IndexFlowError(Exception):
    """indexflow 基础异常类."""

    pass


class ConfigurationError(IndexFlowError):
    """配置异常.

    配置文件格式错误、字段不合法或请求了未注册的管理器时抛出。
    """

    pass

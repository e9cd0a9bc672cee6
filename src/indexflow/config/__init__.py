"""配置模块 - 管理器注册表与配置文件加载."""

from ..exceptions import ConfigurationError
from .models import DEFAULT_MANAGER, AppConfig, ManagerConfig, ManagerRegistry
from .tool import (
    CONFIG_ENV_VAR,
    default_config_path,
    load_config,
    parse_config,
    parse_managers,
)

__all__ = [
    # 模型
    "AppConfig",
    "ManagerConfig",
    "ManagerRegistry",
    "DEFAULT_MANAGER",
    # 加载
    "load_config",
    "parse_config",
    "parse_managers",
    "default_config_path",
    "CONFIG_ENV_VAR",
    # 异常
    "ConfigurationError",
]

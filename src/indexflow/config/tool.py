"""配置加载工具模块.

从 JSON 配置文件构建 AppConfig。配置格式:

    {
        "clusters": [{"hosts": ["http://localhost:9200"]}],
        "connection": {"request_timeout": 30},
        "managers": {
            "default": {"index_name": "catalog", "mapping": {"mappings": {}}}
        }
    }
"""

import json
import logging
import os
from typing import Any

from ..connection.models import ClusterConfig, ConnectionConfig
from ..exceptions import ConfigurationError
from .models import AppConfig, ManagerConfig, ManagerRegistry

logger = logging.getLogger(__name__)

# 配置文件路径环境变量
CONFIG_ENV_VAR = "INDEXFLOW_CONFIG"

# 默认配置文件路径
DEFAULT_CONFIG_PATH = "indexflow.json"


def default_config_path() -> str:
    """返回默认配置文件路径，优先使用环境变量."""
    return os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)


def parse_managers(data: dict[str, Any]) -> ManagerRegistry:
    """解析 managers 配置段.

    Args:
        data: 管理器名称到 {index_name, mapping} 的字典

    Returns:
        管理器注册表

    Raises:
        ConfigurationError: 配置段格式不合法时抛出
    """
    if not isinstance(data, dict):
        raise ConfigurationError("managers 必须是以管理器名称为键的对象")

    managers: list[ManagerConfig] = []
    for name, manager_data in data.items():
        if not isinstance(manager_data, dict):
            raise ConfigurationError(f"管理器 '{name}' 的配置必须是对象")
        managers.append(
            ManagerConfig(
                name=name,
                index_name=manager_data.get("index_name", ""),
                mapping=manager_data.get("mapping") or {},
            )
        )
    return ManagerRegistry(managers)


def parse_config(data: dict[str, Any]) -> AppConfig:
    """从字典构建应用配置.

    Args:
        data: 已解析的 JSON 配置

    Returns:
        应用配置

    Raises:
        ConfigurationError: 配置不合法时抛出
    """
    if not isinstance(data, dict):
        raise ConfigurationError("配置根节点必须是对象")

    clusters = data.get("clusters") or []
    if not clusters:
        raise ConfigurationError("clusters 不能为空，请提供至少一个集群配置")
    if len(clusters) > 1:
        logger.warning(f"配置了 {len(clusters)} 个集群，仅使用第一个")

    try:
        cluster = ClusterConfig.from_dict(clusters[0])
        connection = ConnectionConfig.from_dict(data.get("connection") or {})
    except TypeError as e:
        raise ConfigurationError(f"集群配置不合法: {str(e)}") from e

    registry = parse_managers(data.get("managers") or {})
    if not len(registry):
        raise ConfigurationError("managers 不能为空，请至少配置一个管理器")

    return AppConfig(cluster=cluster, connection=connection, registry=registry)


def load_config(path: str | None = None) -> AppConfig:
    """读取并解析 JSON 配置文件.

    Args:
        path: 配置文件路径，默认取 default_config_path()

    Returns:
        应用配置

    Raises:
        ConfigurationError: 文件不存在、不是合法 JSON 或内容不合法时抛出
    """
    path = path or default_config_path()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"配置文件 '{path}' 不存在") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"配置文件 '{path}' 不是合法的 JSON: {str(e)}") from e

    logger.info(f"加载配置文件 '{path}'")
    return parse_config(data)

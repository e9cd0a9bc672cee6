"""ES 客户端连接模块 - 根据配置创建 Elasticsearch 客户端.

主要组件:
    - create_client: 客户端创建函数
    - ClusterConfig: 集群配置模型
    - ConnectionConfig: 重试与超时配置模型
"""

from .exceptions import ConnectionConfigError
from .models import ClusterConfig, ConnectionConfig
from .tool import build_client_kwargs, create_client

__all__ = [
    "create_client",
    "build_client_kwargs",
    "ClusterConfig",
    "ConnectionConfig",
    "ConnectionConfigError",
]

"""ES 客户端创建工具模块.

根据集群配置与连接配置构建 Elasticsearch 客户端。客户端由调用方持有，
索引管理器只共享使用，不负责关闭。

使用示例:
    from indexflow.connection import ClusterConfig, create_client

    client = create_client(ClusterConfig(hosts=["http://localhost:9200"]))
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from .exceptions import ConnectionConfigError
from .models import ClusterConfig, ConnectionConfig

logger = logging.getLogger(__name__)


def build_client_kwargs(
    cluster_config: ClusterConfig,
    connection_config: ConnectionConfig | None = None,
) -> dict[str, Any]:
    """根据配置构建 Elasticsearch 构造参数.

    根据认证方式（Basic Auth / API Key / Bearer Token / 无认证）
    和 SSL 配置组装参数。

    Args:
        cluster_config: 集群配置信息
        connection_config: 连接配置，默认使用 ConnectionConfig 的默认值

    Returns:
        可直接传给 Elasticsearch 构造函数的参数字典
    """
    connection_config = connection_config or ConnectionConfig()
    kwargs: dict[str, Any] = {
        "hosts": cluster_config.hosts,
        "max_retries": connection_config.max_retries,
        "retry_on_timeout": connection_config.retry_on_timeout,
        "request_timeout": connection_config.request_timeout,
        "http_compress": connection_config.http_compress,
    }

    # Basic Auth 认证
    if cluster_config.username and cluster_config.password:
        kwargs["basic_auth"] = (cluster_config.username, cluster_config.password)

    # API Key 认证
    if cluster_config.api_key:
        kwargs["api_key"] = cluster_config.api_key

    # Bearer Token 认证
    if cluster_config.bearer_token:
        kwargs["bearer_auth"] = cluster_config.bearer_token

    # SSL/TLS 配置
    if cluster_config.ca_certs:
        kwargs["ca_certs"] = cluster_config.ca_certs
    kwargs["verify_certs"] = cluster_config.verify_certs

    return kwargs


def create_client(
    cluster_config: ClusterConfig,
    connection_config: ConnectionConfig | None = None,
) -> Elasticsearch:
    """创建 Elasticsearch 客户端实例.

    Args:
        cluster_config: 集群配置信息
        connection_config: 连接配置

    Returns:
        Elasticsearch 客户端实例

    Raises:
        ConnectionConfigError: 节点地址缺少 scheme、host 或 port 时抛出
    """
    kwargs = build_client_kwargs(cluster_config, connection_config)
    logger.info(f"创建 Elasticsearch 客户端: {cluster_config.hosts}")
    try:
        return Elasticsearch(**kwargs)
    except ValueError as e:
        raise ConnectionConfigError(
            f"集群地址 {cluster_config.hosts} 不合法: {str(e)}"
        ) from e

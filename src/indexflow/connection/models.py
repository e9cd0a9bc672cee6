"""ES 客户端连接数据模型定义模块.

提供客户端连接相关的数据模型，包括：
- ClusterConfig: 集群地址与认证配置
- ConnectionConfig: 重试与超时配置
"""

from dataclasses import dataclass, field
from typing import Any

from .exceptions import ConnectionConfigError


@dataclass
class ClusterConfig:
    """集群配置模型.

    定义 ES 集群的连接信息，包括地址和认证方式。

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空时抛出

    Examples:
        >>> config = ClusterConfig(
        ...     hosts=["http://localhost:9200"],
        ...     username="elastic",
        ...     password="changeme",
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        """校验集群配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        if isinstance(self.api_key, list):
            # JSON 配置中的二元组会被解析为列表
            self.api_key = tuple(self.api_key)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterConfig":
        """从配置字典构建集群配置，忽略未知字段."""
        known = {key: data[key] for key in cls.__dataclass_fields__ if key in data}
        return cls(**known)


@dataclass
class ConnectionConfig:
    """连接配置模型.

    定义 ES 客户端的重试策略和超时时间。索引轮换命令是一次性的
    阻塞调用序列，这里的设置即为每个请求的全部超时约束。

    Attributes:
        max_retries: 传输层最大重试次数，默认 3
        retry_on_timeout: 超时是否重试，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 True

    Raises:
        ConnectionConfigError: 当参数不合法时抛出
    """

    max_retries: int = 3
    retry_on_timeout: bool = True
    request_timeout: int = 30
    http_compress: bool = True

    def __post_init__(self) -> None:
        """校验连接配置参数合法性."""
        if self.max_retries < 0:
            raise ConnectionConfigError(
                f"max_retries 必须 >= 0，当前值: {self.max_retries}"
            )
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConnectionConfig":
        """从配置字典构建连接配置，忽略未知字段."""
        known = {key: data[key] for key in cls.__dataclass_fields__ if key in data}
        return cls(**known)

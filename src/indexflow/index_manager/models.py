"""索引管理器数据模型定义模块."""

from dataclasses import dataclass, field
from typing import Any, TypedDict


class IndexBody(TypedDict, total=False):
    """创建索引请求体类型定义.

    管理器配置中的映射文档按原样作为请求体发送，这里只描述常见字段。

    Attributes:
        mappings: 字段映射
        settings: 索引设置
        aliases: 创建时附带的别名
    """

    mappings: dict[str, Any]
    settings: dict[str, Any]
    aliases: dict[str, Any]


@dataclass
class AliasSwapInfo:
    """别名切换结果数据类.

    Attributes:
        alias: 别名名称
        new_index: 切换后别名指向的索引
        removed_from: 本次请求中移除别名的索引列表（即遗留的孤儿索引）
        actions: 发送给 update_aliases 的动作列表
        acknowledged: 引擎是否确认
    """

    alias: str
    new_index: str
    removed_from: list[str] = field(default_factory=list)
    actions: list[dict[str, Any]] = field(default_factory=list)
    acknowledged: bool = False

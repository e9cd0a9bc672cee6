"""索引命名策略定义模块."""

from enum import Enum

# 基础索引名与后缀之间的分隔符
SUFFIX_SEPARATOR = "-"

# 时间后缀格式，精确到微秒，字典序与时间顺序一致
TIMESTAMP_FORMAT = "%Y.%m.%d-%H%M%S%f"

# 名称冲突时追加序号的最大尝试次数
MAX_DISAMBIGUATION_ATTEMPTS = 1000


class NamingPolicy(Enum):
    """物理索引命名策略.

    Attributes:
        PLAIN: 直接使用管理器的基础索引名
        TIME_SUFFIXED: 基础索引名 + 分隔符 + 时间戳（必要时追加序号）
    """

    PLAIN = "plain"
    TIME_SUFFIXED = "time_suffixed"

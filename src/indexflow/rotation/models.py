"""索引轮换命令数据模型定义模块."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config.models import DEFAULT_MANAGER
from ..exceptions import ConfigurationError, IndexFlowError

# 转储映射时的 JSON 缩进
DUMP_INDENT = 4


class RotationState(Enum):
    """轮换命令状态.

    INIT -> MODE_DISPATCH -> {DUMP_AND_EXIT | EXISTENCE_SHORT_CIRCUIT | CREATE}
    -> [MAPPING_APPLIED] -> [ALIAS_SWAP] -> DONE，任一步骤失败进入 FAILED。
    """

    INIT = "init"
    MODE_DISPATCH = "mode_dispatch"
    DUMP_AND_EXIT = "dump_and_exit"
    EXISTENCE_SHORT_CIRCUIT = "existence_short_circuit"
    CREATE = "create"
    MAPPING_APPLIED = "mapping_applied"
    ALIAS_SWAP = "alias_swap"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES

    @property
    def is_success(self) -> bool:
        return self in _TERMINAL_STATES and self is not RotationState.FAILED


_TERMINAL_STATES = frozenset(
    {
        RotationState.DUMP_AND_EXIT,
        RotationState.EXISTENCE_SHORT_CIRCUIT,
        RotationState.DONE,
        RotationState.FAILED,
    }
)


@dataclass(frozen=True)
class CreateIndexOptions:
    """索引创建命令选项.

    Attributes:
        manager: 要操作的管理器名称
        no_mapping: 创建索引时不发送映射文档
        if_not_exists: 目标索引已存在时视为成功而不是错误
        time: 使用时间后缀命名新物理索引
        alias: 别名轮换模式，隐含 time，并在创建后原子切换别名
        dump: 只读模式，输出当前索引映射后退出

    Raises:
        ConfigurationError: 管理器名称为空时抛出
    """

    manager: str = DEFAULT_MANAGER
    no_mapping: bool = False
    if_not_exists: bool = False
    time: bool = False
    alias: bool = False
    dump: bool = False

    def __post_init__(self) -> None:
        if not self.manager:
            raise ConfigurationError("--manager 不能为空")

    @property
    def rotate(self) -> bool:
        """是否需要生成新的时间后缀索引名."""
        return self.time or self.alias


@dataclass
class CommandResult:
    """轮换命令执行结果.

    Attributes:
        manager: 管理器名称
        state: 最终状态
        history: 经历的状态序列
        messages: 面向用户的输出文本，每项一行
        index_name: 命令作用的物理索引名
        alias: 别名模式下的别名
        previous_indices: 切换前持有别名的索引，切换后成为孤儿索引
        mapping: 转储模式下读取的映射文档
        error: 失败时的异常
    """

    manager: str
    state: RotationState = RotationState.INIT
    history: list[RotationState] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    index_name: str | None = None
    alias: str | None = None
    previous_indices: list[str] = field(default_factory=list)
    mapping: dict[str, Any] | None = None
    error: IndexFlowError | None = None

    def __post_init__(self) -> None:
        if not self.history:
            self.history.append(self.state)

    def advance(self, state: RotationState) -> None:
        self.state = state
        self.history.append(state)

    def fail(self, error: IndexFlowError) -> None:
        self.error = error
        self.messages.append(str(error))
        self.advance(RotationState.FAILED)

    @property
    def ok(self) -> bool:
        return self.state.is_success

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    @property
    def error_kind(self) -> str | None:
        """失败时的异常类型名，例如 IndexAlreadyExistsError."""
        return type(self.error).__name__ if self.error is not None else None

    @property
    def output(self) -> str:
        return "\n".join(self.messages)


def dump_mapping(mapping: dict[str, Any]) -> str:
    """将映射文档序列化为带缩进的 JSON 文本."""
    return json.dumps(mapping, indent=DUMP_INDENT)

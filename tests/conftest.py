"""测试公共 fixtures.

提供一个内存版的 Elasticsearch 客户端，实现索引轮换用到的
indices 接口子集：exists、create、delete、get_mapping、
exists_alias、get_alias、update_aliases。
"""

import copy
from unittest.mock import MagicMock

import pytest
from elasticsearch import BadRequestError, NotFoundError


def make_api_error(error_class, status: int, error_type: str, reason: str = ""):
    """构造与真实响应一致的 ES ApiError."""
    body = {
        "error": {
            "root_cause": [{"type": error_type, "reason": reason or error_type}],
            "type": error_type,
            "reason": reason or error_type,
        },
        "status": status,
    }
    return error_class(error_type, meta=MagicMock(status=status), body=body)


class FakeIndicesClient:
    """内存版 indices 客户端，记录每次调用."""

    def __init__(self):
        self.store: dict[str, dict] = {}
        self.calls: list[tuple[str, dict]] = []
        self.update_aliases_error: Exception | None = None

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append((method, copy.deepcopy(kwargs)))

    def calls_to(self, method: str) -> list[dict]:
        return [kwargs for name, kwargs in self.calls if name == method]

    def _holders(self, alias: str) -> list[str]:
        return sorted(
            name for name, data in self.store.items() if alias in data["aliases"]
        )

    def exists(self, index):
        self._record("exists", index=index)
        return index in self.store

    def create(self, index, body=None):
        self._record("create", index=index, body=body)
        if self._holders(index):
            raise make_api_error(
                BadRequestError,
                400,
                "invalid_index_name_exception",
                f"Invalid index name [{index}], already exists as alias",
            )
        if index in self.store:
            raise make_api_error(
                BadRequestError,
                400,
                "resource_already_exists_exception",
                f"index [{index}] already exists",
            )
        body = body or {}
        self.store[index] = {
            "mappings": copy.deepcopy(body.get("mappings", {})),
            "aliases": set(),
        }
        return {"acknowledged": True, "shards_acknowledged": True, "index": index}

    def delete(self, index):
        self._record("delete", index=index)
        if index not in self.store:
            raise make_api_error(NotFoundError, 404, "index_not_found_exception")
        del self.store[index]
        return {"acknowledged": True}

    def get_mapping(self, index):
        self._record("get_mapping", index=index)
        names = [index] if index in self.store else self._holders(index)
        if not names:
            raise make_api_error(NotFoundError, 404, "index_not_found_exception")
        return {
            name: {"mappings": copy.deepcopy(self.store[name]["mappings"])}
            for name in names
        }

    def exists_alias(self, name):
        self._record("exists_alias", name=name)
        return bool(self._holders(name))

    def get_alias(self, name):
        self._record("get_alias", name=name)
        holders = self._holders(name)
        if not holders:
            raise make_api_error(NotFoundError, 404, "aliases_not_found_exception")
        return {index: {"aliases": {name: {}}} for index in holders}

    def update_aliases(self, body):
        self._record("update_aliases", body=body)
        if self.update_aliases_error is not None:
            raise self.update_aliases_error

        actions = body["actions"]
        # 先整体校验，再整体应用，模拟引擎的原子性
        for action in actions:
            (params,) = action.values()
            if params["index"] not in self.store:
                raise make_api_error(NotFoundError, 404, "index_not_found_exception")
            if params["alias"] in self.store:
                raise make_api_error(
                    BadRequestError,
                    400,
                    "invalid_alias_name_exception",
                    "an index or data stream exists with the same name as the alias",
                )
        for action in actions:
            ((op, params),) = action.items()
            aliases = self.store[params["index"]]["aliases"]
            if op == "add":
                aliases.add(params["alias"])
            else:
                aliases.discard(params["alias"])
        return {"acknowledged": True}


class FakeElasticsearch:
    """只实现 indices 命名空间的 Elasticsearch 替身."""

    def __init__(self):
        self.indices = FakeIndicesClient()
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    """创建内存版 Elasticsearch 客户端."""
    return FakeElasticsearch()


@pytest.fixture
def api_error():
    """返回 ApiError 构造函数."""
    return make_api_error

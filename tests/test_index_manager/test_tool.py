"""索引生命周期管理器单元测试."""

import unittest
from unittest.mock import MagicMock

from elasticsearch import BadRequestError, ConnectionError, NotFoundError

from indexflow.config.models import ManagerConfig
from indexflow.index_manager import IndexLifecycleManager
from indexflow.index_manager.exceptions import (
    AliasSwapError,
    EngineCommunicationError,
    IndexAlreadyExistsError,
    IndexManagerError,
    IndexNotFoundError,
    InvalidIndexNameError,
)

MAPPING = {"mappings": {"properties": {"sku": {"type": "keyword"}}}}


def _api_error(error_class, status, error_type):
    return error_class(
        error_type,
        meta=MagicMock(status=status),
        body={"error": {"root_cause": [{"type": error_type, "reason": error_type}]}},
    )


class TestIndexLifecycleManager(unittest.TestCase):
    """IndexLifecycleManager 类单元测试."""

    def setUp(self):
        """设置测试环境."""
        self.es_client = MagicMock()
        self.es_client.indices = MagicMock()
        self.config = ManagerConfig(name="default", index_name="catalog", mapping=MAPPING)
        self.manager = IndexLifecycleManager(self.config, self.es_client)

    def test_initialization(self):
        """测试初始化时当前索引为基础索引名."""
        self.assertEqual(self.manager.current_index_name, "catalog")
        self.assertEqual(self.manager.alias_name, "catalog")
        self.assertEqual(self.manager.name, "default")
        self.assertEqual(self.manager.mapping, MAPPING)

    def test_initialization_without_client(self):
        """测试客户端为 None."""
        with self.assertRaises(ValueError):
            IndexLifecycleManager(self.config, None)

    def test_index_exists_defaults_to_current(self):
        """测试默认检查当前索引."""
        self.es_client.indices.exists.return_value = True
        self.manager.current_index_name = "catalog-1"

        self.assertTrue(self.manager.index_exists())
        self.es_client.indices.exists.assert_called_once_with(index="catalog-1")

    def test_index_not_exists(self):
        """测试检查索引不存在."""
        self.es_client.indices.exists.return_value = False

        self.assertFalse(self.manager.index_exists("catalog"))

    def test_index_exists_connection_error(self):
        """测试通信失败时抛出异常而不是返回 False."""
        self.es_client.indices.exists.side_effect = ConnectionError("refused")

        with self.assertRaises(EngineCommunicationError):
            self.manager.index_exists("catalog")

    def test_create_index_with_mapping(self):
        """测试带映射创建索引."""
        self.es_client.indices.create.return_value = {"acknowledged": True}

        result = self.manager.create_index("catalog-1", MAPPING)

        self.assertTrue(result)
        self.es_client.indices.create.assert_called_once_with(
            index="catalog-1", body=MAPPING
        )

    def test_create_index_without_mapping(self):
        """测试不带映射创建索引时不发送请求体."""
        self.es_client.indices.create.return_value = {"acknowledged": True}

        self.manager.create_index()

        self.es_client.indices.create.assert_called_once_with(index="catalog")

    def test_create_index_not_acknowledged(self):
        """测试创建请求未被确认."""
        self.es_client.indices.create.return_value = {"acknowledged": False}

        self.assertFalse(self.manager.create_index("catalog"))

    def test_create_index_already_exists(self):
        """测试创建已存在的索引."""
        self.es_client.indices.create.side_effect = _api_error(
            BadRequestError, 400, "resource_already_exists_exception"
        )

        with self.assertRaises(IndexAlreadyExistsError):
            self.manager.create_index("catalog")

    def test_create_index_rejected(self):
        """测试引擎拒绝映射."""
        self.es_client.indices.create.side_effect = _api_error(
            BadRequestError, 400, "mapper_parsing_exception"
        )

        with self.assertRaises(IndexManagerError) as ctx:
            self.manager.create_index("catalog", MAPPING)
        self.assertNotIsInstance(ctx.exception, IndexAlreadyExistsError)

    def test_create_index_invalid_name(self):
        """测试索引名不符合规范时不发请求."""
        for name in ("Catalog", "_catalog", "cat alog", "cat*", ".."):
            with self.assertRaises(InvalidIndexNameError):
                self.manager.create_index(name)
        self.es_client.indices.create.assert_not_called()

    def test_invalid_name_is_value_error(self):
        """测试 InvalidIndexNameError 同时是 ValueError."""
        with self.assertRaises(ValueError):
            self.manager.create_index("UPPER")

    def test_drop_index(self):
        """测试删除索引."""
        self.es_client.indices.delete.return_value = {"acknowledged": True}

        self.assertTrue(self.manager.drop_index("catalog-1"))
        self.es_client.indices.delete.assert_called_once_with(index="catalog-1")

    def test_drop_index_not_found(self):
        """测试删除不存在的索引."""
        self.es_client.indices.delete.side_effect = _api_error(
            NotFoundError, 404, "index_not_found_exception"
        )

        with self.assertRaises(IndexNotFoundError):
            self.manager.drop_index("catalog-1")

    def test_get_mapping(self):
        """测试获取映射."""
        self.es_client.indices.get_mapping.return_value = {
            "catalog": {"mappings": {"properties": {"sku": {"type": "keyword"}}}}
        }

        mapping = self.manager.get_mapping()

        self.assertEqual(mapping, {"properties": {"sku": {"type": "keyword"}}})

    def test_get_mapping_through_alias(self):
        """测试通过别名获取映射时响应键为物理索引名."""
        self.es_client.indices.get_mapping.return_value = {
            "catalog-1": {"mappings": {"dynamic": "strict"}}
        }

        self.assertEqual(self.manager.get_mapping("catalog"), {"dynamic": "strict"})

    def test_get_mapping_empty(self):
        """测试未设置映射时返回空字典."""
        self.es_client.indices.get_mapping.return_value = {"catalog": {"mappings": {}}}

        self.assertEqual(self.manager.get_mapping(), {})

    def test_get_mapping_not_found(self):
        """测试获取不存在索引的映射."""
        self.es_client.indices.get_mapping.side_effect = _api_error(
            NotFoundError, 404, "index_not_found_exception"
        )

        with self.assertRaises(IndexNotFoundError):
            self.manager.get_mapping()

    def test_alias_exists(self):
        """测试检查别名是否存在."""
        self.es_client.indices.exists_alias.return_value = True

        self.assertTrue(self.manager.alias_exists("catalog"))
        self.es_client.indices.exists_alias.assert_called_once_with(name="catalog")

    def test_get_aliased_indices(self):
        """测试获取别名指向的索引."""
        self.es_client.indices.get_alias.return_value = {
            "catalog-1": {"aliases": {"catalog": {}}}
        }

        self.assertEqual(self.manager.get_aliased_indices("catalog"), {"catalog-1"})

    def test_get_aliased_indices_missing_alias(self):
        """测试别名不存在时返回空集合."""
        self.es_client.indices.get_alias.side_effect = _api_error(
            NotFoundError, 404, "aliases_not_found_exception"
        )

        self.assertEqual(self.manager.get_aliased_indices("catalog"), set())

    def test_swap_alias_single_request(self):
        """测试别名切换只发送一次请求，包含全部移除和添加动作."""
        self.es_client.indices.update_aliases.return_value = {"acknowledged": True}

        info = self.manager.swap_alias("catalog", {"catalog-2", "catalog-1"}, "catalog-3")

        self.es_client.indices.update_aliases.assert_called_once_with(
            body={
                "actions": [
                    {"remove": {"index": "catalog-1", "alias": "catalog"}},
                    {"remove": {"index": "catalog-2", "alias": "catalog"}},
                    {"add": {"index": "catalog-3", "alias": "catalog"}},
                ]
            }
        )
        self.assertEqual(info.removed_from, ["catalog-1", "catalog-2"])
        self.assertEqual(info.new_index, "catalog-3")
        self.assertTrue(info.acknowledged)
        self.es_client.indices.put_alias.assert_not_called()
        self.es_client.indices.delete_alias.assert_not_called()

    def test_swap_alias_first_rotation(self):
        """测试首次轮换时只有添加动作."""
        self.es_client.indices.update_aliases.return_value = {"acknowledged": True}

        info = self.manager.swap_alias("catalog", set(), "catalog-1")

        self.assertEqual(
            info.actions, [{"add": {"index": "catalog-1", "alias": "catalog"}}]
        )
        self.assertEqual(info.removed_from, [])

    def test_swap_alias_skips_target_in_from_indices(self):
        """测试目标索引不会同时被移除."""
        self.es_client.indices.update_aliases.return_value = {"acknowledged": True}

        info = self.manager.swap_alias("catalog", {"catalog-1"}, "catalog-1")

        self.assertEqual(info.removed_from, [])

    def test_swap_alias_rejected(self):
        """测试引擎拒绝切换请求."""
        self.es_client.indices.update_aliases.side_effect = _api_error(
            BadRequestError, 400, "illegal_argument_exception"
        )

        with self.assertRaises(AliasSwapError):
            self.manager.swap_alias("catalog", {"catalog-1"}, "catalog-2")
        self.es_client.indices.delete.assert_not_called()

    def test_swap_alias_connection_error(self):
        """测试切换时通信失败."""
        self.es_client.indices.update_aliases.side_effect = ConnectionError("reset")

        with self.assertRaises(AliasSwapError):
            self.manager.swap_alias("catalog", set(), "catalog-2")

    def test_swap_alias_not_acknowledged(self):
        """测试切换请求未被确认."""
        self.es_client.indices.update_aliases.return_value = {"acknowledged": False}

        with self.assertRaises(AliasSwapError):
            self.manager.swap_alias("catalog", set(), "catalog-2")


if __name__ == "__main__":
    unittest.main()

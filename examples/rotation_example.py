"""索引轮换使用示例.

本文件展示了如何使用 RotationOrchestrator 在别名后面零停机地重建索引。
运行前需要本地启动 Elasticsearch（http://localhost:9200）。
"""

from elasticsearch import Elasticsearch
from indexflow import (
    CreateIndexOptions,
    ManagerConfig,
    ManagerRegistry,
    RotationOrchestrator,
)

# 创建 Elasticsearch 客户端连接
es_client = Elasticsearch(["http://localhost:9200"])

# 启动时构建管理器注册表
registry = ManagerRegistry(
    [
        ManagerConfig(
            name="default",
            index_name="catalog",
            mapping={
                "settings": {"number_of_shards": 1, "number_of_replicas": 0},
                "mappings": {
                    "properties": {
                        "sku": {"type": "keyword"},
                        "title": {"type": "text"},
                    }
                },
            },
        )
    ]
)

orchestrator = RotationOrchestrator(registry, es_client)


# ==================== 示例1：别名轮换 ====================
def example_rotation():
    """创建新索引并把 catalog 别名原子地切换过去."""
    result = orchestrator.run(CreateIndexOptions(manager="default", alias=True))

    print(result.output)
    print(f"  状态: {result.state.value}")
    print(f"  新索引: {result.index_name}")
    print(f"  待清理的旧索引: {result.previous_indices}")
    return result


# ==================== 示例2：转储映射 ====================
def example_dump():
    """输出当前索引的映射."""
    result = orchestrator.run(CreateIndexOptions(manager="default", dump=True))
    print(result.output)
    return result


# ==================== 示例3：清理旧索引 ====================
def example_cleanup(previous_indices):
    """轮换不会删除旧索引，需要显式清理."""
    manager = orchestrator.get_manager("default")
    for index_name in previous_indices:
        manager.drop_index(index_name)
        print(f"已删除旧索引: {index_name}")


def main():
    """运行所有示例."""
    print("=" * 50)
    print("索引轮换示例")
    print("=" * 50)

    print("\n1. 第一次轮换")
    print("-" * 50)
    example_rotation()

    print("\n2. 第二次轮换")
    print("-" * 50)
    second = example_rotation()

    print("\n3. 转储映射")
    print("-" * 50)
    example_dump()

    print("\n4. 清理旧索引")
    print("-" * 50)
    example_cleanup(second.previous_indices)


if __name__ == "__main__":
    main()

"""
服务器资产查询服务 (Server Inventory Query Service)

编排服务器资产查询：基础记录查询 → 按需并发获取关联明细 → 按系统名称合并。

- 只有对应开关为真时才查询磁盘/网络/分区/存储库明细
- 多个关联查询通过 asyncio.gather 并发执行，各自占用一个连接池连接
- 任一关联查询失败即整体失败，不返回部分结果，尚未完成的其他查询被取消
- 合并结果的顺序与基础记录的顺序一致

Orchestrates inventory reads: base query, then the requested relation fetches run
concurrently with asyncio.gather, then an insertion-ordered merge keyed by system
name. Any relation failure fails the whole request and cancels the fetches still running.
"""
import asyncio
import logging
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import BusinessError, InternalError, NotFoundError
from app.models.server import ServerBasic, ServerDisk, ServerNetwork, ServerPartition, ServerRepository
from app.repositories.server_basic import ServerBasicRepository
from app.repositories.server_relations import (
    ServerDiskRepository,
    ServerNetworkRepository,
    ServerPartitionRepository,
    ServerRepositoryRepository,
)
from app.schemas.server import FilterOptions, ServerAggregate

logger = logging.getLogger(__name__)

RELATION_KINDS = ("disk", "network", "partition", "repository")


def combine_server_data(
    servers: Sequence[ServerBasic],
    disks: Iterable[ServerDisk] = (),
    networks: Iterable[ServerNetwork] = (),
    partitions: Iterable[ServerPartition] = (),
    repositories: Iterable[ServerRepository] = (),
) -> list[ServerAggregate]:
    """
    合并基础记录与关联明细 (Merge base records with relation rows)

    以系统名称为键、按基础记录顺序初始化有序映射；每条明细追加到对应聚合的列表中
    （首次追加时创建列表），找不到所属服务器的明细直接丢弃。
    """
    server_map: dict[str, ServerAggregate] = {}
    for server in servers:
        server_map[server.system_name] = ServerAggregate(server=server)

    for kind, rows in (
        ("disk", disks),
        ("network", networks),
        ("partition", partitions),
        ("repository", repositories),
    ):
        for row in rows:
            aggregate = server_map.get(row.system_name)
            if aggregate is None:
                continue
            items = getattr(aggregate, kind)
            if items is None:
                items = []
                setattr(aggregate, kind, items)
            items.append(row)

    return list(server_map.values())


class ServerService:
    """服务器资产查询服务，不保存任何请求级状态。"""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self.basic_repository = ServerBasicRepository(session_factory)
        self.disk_repository = ServerDiskRepository(session_factory)
        self.network_repository = ServerNetworkRepository(session_factory)
        self.partition_repository = ServerPartitionRepository(session_factory)
        self.repository_repository = ServerRepositoryRepository(session_factory)

    @staticmethod
    def wants_relations(filter_options: FilterOptions) -> bool:
        return any(getattr(filter_options, kind) for kind in RELATION_KINDS)

    async def attach_relations(
        self, filter_options: FilterOptions, servers: Sequence[ServerBasic]
    ) -> list[ServerAggregate]:
        """并发获取被请求的关联明细并合并到基础记录上。"""
        if not servers:
            return []

        system_names = [server.system_name for server in servers]
        fetchers = {
            "disk": self.disk_repository,
            "network": self.network_repository,
            "partition": self.partition_repository,
            "repository": self.repository_repository,
        }
        pending: dict[str, asyncio.Task[list[Any]]] = {
            kind: asyncio.create_task(repository.find_by_system_names(system_names))
            for kind, repository in fetchers.items()
            if getattr(filter_options, kind)
        }
        logger.debug("Fetching relations %s for %d servers", list(pending), len(system_names))

        try:
            results = await asyncio.gather(*pending.values())
        except BaseException:
            # 任一查询失败即取消其余查询，并回收它们的结果与异常
            for task in pending.values():
                task.cancel()
            await asyncio.gather(*pending.values(), return_exceptions=True)
            raise
        relations = dict(zip(pending.keys(), results))

        return combine_server_data(
            servers,
            disks=relations.get("disk", ()),
            networks=relations.get("network", ()),
            partitions=relations.get("partition", ()),
            repositories=relations.get("repository", ()),
        )

    async def get_servers_with_relations(self, filter_options: FilterOptions) -> list[ServerAggregate]:
        """查询服务器及被请求的关联明细。"""
        try:
            logger.debug("Querying servers with filters %s", filter_options.model_dump())
            servers = await self.basic_repository.find_all(filter_options)
            if not servers:
                return []

            result = await self.attach_relations(filter_options, servers)
            logger.info("Fetched %d servers with relation data", len(result))
            return result
        except BusinessError:
            raise
        except Exception as exc:
            logger.error("Failed to query servers with relations: %s", exc, exc_info=True)
            raise InternalError("查询服务器信息时发生错误 (Failed to query server information)") from exc

    async def get_all_servers(self, filter_options: FilterOptions) -> list[ServerAggregate]:
        """仅查询基础信息。"""
        servers = await self.basic_repository.find_all(filter_options)
        logger.info("Fetched %d servers", len(servers))
        return [ServerAggregate(server=server) for server in servers]

    async def list_servers(self, filter_options: FilterOptions) -> list[ServerAggregate]:
        """有关联开关时走关联查询，否则只查基础信息。"""
        if self.wants_relations(filter_options):
            return await self.get_servers_with_relations(filter_options)
        return await self.get_all_servers(filter_options)

    async def get_server_by_name(self, name: str, filter_options: FilterOptions) -> ServerAggregate:
        """按系统名称查询单台服务器，不存在时抛出 NotFoundError。"""
        servers = await self.basic_repository.find_by_name(name, filter_options)
        if not servers:
            raise NotFoundError(f"服务器不存在 (Server not found): {name}")
        return (await self._with_requested_relations(filter_options, servers[:1]))[0]

    async def get_server_by_id(self, server_id: int, filter_options: FilterOptions) -> ServerAggregate:
        """按 ID 查询单台服务器，不存在时抛出 NotFoundError。"""
        servers = await self.basic_repository.find_by_id(server_id, filter_options)
        if not servers:
            raise NotFoundError(f"服务器不存在 (Server not found): id={server_id}")
        return (await self._with_requested_relations(filter_options, servers[:1]))[0]

    async def _with_requested_relations(
        self, filter_options: FilterOptions, servers: Sequence[ServerBasic]
    ) -> list[ServerAggregate]:
        if self.wants_relations(filter_options):
            return await self.attach_relations(filter_options, servers)
        return [ServerAggregate(server=server) for server in servers]

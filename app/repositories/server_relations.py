"""
服务器关联明细仓储 (Server Relation Repositories)

磁盘、网络、分区、存储库四类明细各自独立查询，按系统名称集合过滤。
名称集合为空时直接返回空列表，不打开会话也不发出查询。

Disk, network, partition and repository rows are fetched independently, filtered by a
set of system names. An empty name set returns an empty list without opening a session.
"""
import logging
from typing import Any, Collection

from sqlalchemy import select

from app.models.server import ServerDisk, ServerNetwork, ServerPartition, ServerRepository
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class RelationRepository(BaseRepository):
    """关联明细查询基类，子类指定 model 与 label。"""
    model: Any = None
    label: str = ""

    async def find_by_system_names(self, system_names: Collection[str]) -> list[Any]:
        if not system_names:
            return []

        names = list(dict.fromkeys(system_names))
        query = (
            select(self.model)
            .where(self.model.system_name.in_(names))
            .order_by(self.model.id)
        )
        logger.debug("Querying %s for %d system names: %s", self.model.__tablename__, len(names), names)
        return await self.fetch_all(
            query,
            f"查询服务器{self.label}信息时发生错误 (Failed to query server {self.label} list)",
        )


class ServerDiskRepository(RelationRepository):
    model = ServerDisk
    label = "disk"


class ServerNetworkRepository(RelationRepository):
    model = ServerNetwork
    label = "network"


class ServerPartitionRepository(RelationRepository):
    model = ServerPartition
    label = "partition"


class ServerRepositoryRepository(RelationRepository):
    model = ServerRepository
    label = "repository"

"""
服务器基础信息仓储 (Server Basic Repository)

根据过滤选项构建条件查询：OS、连接状态、许可证分配三个可选谓词以 AND 组合，
按名称或 ID 查询时对应的等值谓词是必需的。谓词列表在每次调用中局部构建，
仓储实例本身不保存任何查询状态，并发请求之间互不干扰。

Builds the conditional query from filter options: optional OS, connection-state and
license-assignment predicates joined with AND; the name or id equality predicate is
mandatory for the single-server lookups. The predicate list is built locally per call;
the repository instance holds no query state, so concurrent requests never interfere.
"""
import logging
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.sql import ColumnElement, Select

from app.models.server import ServerBasic
from app.repositories.base import BaseRepository
from app.schemas.server import OS_FILTER_CODES, FilterOptions

logger = logging.getLogger(__name__)


def build_filter_conditions(filter_options: FilterOptions) -> list[ColumnElement[bool]]:
    """
    将过滤选项转换为谓词列表 (Translate filter options into a predicate list)

    - os 非空时：win → 1，lin → 2
    - state 非空时：与 status 做等值比较
    - license 为 assign 时 license_id > 0，为 unassign 时 license_id == 0，其他值不加谓词
    """
    conditions: list[ColumnElement[bool]] = []

    if filter_options.os:
        os_code = OS_FILTER_CODES.get(filter_options.os)
        if os_code is not None:
            conditions.append(ServerBasic.os == int(os_code))
        else:
            logger.warning("Ignoring unknown os filter value: %r", filter_options.os)

    if filter_options.state:
        conditions.append(ServerBasic.status == filter_options.state)

    if filter_options.license == "assign":
        conditions.append(ServerBasic.license_id > 0)
    elif filter_options.license == "unassign":
        conditions.append(ServerBasic.license_id == 0)

    return conditions


class ServerBasicRepository(BaseRepository):
    """服务器基础信息查询"""

    def build_query(
        self,
        filter_options: FilterOptions,
        system_name: Optional[str] = None,
        server_id: Optional[int] = None,
    ) -> Select:
        """构建查询语句；所有选项为空时不带 WHERE 子句。"""
        conditions: list[ColumnElement[bool]] = []
        if system_name is not None:
            conditions.append(ServerBasic.system_name == system_name)
        if server_id is not None:
            conditions.append(ServerBasic.id == server_id)
        conditions.extend(build_filter_conditions(filter_options))

        query = select(ServerBasic)
        if conditions:
            query = query.where(and_(*conditions))
        return query.order_by(ServerBasic.id)

    async def find_all(self, filter_options: FilterOptions) -> list[ServerBasic]:
        """查询所有符合过滤条件的服务器，无匹配时返回空列表。"""
        query = self.build_query(filter_options)
        logger.debug("Querying server_basic with filters %s", filter_options.model_dump())
        return await self.fetch_all(query, "查询服务器列表时发生错误 (Failed to query server list)")

    async def find_by_name(self, name: str, filter_options: FilterOptions) -> list[ServerBasic]:
        """按系统名称查询，名称谓词必需，其余过滤条件同 find_all。"""
        query = self.build_query(filter_options, system_name=name)
        logger.debug("Querying server_basic by name %r with filters %s", name, filter_options.model_dump())
        return await self.fetch_all(query, "按名称查询服务器时发生错误 (Failed to query server by name)")

    async def find_by_id(self, server_id: int, filter_options: FilterOptions) -> list[ServerBasic]:
        """按 ID 查询，ID 谓词必需，其余过滤条件同 find_all。"""
        query = self.build_query(filter_options, server_id=server_id)
        logger.debug("Querying server_basic by id %s with filters %s", server_id, filter_options.model_dump())
        return await self.fetch_all(query, "按 ID 查询服务器时发生错误 (Failed to query server by id)")

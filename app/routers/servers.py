"""
服务器资产路由 (Server Inventory Router)

功能说明：提供服务器资产的只读查询接口
核心职责：
  - 服务器列表查询，支持按 OS、连接状态、许可证分配过滤
  - 按开关附带磁盘/网络/分区/存储库明细
  - 按系统名称或 ID 查询单台服务器
  - detail 开关选择基础视图或详细视图
依赖关系：依赖 ServerService、过滤选项规范化和响应整形服务
API端点：GET /servers, GET /servers/name/{name}, GET /servers/id/{server_id}
"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.core.deps import get_server_service
from app.core.responses import success_response
from app.schemas.server import FilterOptions, ServerFilterQuery
from app.services.server_filter import normalize_filter_options
from app.services.server_service import ServerService
from app.services.server_view import shape_server, shape_servers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/servers", tags=["servers"])


def get_filter_options(query: Annotated[ServerFilterQuery, Query()]) -> FilterOptions:
    """
    查询参数 → FilterOptions

    枚举值与布尔开关的合法性由 ServerFilterQuery 校验（失败返回 400），
    校验通过后交给规范化函数生成确定的过滤选项。
    """
    filter_options = normalize_filter_options(query.model_dump(exclude_none=True))
    logger.debug("Normalized server filters: %s", filter_options.model_dump())
    return filter_options


@router.get("")
async def list_servers(
    filter_options: FilterOptions = Depends(get_filter_options),
    service: ServerService = Depends(get_server_service),
):
    """
    服务器列表查询 (Server List)

    无匹配记录时返回空列表（200），不视为错误。

    Examples:
        GET /api/v1/servers?os=win&state=connect&disk=true&detail=true
    """
    aggregates = await service.list_servers(filter_options)
    return success_response(data=shape_servers(aggregates, filter_options.detail))


@router.get("/name/{name}")
async def get_server_by_name(
    name: str,
    filter_options: FilterOptions = Depends(get_filter_options),
    service: ServerService = Depends(get_server_service),
):
    """按系统名称查询单台服务器，不存在时返回 404。"""
    aggregate = await service.get_server_by_name(name, filter_options)
    return success_response(data=shape_server(aggregate, filter_options.detail))


@router.get("/id/{server_id}")
async def get_server_by_id(
    server_id: int,
    filter_options: FilterOptions = Depends(get_filter_options),
    service: ServerService = Depends(get_server_service),
):
    """按 ID 查询单台服务器，不存在时返回 404。"""
    aggregate = await service.get_server_by_id(server_id, filter_options)
    return success_response(data=shape_server(aggregate, filter_options.detail))

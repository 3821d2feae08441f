"""
服务器响应整形服务 (Server Response Shaping Service)

将聚合结果转换为基础或详细两种响应视图：
- 枚举代码映射为显示标签，未知代码统一渲染为 "Unknown"
- 字节数格式化为 B/KB/MB/GB/TB/PB，保留两位小数
- 许可证 ID 为 0 时渲染为 "Unassigned"
- 详细视图中的关联数组仅在非空时出现

Turns aggregates into the basic or detailed response view: enum codes become
display labels (unknown codes render "Unknown"), byte counts are formatted with
two decimals, license 0 renders "Unassigned", and nested arrays appear in the
detailed view only when non-empty.
"""
import enum
import logging
import re
from typing import Any, Iterable, Mapping, Optional, TypeVar

from app.models.server import ServerBasic, ServerDisk, ServerNetwork, ServerPartition, ServerRepository
from app.schemas.server import (
    DISK_TYPE_LABELS,
    OS_TYPE_LABELS,
    REPOSITORY_TYPE_LABELS,
    SYSTEM_MODE_LABELS,
    UNASSIGNED_LICENSE,
    UNKNOWN_LABEL,
    DiskInfo,
    DiskType,
    NetworkInfo,
    OSType,
    PartitionInfo,
    RepositoryInfo,
    RepositoryType,
    ServerAggregate,
    ServerBasicView,
    ServerDetailView,
    SystemMode,
    dump_view,
)

logger = logging.getLogger(__name__)

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
MISSING_MAC = "-"
NOT_AVAILABLE = "N/A"
_LEADING_INT = re.compile(r"\s*[+-]?\d+")

E = TypeVar("E", bound=enum.Enum)


# ── 基础格式化 ────────────────────────────────────────────────────────

def format_disk_size(value: Any) -> str:
    """
    格式化字节数 (Format byte count)

    取字符串开头的整数部分（"1536.0" → 1536）；缺失值返回 "Unknown"；没有前导整数或为 0 时原样返回；
    其余按 1024 逐级换算直到小于 1024 或到达 PB。例如 "1024" → "1.00 KB"，"1073741824" → "1.00 GB"。
    """
    if value is None:
        return UNKNOWN_LABEL
    match = _LEADING_INT.match(str(value))
    if match is None:
        return str(value)

    try:
        size = float(int(match.group()))
        if size == 0:
            return str(value)
        unit_index = 0
        while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
            size /= 1024
            unit_index += 1
        return f"{size:.2f} {SIZE_UNITS[unit_index]}"
    except (ValueError, OverflowError):
        logger.warning("Failed to format size value %.40r", value, exc_info=True)
        return UNKNOWN_LABEL


def format_size_with_bytes(value: Any) -> str:
    """渲染为 "<字节数> (<格式化值>)"。"""
    if value is None:
        return UNKNOWN_LABEL
    return f"{value} ({format_disk_size(value)})"


def format_usage(used: Optional[int], size: Optional[int]) -> str:
    """分区使用率，分区大小为 0 或缺失时返回 "N/A"。"""
    if not size:
        return NOT_AVAILABLE
    return f"{(used or 0) / size * 100:.2f}%"


def lookup_label(code: Optional[int], enum_type: type[E], labels: Mapping[E, str]) -> str:
    """枚举代码到标签的全映射查找，未知代码返回 "Unknown"。"""
    try:
        return labels.get(enum_type(code), UNKNOWN_LABEL)
    except ValueError:
        return UNKNOWN_LABEL


def _text(value: Optional[str], default: str = UNKNOWN_LABEL) -> str:
    return value if value else default


def render_license(license_id: Optional[int]) -> int | str:
    return license_id if license_id else UNASSIGNED_LICENSE


# ── 关联明细视图 ──────────────────────────────────────────────────────

def to_disk_info(disk: ServerDisk) -> DiskInfo:
    return DiskInfo(
        device=_text(disk.device),
        disk_type=lookup_label(disk.disk_type, DiskType, DISK_TYPE_LABELS),
        disk_size=format_size_with_bytes(disk.disk_size),
        last_updated=_text(disk.last_update_time),
    )


def to_network_info(network: ServerNetwork) -> NetworkInfo:
    return NetworkInfo(
        name=_text(network.network_name),
        ip_address=_text(network.ip_address),
        subnet=_text(network.subnet),
        gateway=_text(network.gateway),
        mac_address=_text(network.mac_address, MISSING_MAC),
        last_updated=_text(network.last_update_time),
    )


def to_partition_info(partition: ServerPartition) -> PartitionInfo:
    return PartitionInfo(
        letter=_text(partition.letter),
        device=_text(partition.device),
        file_system=_text(partition.file_system),
        size=format_size_with_bytes(partition.part_size),
        used=format_size_with_bytes(partition.part_used),
        free=format_size_with_bytes(partition.part_free),
        usage=format_usage(partition.part_used, partition.part_size),
        last_updated=_text(partition.last_update_time),
    )


def to_repository_info(repository: ServerRepository) -> RepositoryInfo:
    # 远程凭据 (remote_user/remote_password/remote_domain) 不输出
    return RepositoryInfo(
        type=lookup_label(repository.type, RepositoryType, REPOSITORY_TYPE_LABELS),
        os=lookup_label(repository.os, OSType, OS_TYPE_LABELS),
        local_path=_text(repository.local_path),
        remote_path=_text(repository.remote_path),
        ip_address=_text(repository.ip_address),
        used=format_size_with_bytes(repository.used_size),
        free=format_size_with_bytes(repository.free_size),
        last_updated=_text(repository.last_update_time),
    )


# ── 服务器视图 ────────────────────────────────────────────────────────

def _basic_fields(server: ServerBasic) -> dict[str, Any]:
    return {
        "system_name": server.system_name,
        "system_mode": lookup_label(server.system_mode, SystemMode, SYSTEM_MODE_LABELS),
        "os": lookup_label(server.os, OSType, OS_TYPE_LABELS),
        "version": _text(server.os_version),
        "ip": _text(server.ip_address),
        "status": _text(server.status),
        "license_id": render_license(server.license_id),
    }


def to_basic_view(aggregate: ServerAggregate) -> ServerBasicView:
    """基础视图：名称、模式、OS、版本、IP、状态、许可证。"""
    return ServerBasicView(**_basic_fields(aggregate.server))


def to_detail_view(aggregate: ServerAggregate) -> ServerDetailView:
    """
    详细视图 (Detailed view)

    关联数组只在非空时传入构造函数，序列化时配合 exclude_unset 整体省略对应键。
    """
    server = aggregate.server
    fields = _basic_fields(server)
    fields.update(
        agent_version=_text(server.agent_version),
        model=_text(server.model),
        manufacturer=_text(server.manufacturer),
        cpu_name=_text(server.cpu_name),
        cpu_count=_text(server.number_of_processors),
        memory=format_disk_size(server.total_physical_memory),
    )
    if aggregate.disk:
        fields["disks"] = [to_disk_info(d) for d in aggregate.disk]
    if aggregate.network:
        fields["networks"] = [to_network_info(n) for n in aggregate.network]
    if aggregate.partition:
        fields["partitions"] = [to_partition_info(p) for p in aggregate.partition]
    if aggregate.repository:
        fields["repositories"] = [to_repository_info(r) for r in aggregate.repository]
    return ServerDetailView(**fields)


def shape_server(aggregate: ServerAggregate, detail: bool) -> dict[str, Any]:
    view = to_detail_view(aggregate) if detail else to_basic_view(aggregate)
    return dump_view(view)


def shape_servers(aggregates: Iterable[ServerAggregate], detail: bool) -> list[dict[str, Any]]:
    """按 detail 开关把聚合结果整形为响应字典列表，保持输入顺序。"""
    return [shape_server(aggregate, detail) for aggregate in aggregates]

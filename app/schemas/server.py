"""
服务器资产相关的请求/响应数据模型。

包含枚举代码与显示标签映射、过滤选项、请求查询参数校验、聚合结果以及基础/详细两种响应视图。
"""
from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.server import ServerBasic, ServerDisk, ServerNetwork, ServerPartition, ServerRepository

UNKNOWN_LABEL = "Unknown"
UNASSIGNED_LICENSE = "Unassigned"


class SystemMode(int, enum.Enum):
    """系统注册模式。"""
    SOURCE = 1
    TARGET = 2
    RECOVERY = 3
    VSM = 10


class OSType(int, enum.Enum):
    """操作系统类型。"""
    WINDOWS = 1
    LINUX = 2
    CLOUD = 3


class DiskType(int, enum.Enum):
    """磁盘分区表类型。"""
    BIOS = 0
    GPT = 1


class RepositoryType(int, enum.Enum):
    """存储库类型。"""
    SOURCE = 1
    TARGET = 2
    VSM = 10
    NETWORK = 20
    CLOUD = 30
    UNKNOWN = 99


SYSTEM_MODE_LABELS: dict[SystemMode, str] = {
    SystemMode.SOURCE: "Source",
    SystemMode.TARGET: "Target",
    SystemMode.RECOVERY: "Recovery",
    SystemMode.VSM: "VSM",
}

OS_TYPE_LABELS: dict[OSType, str] = {
    OSType.WINDOWS: "Window",
    OSType.LINUX: "Linux",
    OSType.CLOUD: "Cloud",
}

DISK_TYPE_LABELS: dict[DiskType, str] = {
    DiskType.BIOS: "Bios",
    DiskType.GPT: "Gpt",
}

REPOSITORY_TYPE_LABELS: dict[RepositoryType, str] = {
    RepositoryType.SOURCE: "Source",
    RepositoryType.TARGET: "Target",
    RepositoryType.VSM: "VSM",
    RepositoryType.NETWORK: "Network",
    RepositoryType.CLOUD: "Cloud Storage",
    RepositoryType.UNKNOWN: UNKNOWN_LABEL,
}

# 查询参数中的 os 值与库内代码的对应关系
OS_FILTER_CODES: dict[str, OSType] = {
    "win": OSType.WINDOWS,
    "lin": OSType.LINUX,
}


# ── 过滤选项 ──────────────────────────────────────────────────────────

class FilterOptions(BaseModel):
    """
    规范化后的过滤选项。

    空字符串表示"不限制"，布尔值在规范化后总是确定的 True/False。
    """
    model_config = ConfigDict(frozen=True)

    os: str = ""
    state: str = ""
    license: str = ""
    network: bool = False
    disk: bool = False
    partition: bool = False
    repository: bool = False
    detail: bool = False


BoolFlag = Literal["true", "false", "True", "False", "TRUE", "FALSE"]


class ServerFilterQuery(BaseModel):
    """
    服务器列表查询参数校验。

    非法的 os/state/license 或非布尔的开关值在进入服务层之前以 400 拒绝。
    """
    os: Optional[Literal["win", "lin", ""]] = None
    state: Optional[Literal["connect", "disconnect", ""]] = None
    license: Optional[Literal["assign", "unassign", ""]] = None
    network: Optional[BoolFlag] = None
    disk: Optional[BoolFlag] = None
    partition: Optional[BoolFlag] = None
    repository: Optional[BoolFlag] = None
    detail: Optional[BoolFlag] = None


# ── 聚合结果 ──────────────────────────────────────────────────────────

class ServerAggregate(BaseModel):
    """
    单台服务器的聚合视图：基础记录加上按需获取的关联明细。

    关联列表为 None 表示未请求或没有匹配行；首次追加时创建列表。
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    server: ServerBasic
    disk: Optional[list[ServerDisk]] = None
    network: Optional[list[ServerNetwork]] = None
    partition: Optional[list[ServerPartition]] = None
    repository: Optional[list[ServerRepository]] = None


# ── 响应视图 ──────────────────────────────────────────────────────────

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DiskInfo(_CamelModel):
    device: str
    disk_type: str
    disk_size: str
    last_updated: str


class NetworkInfo(_CamelModel):
    name: str
    ip_address: str
    subnet: str
    gateway: str
    mac_address: str
    last_updated: str


class PartitionInfo(_CamelModel):
    letter: str
    device: str
    file_system: str
    size: str
    used: str
    free: str
    usage: str
    last_updated: str


class RepositoryInfo(_CamelModel):
    type: str
    os: str
    local_path: str
    remote_path: str
    ip_address: str
    used: str
    free: str
    last_updated: str


class ServerBasicView(_CamelModel):
    """基础响应视图。"""
    system_name: str
    system_mode: str
    os: str
    version: str
    ip: str
    status: str
    license_id: Union[int, str] = Field(alias="licenseID")


class ServerDetailView(ServerBasicView):
    """详细响应视图，关联列表仅在非空时出现。"""
    agent_version: str
    model: str
    manufacturer: str
    cpu_name: str
    cpu_count: str
    memory: str
    disks: Optional[list[DiskInfo]] = None
    networks: Optional[list[NetworkInfo]] = None
    partitions: Optional[list[PartitionInfo]] = None
    repositories: Optional[list[RepositoryInfo]] = None


def dump_view(view: ServerBasicView) -> dict[str, Any]:
    """序列化视图：使用 camelCase 键，未设置的关联列表键整体省略。"""
    return view.model_dump(by_alias=True, exclude_unset=True)

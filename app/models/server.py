"""
服务器资产模型 (Server Inventory Models)

定义服务器基础信息表以及磁盘、网络、分区、存储库四张关联表。
关联表通过 system_name 弱引用所属服务器（无外键），可独立查询，也可能没有任何行。

Defines the base server inventory table and its four relation tables (disk, network,
partition, repository). Relation rows reference their server weakly by system_name
(no foreign key); they are queried independently and may be empty for a server.
"""
from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ServerBasic(Base):
    """
    服务器基础信息表 (Server Basic Table)

    每行代表一台受管服务器，system_name 是关联各明细表的自然键。

    One row per managed server; system_name is the natural key joining the relation tables.
    """
    __tablename__ = "server_basic"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)  # 主键 ID (Primary Key ID)
    user_id: Mapped[int] = mapped_column(Integer, default=0)  # 所属用户 (Owning User)
    group_id: Mapped[int] = mapped_column(Integer, default=0)  # 所属分组 (Owning Group)
    center_id: Mapped[int] = mapped_column(Integer, default=0)  # 所属中心 (Owning Center)
    system_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)  # 系统名称（自然键） (System Name, natural key)
    system_name_display: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 显示名称 (Display Name)
    system_mode: Mapped[int] = mapped_column(Integer, default=1)  # 注册模式：1 源/2 目标/3 恢复/10 VSM (System Mode)
    csm_type: Mapped[int] = mapped_column(Integer, default=0)  # 平台类型：0 本地/1 AWS/2 Azure/... (CSM Platform Type)
    agent_version: Mapped[str | None] = mapped_column(String(50), nullable=True)  # Agent 版本 (Agent Version)
    os: Mapped[int] = mapped_column(Integer, default=1)  # 操作系统：1 Windows/2 Linux/3 Cloud (OS Type)
    os_version: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 操作系统版本 (OS Version)
    ip_address: Mapped[str | None] = mapped_column(String(255), nullable=True)  # IP 地址 (IP Address)
    private_ip_address: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 内网 IP (Private IP)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 硬件型号 (Hardware Model)
    organization: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 组织 (Organization)
    manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 制造商 (Manufacturer)
    system_type: Mapped[str | None] = mapped_column(String(100), nullable=True)  # 系统类型，如 x64 (System Type)
    cpu_name: Mapped[str | None] = mapped_column(String(255), nullable=True)  # CPU 名称 (CPU Name)
    number_of_processors: Mapped[str | None] = mapped_column(String(20), nullable=True)  # CPU 数量 (Processor Count)
    total_physical_memory: Mapped[str | None] = mapped_column(String(50), nullable=True)  # 物理内存（字节） (Physical Memory, bytes)
    network_id: Mapped[int] = mapped_column(Integer, default=0)  # 网络 ID (Network ID)
    kernel_version: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 内核版本 (Kernel Version)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="disconnect")  # 连接状态 (Connection Status)
    last_update_time: Mapped[str | None] = mapped_column(String(50), nullable=True)  # 最后更新时间 (Last Update Time)
    flags: Mapped[int] = mapped_column(Integer, default=0)  # 标志位 (Flags)
    origin_system_name: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 原始系统名称 (Origin System Name)
    license_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # 许可证 ID，0 表示未分配 (License ID, 0 = unassigned)


class ServerDisk(Base):
    """服务器磁盘表 (Server Disk Table)"""
    __tablename__ = "server_disk"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, default=0)
    group_id: Mapped[int] = mapped_column(Integer, default=0)
    center_id: Mapped[int] = mapped_column(Integer, default=0)
    system_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    disk_type: Mapped[int] = mapped_column(Integer, default=0)  # 磁盘分区表：0 BIOS/1 GPT (Disk Type)
    disk_num: Mapped[int] = mapped_column(Integer, default=0)
    disk_size: Mapped[str | None] = mapped_column(String(50), nullable=True)  # 磁盘大小（字节字符串） (Disk Size, bytes as string)
    disk_caption: Mapped[str | None] = mapped_column(String(255), nullable=True)
    device: Mapped[str | None] = mapped_column(String(255), nullable=True)
    product: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vendor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_update_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    flags: Mapped[int] = mapped_column(Integer, default=0)


class ServerNetwork(Base):
    """服务器网卡表 (Server Network Table)"""
    __tablename__ = "server_network"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, default=0)
    group_id: Mapped[int] = mapped_column(Integer, default=0)
    center_id: Mapped[int] = mapped_column(Integer, default=0)
    system_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    network_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subnet: Mapped[str | None] = mapped_column(String(255), nullable=True)
    gateway: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mac_address: Mapped[str | None] = mapped_column(String(50), nullable=True)
    last_update_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    flags: Mapped[int] = mapped_column(Integer, default=0)


class ServerPartition(Base):
    """
    服务器分区表 (Server Partition Table)

    大小字段单位均为字节，预期 used + free == size，但不做强制约束。
    """
    __tablename__ = "server_partition"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, default=0)
    group_id: Mapped[int] = mapped_column(Integer, default=0)
    center_id: Mapped[int] = mapped_column(Integer, default=0)
    system_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    disk_num: Mapped[int] = mapped_column(Integer, default=0)
    partition_num: Mapped[int] = mapped_column(Integer, default=0)
    part_size: Mapped[int] = mapped_column(BigInteger, default=0)  # 分区大小（字节） (Size, bytes)
    part_used: Mapped[int] = mapped_column(BigInteger, default=0)  # 已用（字节） (Used, bytes)
    part_free: Mapped[int] = mapped_column(BigInteger, default=0)  # 可用（字节） (Free, bytes)
    letter: Mapped[str | None] = mapped_column(String(255), nullable=True)  # 盘符或挂载点 (Drive Letter / Mount Point)
    caption: Mapped[str | None] = mapped_column(String(255), nullable=True)  # Windows 专用 (Windows only)
    device: Mapped[str | None] = mapped_column(String(255), nullable=True)  # Linux 专用 (Linux only)
    file_system: Mapped[str | None] = mapped_column(String(50), nullable=True)
    flag: Mapped[str | None] = mapped_column(String(50), nullable=True)
    last_update_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    flags: Mapped[int] = mapped_column(Integer, default=0)


class ServerRepository(Base):
    """
    服务器存储库表 (Server Repository Table)

    记录服务器挂载的备份存储位置，remote_password 仅供内部使用，不对外输出。
    """
    __tablename__ = "server_repository"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, default=0)
    group_id: Mapped[int] = mapped_column(Integer, default=0)
    center_id: Mapped[int] = mapped_column(Integer, default=0)
    system_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    os: Mapped[int] = mapped_column(Integer, default=1)  # 操作系统：1 Windows/2 Linux/3 Cloud (OS Type)
    type: Mapped[int] = mapped_column(Integer, default=99)  # 存储库类型：1/2/10/20/30/99 (Repository Type)
    used_size: Mapped[int] = mapped_column(BigInteger, default=0)
    free_size: Mapped[int] = mapped_column(BigInteger, default=0)
    local_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    remote_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    remote_user: Mapped[str | None] = mapped_column(String(255), nullable=True)
    remote_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    remote_domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    converter_ip_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    converter_port: Mapped[int] = mapped_column(Integer, default=0)
    cloud_connect_info: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    last_update_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    flags: Mapped[int] = mapped_column(Integer, default=0)

"""create server inventory tables

Revision ID: 001_inventory
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_inventory"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _owner_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("group_id", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("center_id", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("system_name", sa.String(255), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "server_basic",
        *_owner_columns(),
        sa.Column("system_name_display", sa.String(255), nullable=True),
        sa.Column("system_mode", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("csm_type", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("agent_version", sa.String(50), nullable=True),
        sa.Column("os", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("os_version", sa.String(255), nullable=True),
        sa.Column("ip_address", sa.String(255), nullable=True),
        sa.Column("private_ip_address", sa.String(255), nullable=True),
        sa.Column("model", sa.String(255), nullable=True),
        sa.Column("organization", sa.String(255), nullable=True),
        sa.Column("manufacturer", sa.String(255), nullable=True),
        sa.Column("system_type", sa.String(100), nullable=True),
        sa.Column("cpu_name", sa.String(255), nullable=True),
        sa.Column("number_of_processors", sa.String(20), nullable=True),
        sa.Column("total_physical_memory", sa.String(50), nullable=True),
        sa.Column("network_id", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("kernel_version", sa.String(255), nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="disconnect"),
        sa.Column("last_update_time", sa.String(50), nullable=True),
        sa.Column("flags", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("origin_system_name", sa.String(255), nullable=True),
        sa.Column("license_id", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_server_basic_system_name", "server_basic", ["system_name"])

    op.create_table(
        "server_disk",
        *_owner_columns(),
        sa.Column("disk_type", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("disk_num", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("disk_size", sa.String(50), nullable=True),
        sa.Column("disk_caption", sa.String(255), nullable=True),
        sa.Column("device", sa.String(255), nullable=True),
        sa.Column("product", sa.String(255), nullable=True),
        sa.Column("vendor", sa.String(255), nullable=True),
        sa.Column("last_update_time", sa.String(50), nullable=True),
        sa.Column("flags", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_server_disk_system_name", "server_disk", ["system_name"])

    op.create_table(
        "server_network",
        *_owner_columns(),
        sa.Column("network_name", sa.String(255), nullable=True),
        sa.Column("ip_address", sa.String(255), nullable=True),
        sa.Column("subnet", sa.String(255), nullable=True),
        sa.Column("gateway", sa.String(255), nullable=True),
        sa.Column("mac_address", sa.String(50), nullable=True),
        sa.Column("last_update_time", sa.String(50), nullable=True),
        sa.Column("flags", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_server_network_system_name", "server_network", ["system_name"])

    op.create_table(
        "server_partition",
        *_owner_columns(),
        sa.Column("disk_num", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("partition_num", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("part_size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("part_used", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("part_free", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("letter", sa.String(255), nullable=True),
        sa.Column("caption", sa.String(255), nullable=True),
        sa.Column("device", sa.String(255), nullable=True),
        sa.Column("file_system", sa.String(50), nullable=True),
        sa.Column("flag", sa.String(50), nullable=True),
        sa.Column("last_update_time", sa.String(50), nullable=True),
        sa.Column("flags", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_server_partition_system_name", "server_partition", ["system_name"])

    op.create_table(
        "server_repository",
        *_owner_columns(),
        sa.Column("os", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("type", sa.Integer(), nullable=False, server_default="99"),
        sa.Column("used_size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("free_size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("local_path", sa.String(1024), nullable=True),
        sa.Column("remote_path", sa.String(1024), nullable=True),
        sa.Column("remote_user", sa.String(255), nullable=True),
        sa.Column("remote_password", sa.String(255), nullable=True),
        sa.Column("remote_domain", sa.String(255), nullable=True),
        sa.Column("ip_address", sa.String(255), nullable=True),
        sa.Column("converter_ip_address", sa.String(255), nullable=True),
        sa.Column("converter_port", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cloud_connect_info", sa.String(2048), nullable=True),
        sa.Column("last_update_time", sa.String(50), nullable=True),
        sa.Column("flags", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_server_repository_system_name", "server_repository", ["system_name"])


def downgrade() -> None:
    for table in ("server_repository", "server_partition", "server_network", "server_disk", "server_basic"):
        op.drop_index(f"ix_{table}_system_name", table_name=table)
        op.drop_table(table)

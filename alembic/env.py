"""Alembic 迁移环境 (Migration Environment)

服务器资产表（server_basic 及四张明细表）与账户表（user_info、business_accounts、
business_addresses）的迁移入口。连接 URL 取自 settings.database_url，
在线模式通过 asyncio 驱动 asyncpg 引擎。
"""
import asyncio
import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import async_engine_from_config

from app.core.config import settings
from app.core.database import Base
import app.models  # noqa: F401  注册全部 ORM 模型供 autogenerate 比对

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    # 列类型变化（如 disk_size 长度）也纳入 autogenerate 比对
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


def run_migrations_offline() -> None:
    """离线模式：只输出 SQL，不连接数据库。"""
    _configure(url=config.get_main_option("sqlalchemy.url"), literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    url = make_url(config.get_main_option("sqlalchemy.url"))
    logger.info("Migrating %s on %s:%s", url.database, url.host, url.port)
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())

"""
数据库连接模块 (Database Connection Module)

基于 SQLAlchemy 2.0 异步模式创建数据库引擎和会话管理。
包含有界连接池引擎、会话工厂、ORM 基类、事务作用域、会话工厂依赖和连通性检查。

Creates database engine and session management based on SQLAlchemy 2.0 async mode.
Includes the bounded-pool engine, session factory, ORM base class, transaction scope,
the session-factory dependency and the connectivity check.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

logger = logging.getLogger(__name__)

# 创建异步数据库引擎 (Create Async Database Engine)
# 连接池有界：最多 pool_size + max_overflow 个连接
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
)

# 创建异步会话工厂 (Create Async Session Factory)
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False  # 提交后不过期对象，便于访问已保存的数据 (Don't expire objects after commit)
)


class Base(DeclarativeBase):
    """
    ORM 模型基类 (ORM Model Base Class)

    SQLAlchemy 2.0 的声明式基类，所有数据模型都继承此类。

    SQLAlchemy 2.0 declarative base class that all data models inherit from.
    """
    pass


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """
    事务作用域 (Transaction Scope)

    成功退出时提交，异常或取消时回滚，任何路径下都会关闭会话并归还连接。

    Commits on success, rolls back on error or cancellation, and always closes the
    session so the connection returns to the pool.
    """
    factory = session_factory or async_session
    async with factory() as session:
        async with session.begin():
            yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    FastAPI 依赖项：获取会话工厂 (FastAPI Dependency: Get Session Factory)

    仓储层按查询获取独立会话，使并发读取各自占用一个连接。

    Repositories open one session per query so concurrent reads each hold their own connection.
    """
    return async_session


async def check_connection(session_factory: async_sessionmaker[AsyncSession] | None = None) -> bool:
    """数据库连通性检查 (Database connectivity check)"""
    factory = session_factory or async_session
    try:
        async with factory() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        logger.error("Database connection check failed: %s", exc)
        return False

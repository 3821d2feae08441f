"""
仓储基类 (Repository Base)

每个仓储持有一个会话工厂，按查询打开独立会话并在结束后立即归还连接。
底层 SQLAlchemy 异常在此处被记录并转换为 DatabaseError，原始驱动信息不会泄露给调用方；
唯一约束冲突转换为 ConflictError。

Each repository holds a session factory, opens one session per query and returns the
connection right after. SQLAlchemy failures are logged here and re-raised as
DatabaseError so driver messages never reach callers; unique-constraint violations
become ConflictError.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Select

from app.core.database import async_session, transaction
from app.core.exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)


class BaseRepository:
    """仓储基类"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        self.session_factory = session_factory or async_session

    async def fetch_all(self, query: Select, error_message: str) -> list[Any]:
        """执行查询并返回全部 ORM 实体，失败时抛出 DatabaseError。"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.error("%s: %s", error_message, exc)
            raise DatabaseError(error_message) from exc

    async def fetch_one(self, query: Select, error_message: str) -> Any | None:
        rows: Sequence[Any] = await self.fetch_all(query.limit(1), error_message)
        return rows[0] if rows else None

    @asynccontextmanager
    async def write_scope(self, error_message: str) -> AsyncIterator[AsyncSession]:
        """
        写操作事务作用域 (Write transaction scope)

        成功提交，失败回滚；唯一约束冲突抛出 ConflictError，其他数据库异常抛出 DatabaseError。
        """
        try:
            async with transaction(self.session_factory) as session:
                yield session
        except IntegrityError as exc:
            logger.warning("%s: integrity violation: %s", error_message, exc.orig)
            raise ConflictError("数据已存在或违反唯一约束 (Record already exists)") from exc
        except SQLAlchemyError as exc:
            logger.error("%s: %s", error_message, exc)
            raise DatabaseError(error_message) from exc

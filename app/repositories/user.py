"""
用户仓储 (User Repository)

user_info 表的读写。写操作在 write_scope 事务内完成，写入后在新会话中重新读取，
确保服务端默认值（创建/更新时间）已加载。
"""
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, update

from app.models.user import User
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    """用户表读写"""

    async def find_all(self) -> list[User]:
        return await self.fetch_all(
            select(User).order_by(User.id),
            "查询用户列表时发生错误 (Failed to query users)",
        )

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.fetch_one(
            select(User).where(User.id == user_id),
            "查询用户时发生错误 (Failed to query user)",
        )

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.fetch_one(
            select(User).where(User.email == email),
            "按邮箱查询用户时发生错误 (Failed to query user by email)",
        )

    async def create(self, *, name: str, email: str, hashed_password: str) -> User:
        async with self.write_scope("创建用户时发生错误 (Failed to create user)") as session:
            user = User(name=name, email=email, hashed_password=hashed_password)
            session.add(user)
            await session.flush()
            user_id = user.id
        logger.info("Created user id=%s", user_id)
        return await self.find_by_id(user_id)

    async def update(self, user_id: int, values: dict[str, Any]) -> Optional[User]:
        """更新指定字段，用户不存在时返回 None。"""
        async with self.write_scope("更新用户时发生错误 (Failed to update user)") as session:
            user = await session.get(User, user_id)
            if user is None:
                return None
            for key, value in values.items():
                setattr(user, key, value)
        return await self.find_by_id(user_id)

    async def delete(self, user_id: int) -> bool:
        async with self.write_scope("删除用户时发生错误 (Failed to delete user)") as session:
            user = await session.get(User, user_id)
            if user is None:
                return False
            await session.delete(user)
        logger.info("Deleted user id=%s", user_id)
        return True

    async def record_login_failure(self, user_id: int, max_failures: int, lock_until: datetime) -> int:
        """
        原子地累加登录失败次数 (Atomically bump the login failure counter)

        计数在 SQL 中自增，并发的失败登录不会互相覆盖。达到 max_failures 时在同一事务内
        清零计数并写入 lock_until。返回本次累加后的失败次数。
        """
        async with self.write_scope("记录登录失败时发生错误 (Failed to record login failure)") as session:
            await session.execute(
                update(User)
                .where(User.id == user_id)
                .values(login_failures=User.login_failures + 1)
                .execution_options(synchronize_session=False)
            )
            failures = (
                await session.execute(select(User.login_failures).where(User.id == user_id))
            ).scalar_one()
            if failures >= max_failures:
                await session.execute(
                    update(User)
                    .where(User.id == user_id)
                    .values(login_failures=0, lock_until=lock_until)
                    .execution_options(synchronize_session=False)
                )
        return failures

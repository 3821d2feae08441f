"""
用户服务 (User Service)

个人用户的增删改查与登录认证。

登录锁定策略：
- 连续登录失败达到 login_max_failures 次后，账户锁定 login_lock_minutes 分钟
- 锁定期间任何登录尝试（包括密码正确）都返回 403，并在 details 中给出 lockUntil 和剩余分钟数
- 登录成功时清零失败计数、解除锁定并记录 last_login_at
"""
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import settings
from app.core.exceptions import AccountLockedError, ConflictError, NotFoundError, UnauthorizedError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """部分数据库驱动返回不带时区的时间，统一按 UTC 解释。"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserService:
    """用户服务"""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self.users = UserRepository(session_factory)

    async def list_users(self) -> list[User]:
        return await self.users.find_all()

    async def get_user(self, user_id: int) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"用户不存在 (User not found): id={user_id}")
        return user

    async def get_user_by_email(self, email: str) -> User:
        user = await self.users.find_by_email(email)
        if user is None:
            raise NotFoundError(f"用户不存在 (User not found): {email}")
        return user

    async def create_user(self, data: UserCreate) -> User:
        if await self.users.find_by_email(data.email):
            raise ConflictError(f"邮箱已被注册 (Email already registered): {data.email}")
        return await self.users.create(
            name=data.name,
            email=data.email,
            hashed_password=hash_password(data.password),
        )

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        existing = await self.get_user(user_id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)

        new_email = values.get("email")
        if new_email and new_email != existing.email and await self.users.find_by_email(new_email):
            raise ConflictError(f"邮箱已被注册 (Email already registered): {new_email}")

        password = values.pop("password", None)
        if password:
            values["hashed_password"] = hash_password(password)

        if not values:
            return existing
        user = await self.users.update(user_id, values)
        if user is None:
            raise NotFoundError(f"用户不存在 (User not found): id={user_id}")
        logger.info("Updated user id=%s fields=%s", user_id, sorted(values))
        return user

    async def delete_user(self, user_id: int) -> None:
        if not await self.users.delete(user_id):
            raise NotFoundError(f"用户不存在 (User not found): id={user_id}")

    async def authenticate(self, email: str, password: str) -> tuple[str, User]:
        """
        校验凭证并签发访问令牌 (Verify credentials and issue an access token)

        Returns:
            (access_token, user)

        Raises:
            UnauthorizedError: 邮箱不存在或密码错误
            AccountLockedError: 账户处于锁定期
        """
        user = await self.users.find_by_email(email)
        if user is None:
            raise UnauthorizedError("邮箱或密码错误 (Invalid email or password)")

        now = datetime.now(timezone.utc)
        if user.lock_until is not None and as_utc(user.lock_until) > now:
            lock_until = as_utc(user.lock_until)
            remaining = math.ceil((lock_until - now).total_seconds() / 60)
            logger.warning("Login attempt on locked account id=%s", user.id)
            raise AccountLockedError(
                "登录失败次数过多，账户已被锁定 (Account locked after too many failed logins)",
                {"lockUntil": lock_until.isoformat(), "remainingMinutes": remaining},
            )

        if not verify_password(password, user.hashed_password):
            await self._record_failure(user, now)
            raise UnauthorizedError("邮箱或密码错误 (Invalid email or password)")

        user = await self.users.update(
            user.id,
            {"login_failures": 0, "lock_until": None, "last_login_at": now},
        ) or user
        logger.info("User id=%s logged in", user.id)
        return create_access_token(str(user.id)), user

    async def _record_failure(self, user: User, now: datetime) -> None:
        lock_until = now + timedelta(minutes=settings.login_lock_minutes)
        failures = await self.users.record_login_failure(user.id, settings.login_max_failures, lock_until)
        if failures >= settings.login_max_failures:
            logger.warning("Locking account id=%s for %s minutes", user.id, settings.login_lock_minutes)

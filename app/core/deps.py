"""
FastAPI 依赖项模块 (FastAPI Dependencies Module)

提供通用依赖注入函数：服务实例构造、当前用户认证。
服务实例按请求构造，只持有共享的会话工厂，不携带请求间状态。

Provides common dependency injection functions: per-request service construction and
current-user authentication. Services hold only the shared session factory.
"""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import get_session_factory
from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token
from app.models.user import User
from app.repositories.user import UserRepository
from app.services.business_service import BusinessService
from app.services.server_service import ServerService
from app.services.user_service import UserService

# Bearer Token 认证方案，缺失时由 get_current_user 统一返回 401 (Bearer Token Authentication Scheme)
security = HTTPBearer(auto_error=False)


def get_server_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ServerService:
    return ServerService(session_factory)


def get_user_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> UserService:
    return UserService(session_factory)


def get_business_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> BusinessService:
    return BusinessService(session_factory)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> User:
    """
    从请求头中提取并验证 JWT，返回当前登录用户 (Extract and validate JWT from request header, return current user)

    解析 Authorization 头中的 Bearer Token，验证 JWT 签名和有效期，
    从数据库查询用户信息并返回。缺失、无效或过期的令牌一律返回 401。

    Parses the Bearer token from the Authorization header, validates signature and expiry,
    and loads the user. Missing, invalid or expired tokens all yield 401.
    """
    if credentials is None:
        raise UnauthorizedError("缺少认证令牌 (Missing bearer token)")

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access" or payload.get("kind", "user") != "user":
        raise UnauthorizedError("令牌无效或已过期 (Invalid or expired token)")

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        raise UnauthorizedError("令牌无效或已过期 (Invalid or expired token)")

    user = await UserRepository(session_factory).find_by_id(int(user_id))
    if user is None:
        raise UnauthorizedError("用户不存在 (User not found)")

    return user

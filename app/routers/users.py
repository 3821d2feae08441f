"""
用户管理路由 (User Management Router)

功能说明：提供个人用户的增删改查
核心职责：
  - 用户注册（公开接口）
  - 用户列表、详情、按邮箱查询（需登录）
  - 用户信息更新（密码自动重新哈希）与删除（需登录）
依赖关系：依赖 UserService 和 JWT 认证依赖
API端点：POST/GET /users, GET /users/email, GET/PUT/DELETE /users/{user_id}
"""
from fastapi import APIRouter, Depends, Query, status
from pydantic import EmailStr

from app.core.deps import get_current_user, get_user_service
from app.core.responses import success_response
from app.models.user import User
from app.schemas.user import UserCreate, UserOut, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _dump(user: User) -> dict:
    # 排除 hashed_password 等敏感字段
    return UserOut.model_validate(user).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """
    创建新用户 (Create New User)

    Raises:
        ConflictError 409: 邮箱已被注册
    """
    user = await service.create_user(data)
    return success_response(data=_dump(user), message="用户创建成功 (User created)")


@router.get("")
async def list_users(
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    users = await service.list_users()
    return success_response(data=[_dump(u) for u in users])


@router.get("/email")
async def get_user_by_email(
    email: EmailStr = Query(...),
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    """按邮箱查询用户 (Get user by email)"""
    user = await service.get_user_by_email(email)
    return success_response(data=_dump(user))


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    user = await service.get_user(user_id)
    return success_response(data=_dump(user))


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    data: UserUpdate,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    """
    更新用户信息 (Update User)

    仅更新请求中提供的字段；修改邮箱时检查唯一性，修改密码时重新哈希。
    """
    user = await service.update_user(user_id, data)
    return success_response(data=_dump(user), message="用户信息已更新 (User updated)")


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    await service.delete_user(user_id)
    return success_response(message="用户已删除 (User deleted)")

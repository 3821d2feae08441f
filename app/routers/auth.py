"""
用户认证路由模块 (User Authentication Router)

功能说明：用户登录验证与访问令牌签发
核心职责：
  - 校验邮箱和密码
  - 连续失败次数过多时锁定账户
  - 生成 JWT 访问令牌
依赖关系：依赖 UserService 和 JWT 安全模块
API端点：POST /auth/login
"""
from fastapi import APIRouter, Depends

from app.core.deps import get_user_service
from app.core.responses import success_response
from app.schemas.user import LoginRequest, TokenResponse, UserOut
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    用户登录接口 (User Login)

    Raises:
        UnauthorizedError 401: 凭证无效（邮箱不存在或密码错误）
        AccountLockedError 403: 账户处于锁定期
    """
    token, user = await service.authenticate(data.email, data.password)
    body = TokenResponse(access_token=token, user=UserOut.model_validate(user))
    return success_response(data=body.model_dump(mode="json"), message="登录成功 (Login successful)")

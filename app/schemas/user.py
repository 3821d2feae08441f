"""
用户管理相关的请求/响应数据模型。

定义用户创建、更新、登录等操作的 Schema。
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """创建用户请求体。"""
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class UserUpdate(BaseModel):
    """更新用户请求体，所有字段可选。"""
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)


class UserOut(BaseModel):
    """用户信息响应模型。"""
    id: int
    email: str
    name: str
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    """登录请求体。"""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """登录成功响应：访问令牌和用户信息。"""
    access_token: str
    token_type: str = "bearer"
    user: UserOut

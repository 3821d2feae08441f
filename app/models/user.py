"""
用户模型 (User Model)

定义系统用户表结构，包括邮箱、密码哈希、登录失败计数和锁定时间等字段。

Defines the system user table structure, including email, password hash,
login failure counter and lockout timestamp.
"""
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class User(Base):
    """
    用户表 (User Table)

    存储个人用户的账户信息和登录凭证。连续登录失败达到上限后，lock_until 之前拒绝登录。

    Stores personal user accounts and credentials. After too many consecutive login
    failures, logins are rejected until lock_until.
    """
    __tablename__ = "user_info"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)  # 主键 ID (Primary Key ID)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)  # 用户邮箱（登录名） (User Email, Login Name)
    name: Mapped[str] = mapped_column(String(100), nullable=False)  # 用户姓名 (User Name)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)  # 哈希后的密码 (Hashed Password)
    login_failures: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # 连续登录失败次数 (Consecutive Login Failures)
    lock_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)  # 锁定截止时间 (Locked Until)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)  # 最后登录时间 (Last Login Time)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )  # 账户创建时间 (Account Creation Time)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )  # 账户更新时间 (Account Update Time)

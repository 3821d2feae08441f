"""
企业账户模型 (Business Account Models)

企业账户表与企业地址表为一对一关系，注册和更新时在同一事务内写入。

Business accounts and their addresses are one-to-one and are written in a single
transaction on registration and update.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class BusinessAccount(Base):
    """企业账户表 (Business Account Table)"""
    __tablename__ = "business_accounts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)  # 主键 ID (Primary Key ID)
    company_name: Mapped[str] = mapped_column(String(100), nullable=False)  # 公司名称 (Company Name)
    business_number: Mapped[str] = mapped_column(String(12), unique=True, index=True, nullable=False)  # 营业执照号 xxx-xx-xxxxx (Business Number)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)  # 登录邮箱 (Login Email)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)  # 哈希后的密码 (Hashed Password)
    industry_type: Mapped[str] = mapped_column(String(30), nullable=False, default="other")  # 行业类型 (Industry Type)
    employee_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)  # 员工数 (Employee Count)
    founding_year: Mapped[int] = mapped_column(Integer, nullable=False)  # 成立年份 (Founding Year)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")  # 状态：ACTIVE/INACTIVE (Status)
    marketing_consent: Mapped[bool] = mapped_column(Boolean, default=False)  # 营销信息同意 (Marketing Consent)
    data_processing_consent: Mapped[bool] = mapped_column(Boolean, default=False)  # 数据处理同意 (Data Processing Consent)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )  # 创建时间 (Creation Time)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)  # 最后登录时间 (Last Login Time)

    # 关联关系 (Relationships)
    address: Mapped[Optional["BusinessAddress"]] = relationship(
        back_populates="business", uselist=False, cascade="all, delete-orphan", lazy="selectin"
    )


class BusinessAddress(Base):
    """企业地址表 (Business Address Table)"""
    __tablename__ = "business_addresses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    business_id: Mapped[int] = mapped_column(
        ForeignKey("business_accounts.id", ondelete="CASCADE"), unique=True, nullable=False
    )  # 所属企业 (Owning Business)
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(5), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    business: Mapped[BusinessAccount] = relationship(back_populates="address")

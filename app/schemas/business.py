"""
企业账户相关的请求/响应数据模型。

请求与响应均使用 camelCase 键（companyName、businessNumber 等），同时接受 snake_case 字段名。
注册请求由公司基本信息、公司详情（含地址）和协议同意三部分组成。
"""
import enum
import re
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

BUSINESS_NUMBER_PATTERN = r"^\d{3}-\d{2}-\d{5}$"
PASSWORD_SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'
MIN_FOUNDING_YEAR = 1800


class IndustryType(str, enum.Enum):
    """行业类型。"""
    TECH = "tech"
    FINANCE = "finance"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    MANUFACTURING = "manufacturing"
    RETAIL = "retail"
    OTHER = "other"


class BusinessStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def check_password_strength(value: str) -> str:
    """密码至少 8 位，且包含大写、小写、数字和特殊字符各一个。"""
    if len(value) < 8:
        raise ValueError("密码至少 8 位 (Password must be at least 8 characters)")
    if not re.search(r"[A-Z]", value):
        raise ValueError("密码必须包含大写字母 (Password must contain an uppercase letter)")
    if not re.search(r"[a-z]", value):
        raise ValueError("密码必须包含小写字母 (Password must contain a lowercase letter)")
    if not re.search(r"[0-9]", value):
        raise ValueError("密码必须包含数字 (Password must contain a digit)")
    if not any(ch in PASSWORD_SPECIAL_CHARS for ch in value):
        raise ValueError("密码必须包含特殊字符 (Password must contain a special character)")
    return value


def check_founding_year(value: int) -> int:
    current_year = date.today().year
    if not MIN_FOUNDING_YEAR <= value <= current_year:
        raise ValueError(f"成立年份必须在 {MIN_FOUNDING_YEAR} 到 {current_year} 之间 (Founding year out of range)")
    return value


# ── 请求体 ────────────────────────────────────────────────────────────

class AddressIn(_CamelModel):
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    zip_code: str = Field(pattern=r"^\d{5}$")


class AddressUpdate(_CamelModel):
    street: Optional[str] = Field(default=None, min_length=1, max_length=255)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    state: Optional[str] = Field(default=None, min_length=1, max_length=100)
    zip_code: Optional[str] = Field(default=None, pattern=r"^\d{5}$")


class CompanyDetails(_CamelModel):
    industry_type: IndustryType
    employee_count: int = Field(ge=1)
    founding_year: int
    address: AddressIn

    @field_validator("founding_year")
    @classmethod
    def _founding_year(cls, value: int) -> int:
        return check_founding_year(value)


class BusinessAgreements(_CamelModel):
    """协议同意：服务条款、隐私政策、营销信息（可选）、数据处理（必须同意）。"""
    terms: bool
    privacy: bool
    marketing: bool = False
    data_processing: bool

    @field_validator("data_processing")
    @classmethod
    def _data_processing_required(cls, value: bool) -> bool:
        if not value:
            raise ValueError("必须同意数据处理条款 (Data processing consent is required)")
        return value


class BusinessCreate(_CamelModel):
    """企业账户注册请求体。"""
    company_name: str = Field(min_length=2, max_length=100)
    business_number: str = Field(pattern=BUSINESS_NUMBER_PATTERN)
    email: EmailStr
    password: str
    company_details: CompanyDetails
    agreements: BusinessAgreements

    @field_validator("password")
    @classmethod
    def _password_strength(cls, value: str) -> str:
        return check_password_strength(value)


class BusinessUpdate(_CamelModel):
    """企业账户更新请求体，所有字段可选。营业执照号不可修改。"""
    company_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    industry_type: Optional[IndustryType] = None
    employee_count: Optional[int] = Field(default=None, ge=1)
    founding_year: Optional[int] = None
    marketing_consent: Optional[bool] = None
    address: Optional[AddressUpdate] = None

    @field_validator("password")
    @classmethod
    def _password_strength(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else check_password_strength(value)

    @field_validator("founding_year")
    @classmethod
    def _founding_year(cls, value: Optional[int]) -> Optional[int]:
        return None if value is None else check_founding_year(value)


class BusinessNumberCheck(_CamelModel):
    business_number: str


# ── 响应体 ────────────────────────────────────────────────────────────

class CompanyInfo(_CamelModel):
    """登记机关返回的公司信息。"""
    name: str
    status: str
    registration_date: str


class BusinessNumberValidation(_CamelModel):
    valid: bool
    business_number: str
    company_info: Optional[CompanyInfo] = None


class AddressOut(_CamelModel):
    street: str
    city: str
    state: str
    zip_code: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class BusinessOut(_CamelModel):
    """企业账户响应模型，不包含密码哈希。"""
    id: int
    company_name: str
    business_number: str
    email: str
    industry_type: str
    employee_count: int
    founding_year: int
    status: str
    marketing_consent: bool
    data_processing_consent: bool
    address: Optional[AddressOut] = None
    created_at: datetime
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def dump_business(business: Any) -> dict[str, Any]:
    """ORM 企业账户 → camelCase 响应字典。"""
    return BusinessOut.model_validate(business).model_dump(by_alias=True, mode="json")

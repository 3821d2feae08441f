"""
企业账户服务 (Business Account Service)

营业执照号校验流程：
1. 格式 xxx-xx-xxxxx
2. 校验位：前 9 位按权重 1,3,7,1,3,7,1,3,5 加权求和，再加上 floor(第 9 位 * 5 / 10)，
   (10 - sum % 10) % 10 必须等于第 10 位
3. 未被其他企业账户占用
4. 登记机关查询通过（当前为确定性的本地实现，保留号段一律拒绝）

注册时账户与地址在同一事务中写入；邮箱不能与个人用户或其他企业账户重复。
"""
import logging
import re
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.security import hash_password
from app.models.business import BusinessAccount
from app.repositories.business import BusinessRepository
from app.repositories.user import UserRepository
from app.schemas.business import (
    BUSINESS_NUMBER_PATTERN,
    BusinessCreate,
    BusinessNumberValidation,
    BusinessStatus,
    BusinessUpdate,
    CompanyInfo,
)

logger = logging.getLogger(__name__)

CHECKSUM_WEIGHTS = (1, 3, 7, 1, 3, 7, 1, 3, 5)
RESERVED_BUSINESS_NUMBERS = frozenset({"000-00-00000", "111-11-11111", "999-99-99999"})


def is_valid_business_number_format(business_number: str) -> bool:
    return re.fullmatch(BUSINESS_NUMBER_PATTERN, business_number) is not None


def has_valid_checksum(business_number: str) -> bool:
    """营业执照号校验位检查，调用方需先确认格式正确。"""
    digits = [int(ch) for ch in business_number.replace("-", "")]
    total = sum(d * w for d, w in zip(digits[:9], CHECKSUM_WEIGHTS))
    total += (digits[8] * 5) // 10
    return (10 - total % 10) % 10 == digits[9]


class BusinessRegistry:
    """
    登记机关查询 (Business registry lookup)

    本地确定性实现：保留号段视为未登记，其余返回由号码派生的公司信息。
    """

    async def lookup(self, business_number: str) -> Optional[CompanyInfo]:
        if business_number in RESERVED_BUSINESS_NUMBERS:
            return None
        return CompanyInfo(
            name=f"Registered Company {business_number[:3]}",
            status="active",
            registration_date="2020-01-01",
        )


class BusinessService:
    """企业账户服务"""

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        registry: Optional[BusinessRegistry] = None,
    ):
        self.businesses = BusinessRepository(session_factory)
        self.users = UserRepository(session_factory)
        self.registry = registry or BusinessRegistry()

    async def validate_business_number(self, business_number: str) -> BusinessNumberValidation:
        invalid = BusinessNumberValidation(valid=False, business_number=business_number)
        if not is_valid_business_number_format(business_number):
            logger.debug("Business number %s has an invalid format", business_number)
            return invalid
        if not has_valid_checksum(business_number):
            logger.debug("Business number %s failed the checksum", business_number)
            return invalid
        if await self.businesses.find_by_business_number(business_number):
            logger.debug("Business number %s is already registered", business_number)
            return invalid

        company_info = await self.registry.lookup(business_number)
        if company_info is None:
            logger.debug("Business number %s rejected by the registry", business_number)
            return invalid

        logger.info("Business number %s validated", business_number)
        return BusinessNumberValidation(valid=True, business_number=business_number, company_info=company_info)

    async def _ensure_email_available(self, email: str) -> None:
        if await self.users.find_by_email(email) or await self.businesses.find_by_email(email):
            raise ConflictError(f"邮箱已被注册 (Email already registered): {email}")

    async def register(self, data: BusinessCreate) -> BusinessAccount:
        result = await self.validate_business_number(data.business_number)
        if not result.valid:
            raise ValidationError(
                f"营业执照号无效 (Invalid business number): {data.business_number}",
                {"businessNumber": data.business_number},
            )
        await self._ensure_email_available(data.email)

        details = data.company_details
        account = {
            "company_name": data.company_name,
            "business_number": data.business_number,
            "email": data.email,
            "hashed_password": hash_password(data.password),
            "industry_type": details.industry_type.value,
            "employee_count": details.employee_count,
            "founding_year": details.founding_year,
            "status": BusinessStatus.ACTIVE.value,
            "marketing_consent": data.agreements.marketing,
            "data_processing_consent": data.agreements.data_processing,
        }
        business = await self.businesses.create(account, details.address.model_dump())
        logger.info("Registered business id=%s company=%s", business.id, business.company_name)
        return business

    async def list_businesses(self) -> list[BusinessAccount]:
        return await self.businesses.find_all()

    async def get_business(self, business_id: int) -> BusinessAccount:
        business = await self.businesses.find_by_id(business_id)
        if business is None:
            raise NotFoundError(f"企业账户不存在 (Business account not found): id={business_id}")
        return business

    async def update_business(self, business_id: int, data: BusinessUpdate) -> BusinessAccount:
        existing = await self.get_business(business_id)
        values = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        address = values.pop("address", None)

        new_email = values.get("email")
        if new_email and new_email != existing.email:
            await self._ensure_email_available(new_email)

        password = values.pop("password", None)
        if password:
            values["hashed_password"] = hash_password(password)

        business = await self.businesses.update(business_id, values, address)
        if business is None:
            raise NotFoundError(f"企业账户不存在 (Business account not found): id={business_id}")
        logger.info("Updated business id=%s", business_id)
        return business

    async def deactivate_business(self, business_id: int) -> BusinessAccount:
        await self.get_business(business_id)
        business = await self.businesses.update(business_id, {"status": BusinessStatus.INACTIVE.value})
        if business is None:
            raise NotFoundError(f"企业账户不存在 (Business account not found): id={business_id}")
        logger.info("Deactivated business id=%s", business_id)
        return business

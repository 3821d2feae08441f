"""
企业账户仓储 (Business Account Repository)

企业账户与地址在同一事务中写入：注册时同时插入两行，更新时账户字段与地址字段一起提交，
任一步失败整体回滚。
"""
import logging
from typing import Any, Optional

from sqlalchemy import select

from app.models.business import BusinessAccount, BusinessAddress
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class BusinessRepository(BaseRepository):
    """企业账户读写"""

    async def find_all(self) -> list[BusinessAccount]:
        return await self.fetch_all(
            select(BusinessAccount).order_by(BusinessAccount.id),
            "查询企业账户列表时发生错误 (Failed to query business accounts)",
        )

    async def find_by_id(self, business_id: int) -> Optional[BusinessAccount]:
        return await self.fetch_one(
            select(BusinessAccount).where(BusinessAccount.id == business_id),
            "查询企业账户时发生错误 (Failed to query business account)",
        )

    async def find_by_business_number(self, business_number: str) -> Optional[BusinessAccount]:
        return await self.fetch_one(
            select(BusinessAccount).where(BusinessAccount.business_number == business_number),
            "按营业执照号查询企业账户时发生错误 (Failed to query business account by number)",
        )

    async def find_by_email(self, email: str) -> Optional[BusinessAccount]:
        return await self.fetch_one(
            select(BusinessAccount).where(BusinessAccount.email == email),
            "按邮箱查询企业账户时发生错误 (Failed to query business account by email)",
        )

    async def create(self, account: dict[str, Any], address: dict[str, Any]) -> BusinessAccount:
        """在一个事务中插入企业账户及其地址。"""
        async with self.write_scope("创建企业账户时发生错误 (Failed to create business account)") as session:
            business = BusinessAccount(**account)
            business.address = BusinessAddress(**address)
            session.add(business)
            await session.flush()
            business_id = business.id
        logger.info("Created business account id=%s", business_id)
        return await self.find_by_id(business_id)

    async def update(
        self,
        business_id: int,
        account: dict[str, Any],
        address: Optional[dict[str, Any]] = None,
    ) -> Optional[BusinessAccount]:
        """在一个事务中更新账户字段和地址字段，账户不存在时返回 None。"""
        async with self.write_scope("更新企业账户时发生错误 (Failed to update business account)") as session:
            business = await session.get(BusinessAccount, business_id)
            if business is None:
                return None
            for key, value in account.items():
                setattr(business, key, value)
            if address:
                if business.address is None:
                    business.address = BusinessAddress(**address)
                else:
                    for key, value in address.items():
                        setattr(business.address, key, value)
        return await self.find_by_id(business_id)

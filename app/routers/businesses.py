"""
企业账户路由 (Business Account Router)

功能说明：企业账户注册与管理
核心职责：
  - 营业执照号校验（格式、校验位、重复、登记机关查询）
  - 企业账户注册（账户与地址同一事务写入）
  - 企业账户列表、详情、更新（需登录）
  - 删除即停用：状态置为 INACTIVE，不物理删除
依赖关系：依赖 BusinessService 和 JWT 认证依赖
API端点：POST /businesses/validate-number, POST/GET /businesses, GET/PUT/DELETE /businesses/{business_id}
"""
from fastapi import APIRouter, Depends, status

from app.core.deps import get_business_service, get_current_user
from app.core.responses import success_response
from app.models.user import User
from app.schemas.business import BusinessCreate, BusinessNumberCheck, BusinessUpdate, dump_business
from app.services.business_service import BusinessService

router = APIRouter(prefix="/businesses", tags=["businesses"])


@router.post("/validate-number")
async def validate_business_number(
    data: BusinessNumberCheck,
    service: BusinessService = Depends(get_business_service),
):
    """校验营业执照号，结果中 valid 为 false 时不返回公司信息。"""
    result = await service.validate_business_number(data.business_number)
    return success_response(data=result.model_dump(by_alias=True, exclude_none=True))


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_business(
    data: BusinessCreate,
    service: BusinessService = Depends(get_business_service),
):
    """
    企业账户注册 (Register Business Account)

    Raises:
        ValidationError 400: 营业执照号无效
        ConflictError 409: 邮箱已被个人用户或其他企业账户使用
    """
    business = await service.register(data)
    return success_response(data=dump_business(business), message="企业账户注册成功 (Business account registered)")


@router.get("")
async def list_businesses(
    service: BusinessService = Depends(get_business_service),
    current_user: User = Depends(get_current_user),
):
    businesses = await service.list_businesses()
    return success_response(data=[dump_business(b) for b in businesses])


@router.get("/{business_id}")
async def get_business(
    business_id: int,
    service: BusinessService = Depends(get_business_service),
    current_user: User = Depends(get_current_user),
):
    business = await service.get_business(business_id)
    return success_response(data=dump_business(business))


@router.put("/{business_id}")
async def update_business(
    business_id: int,
    data: BusinessUpdate,
    service: BusinessService = Depends(get_business_service),
    current_user: User = Depends(get_current_user),
):
    business = await service.update_business(business_id, data)
    return success_response(data=dump_business(business), message="企业账户已更新 (Business account updated)")


@router.delete("/{business_id}")
async def deactivate_business(
    business_id: int,
    service: BusinessService = Depends(get_business_service),
    current_user: User = Depends(get_current_user),
):
    business = await service.deactivate_business(business_id)
    return success_response(data=dump_business(business), message="企业账户已停用 (Business account deactivated)")

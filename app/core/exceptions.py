"""
全局异常处理模块 (Global Exception Handling Module)

定义业务异常类和 FastAPI 全局异常处理器，提供统一的错误响应信封。
所有未捕获的异常都会被转换为 {"success": false, "error": {...}} 结构，避免裸 500 错误。

Defines business exception classes and FastAPI global exception handlers,
providing a unified error envelope. All uncaught exceptions are converted
to {"success": false, "error": {...}} responses, preventing raw 500 errors.
"""
import logging
import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


# ============================================================
# 业务异常类 (Business Exception Classes)
# ============================================================

class BusinessError(Exception):
    """业务异常基类 (Base Business Exception)"""
    status_code: int = 400
    error: str = "business_error"

    def __init__(self, message: str, detail: Optional[Any] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(BusinessError):
    """数据校验失败 (Validation Error)"""
    status_code = 400
    error = "validation_error"


class UnauthorizedError(BusinessError):
    """认证失败 (Authentication Failed)"""
    status_code = 401
    error = "unauthorized"


class PermissionDeniedError(BusinessError):
    """权限不足 (Permission Denied)"""
    status_code = 403
    error = "permission_denied"


class AccountLockedError(PermissionDeniedError):
    """账户已锁定 (Account Locked)"""
    error = "account_locked"


class NotFoundError(BusinessError):
    """资源不存在 (Resource Not Found)"""
    status_code = 404
    error = "not_found"


class ConflictError(BusinessError):
    """资源冲突 (Resource Conflict)"""
    status_code = 409
    error = "conflict"


class InternalError(BusinessError):
    """服务内部错误 (Internal Service Error)"""
    status_code = 500
    error = "internal_error"


class DatabaseError(BusinessError):
    """数据库访问失败 (Database Access Failed)"""
    status_code = 500
    error = "database_error"


class ServiceUnavailableError(BusinessError):
    """依赖服务不可用 (Dependent Service Unavailable)"""
    status_code = 503
    error = "service_unavailable"


def error_body(code: str, message: str, details: Any = None) -> dict:
    """
    构造错误信封 (Build error envelope)

    details 仅在非生产环境下返回。
    """
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None and not settings.is_production:
        error["details"] = details
    return {"success": False, "error": error}


# ============================================================
# 全局异常处理器注册 (Global Exception Handler Registration)
# ============================================================

def register_exception_handlers(app: FastAPI) -> None:
    """
    注册全局异常处理器到 FastAPI 应用 (Register global exception handlers to FastAPI app)

    处理优先级：
    1. BusinessError 子类 → 对应 HTTP 状态码 + 错误信封
    2. RequestValidationError → 400 validation_error，附带字段错误列表
    3. HTTPException → 保持状态码，包装为统一格式
    4. Exception → 500 + 完整 traceback 日志
    """

    @app.exception_handler(BusinessError)
    async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("[%s] %s - %s %s", exc.error, exc.message, request.method, request.url.path)
        else:
            logger.warning("[%s] %s - %s %s", exc.error, exc.message, request.method, request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.error, exc.message, exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ())[1:]) or "request",
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("[validation_error] %s %s: %s", request.method, request.url.path, fields)
        return JSONResponse(
            status_code=400,
            content=error_body("validation_error", "请求参数校验失败 (Request validation failed)", fields),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        code = "not_found" if exc.status_code == 404 else "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # 记录完整 traceback 用于调试 (Log full traceback for debugging)
        logger.error(
            "Unhandled exception on %s %s: %s\n%s",
            request.method,
            request.url.path,
            str(exc),
            traceback.format_exc(),
        )
        return JSONResponse(
            status_code=500,
            content=error_body(
                "internal_server_error",
                "服务器内部错误，请稍后重试 (Internal server error, please try again later)",
            ),
        )

"""
服务器资产 API 应用入口模块 (Server Inventory API Application Entry Module)

负责 FastAPI 应用的完整生命周期管理：日志初始化、数据库表创建、
中间件配置、全局异常处理器注册、路由注册和健康检查。

Main application entry point, responsible for the FastAPI application lifecycle:
logging setup, table creation, middleware configuration, global exception handlers,
route registration and health checks.

主要功能 (Main Features):
- 服务器资产查询（过滤、关联明细、基础/详细视图） (Server inventory queries)
- 个人用户管理与登录 (User management and login)
- 企业账户注册与管理 (Business account registration and management)
- 健康检查 (Health checks)
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import settings
from app.core.database import Base, check_connection, engine, get_session_factory
from app.core.exceptions import ServiceUnavailableError, register_exception_handlers
from app.core.logging_config import setup_logging
from app.core.security_middleware import RequestLoggingMiddleware, RequestSizeMiddleware, SecurityMiddleware
# 导入所有模型以确保 SQLAlchemy 表注册 (Import all models to ensure SQLAlchemy table registration)
from app.models import BusinessAccount, BusinessAddress, ServerBasic, User  # noqa: F401
from app.routers import auth, businesses, servers, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理器 (Application Lifecycle Manager)

    启动时初始化日志并自动创建数据库表结构，关闭时释放连接池。

    Sets up logging and creates tables at startup; disposes the connection pool at shutdown.
    """
    setup_logging()
    logger.info("Starting %s (environment=%s)", settings.app_name, settings.environment)

    # 自动创建数据库表结构 (Automatically create database table structure)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    # 关闭连接池 (Close connection pool)
    await engine.dispose()
    logger.info("%s stopped", settings.app_name)


# 创建 FastAPI 应用实例 (Create FastAPI application instance)
app = FastAPI(
    title=settings.app_name,
    description="Server inventory and account REST backend | 服务器资产与账户 REST 后端",
    version="0.1.0",
    lifespan=lifespan,
)

# 注册全局异常处理器 (Register global exception handlers)
register_exception_handlers(app)

# 配置中间件 (Configure middleware)
# 后注册的中间件位于外层：请求日志最外层，记录包括 413 在内的所有响应
app.add_middleware(RequestSizeMiddleware, max_size=settings.max_request_size)
app.add_middleware(
    SecurityMiddleware,
    enable_security_headers=settings.enable_security_headers,
    is_production=settings.is_production,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials="*" not in settings.cors_origin_list,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

# 注册所有 API 路由模块 (Register all API router modules)
app.include_router(servers.router, prefix=settings.api_prefix)  # 服务器资产 (Server inventory)
app.include_router(users.router, prefix=settings.api_prefix)  # 用户管理 (User management)
app.include_router(auth.router, prefix=settings.api_prefix)  # 用户认证 (User authentication)
app.include_router(businesses.router, prefix=settings.api_prefix)  # 企业账户 (Business accounts)


@app.get("/health")
@app.get(f"{settings.api_prefix}/health")
async def health(session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)):
    """
    健康检查接口 (Health Check Endpoint)

    验证 API 和数据库的连通性。全部正常返回 200；任一组件异常时以 503
    service_unavailable 错误信封返回，details 中给出 degraded 状态和各组件检查结果。

    Returns:
        dict: 包含各组件状态和时间戳的健康检查结果 (Health check results with component status and timestamp)

    Raises:
        ServiceUnavailableError 503: 数据库不可达 (Database unreachable)
    """
    checks = {
        "api": "ok",
        "database": "ok" if await check_connection(session_factory) else "error",
    }
    result = {
        "status": "ok" if all(v == "ok" for v in checks.values()) else "degraded",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if result["status"] != "ok":
        raise ServiceUnavailableError("依赖服务不可用 (Dependent service unavailable)", result)
    return result

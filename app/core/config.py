"""
应用配置模块 (Application Configuration Module)

使用 Pydantic Settings 管理服务器资产 API 的所有配置项，支持从 .env 文件和环境变量读取。
提供数据库连接池、日志、JWT 认证、登录锁定和安全中间件等各模块的配置管理。

Uses Pydantic Settings to manage all configuration items for the server inventory API,
supporting reading from .env files and environment variables. Provides configuration
for the database pool, logging, JWT authentication, login lockout and security middleware.
"""
import logging
import secrets

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    应用全局配置类 (Application Global Configuration Class)

    字段名自动映射同名环境变量（不区分大小写），支持 .env 文件加载。

    Field names automatically map to same-named environment variables (case insensitive),
    supporting .env file loading.
    """

    # 应用配置 (Application Configuration)
    app_name: str = "Server Inventory API"  # 应用名称 (Application Name)
    environment: str = "development"  # 运行环境：development/production/test (Runtime Environment)
    api_prefix: str = "/api/v1"  # API 路由前缀 (API Route Prefix)

    # 日志配置 (Logging Configuration)
    log_level: str = "INFO"  # 日志级别 (Log Level)
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"  # 日志格式 (Log Format)

    # 数据库配置 (Database Configuration)
    postgres_host: str = "localhost"  # PostgreSQL 主机地址 (PostgreSQL Host)
    postgres_port: int = 5432  # PostgreSQL 端口号 (PostgreSQL Port)
    postgres_db: str = "inventory"  # 数据库名称 (Database Name)
    postgres_user: str = "inventory"  # 数据库用户名 (Database Username)
    postgres_password: str = "inventory_dev_password"  # 数据库密码 (Database Password)
    database_url_override: str = ""  # 完整连接 URL，设置后覆盖上述字段 (Full URL, overrides the fields above)
    db_pool_size: int = 10  # 连接池大小 (Connection Pool Size)
    db_max_overflow: int = 0  # 连接池溢出上限 (Pool Overflow Limit)
    db_echo: bool = False  # 是否输出 SQL 日志 (Echo SQL Statements)

    # JWT 认证配置 (JWT Authentication Configuration)
    # ⚠️ 生产环境必须通过环境变量 JWT_SECRET_KEY 设置！
    # ⚠️ MUST set JWT_SECRET_KEY env var in production!
    jwt_secret_key: str = ""  # JWT 签名密钥 (JWT Secret Key)
    jwt_algorithm: str = "HS256"  # JWT 算法 (JWT Algorithm)
    jwt_access_token_expire_minutes: int = 120  # 访问令牌过期时间（分钟） (Access Token Expiry Minutes)

    # 登录锁定配置 (Login Lockout Configuration)
    login_max_failures: int = 5  # 连续失败次数上限 (Max Consecutive Failures)
    login_lock_minutes: int = 30  # 锁定时长（分钟） (Lock Duration Minutes)

    # 安全配置 (Security Configuration)
    enable_security_headers: bool = True  # 是否启用安全响应头 (Enable Security Headers)
    max_request_size: int = 10 * 1024 * 1024  # 最大请求体大小（字节） (Max Request Body Size in Bytes)
    cors_origins: str = "*"  # 允许的跨域来源，逗号分隔 (Allowed CORS Origins, comma separated)

    @property
    def database_url(self) -> str:
        """
        构造 PostgreSQL 异步连接 URL (Build PostgreSQL Async Connection URL)

        生成适用于 asyncpg 驱动的连接字符串；设置了 DATABASE_URL_OVERRIDE 时直接使用该值。

        Generates a connection string suitable for the asyncpg driver; DATABASE_URL_OVERRIDE
        wins when set.
        """
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}  # Pydantic 配置：自动加载 .env 文件 (Pydantic Config: Auto-load .env file)


# 全局配置实例 (Global Configuration Instance)
settings = Settings()

# JWT 密钥安全检查：未设置时生成随机密钥并警告
if not settings.jwt_secret_key or settings.jwt_secret_key == "change-me-in-production":
    settings.jwt_secret_key = secrets.token_urlsafe(64)
    logger.warning(
        "JWT_SECRET_KEY 未设置，已自动生成随机密钥。此密钥在每次重启后会变化，所有已签发的 token 将失效。"
        " | JWT_SECRET_KEY not set, using auto-generated random key. "
        "All issued tokens will be invalidated on restart. "
        "Set JWT_SECRET_KEY environment variable in production!"
    )

"""
日志配置模块 (Logging Configuration Module)

在应用启动时配置根日志器的级别和格式。各模块通过 logging.getLogger(__name__) 获取日志器。

Configures the root logger level and format at application startup. Modules obtain
their loggers via logging.getLogger(__name__).
"""
import logging

from app.core.config import settings


def setup_logging() -> None:
    """Setup root logging from settings"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
    # SQL 语句日志由 DB_ECHO 控制 (SQL statement logging is governed by DB_ECHO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

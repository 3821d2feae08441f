"""
核心模块包 (Core Module Package)

配置管理、日志、数据库连接、异常与错误信封、安全认证、依赖注入和中间件等基础组件。

Foundational components: configuration, logging, database connections, exceptions and
the error envelope, security, dependency injection and middleware.
"""

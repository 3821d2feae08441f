"""
安全增强中间件 (Security Enhancement Middleware)

提供安全响应头、请求体大小限制和请求日志三个中间件。

Provides security response headers, request body size limiting and request logging.
"""
import logging
import time
from typing import Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from app.core.config import settings
from app.core.exceptions import error_body

logger = logging.getLogger(__name__)


class SecurityMiddleware(BaseHTTPMiddleware):
    """
    安全增强中间件 (Security Enhancement Middleware)

    为所有 HTTP 响应添加安全相关的响应头：内容类型嗅探防护、点击劫持防护、
    引用策略、生产环境 HSTS 以及 API 内容安全策略。

    Adds security-related response headers to every HTTP response.
    """

    def __init__(self, app, enable_security_headers: bool = True, is_production: bool = False):
        super().__init__(app)
        self.enable_security_headers = enable_security_headers
        self.is_production = is_production

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if self.enable_security_headers:
            for name, value in self._build_security_headers(request).items():
                response.headers[name] = value

        return response

    def _build_security_headers(self, request: Request) -> Dict[str, str]:
        """
        构建安全响应头字典 (Build Security Response Headers Dictionary)

        生产环境额外启用 HSTS。
        """
        headers = {
            # 防止 MIME 类型嗅探 (Prevent MIME type sniffing)
            "X-Content-Type-Options": "nosniff",
            # 防止点击劫持 (Prevent clickjacking)
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "X-Permitted-Cross-Domain-Policies": "none",
        }

        # 强制 HTTPS（仅生产环境） (Force HTTPS in production only)
        if self.is_production:
            headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        # API 端点不需要复杂的 CSP (API endpoints don't need a complex CSP)
        if request.url.path.startswith(settings.api_prefix):
            headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
            headers["Cache-Control"] = "no-store"

        return headers


class RequestSizeMiddleware(BaseHTTPMiddleware):
    """
    请求大小限制中间件 (Request Size Limiting Middleware)

    Content-Length 超过上限返回 413，非法的 Content-Length 返回 400，均使用统一错误信封。

    Rejects bodies above max_size with 413 and malformed Content-Length with 400.
    """

    def __init__(self, app, max_size: int = 10 * 1024 * 1024):  # 默认 10MB
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")

        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                # Content-Length 不是有效数字 (Content-Length is not a valid number)
                return JSONResponse(
                    status_code=400,
                    content=error_body("validation_error", "Content-Length 无效 (Invalid Content-Length header)"),
                )
            if size > self.max_size:
                logger.warning("Rejected %s %s: body of %d bytes exceeds %d", request.method, request.url.path, size, self.max_size)
                return JSONResponse(
                    status_code=413,
                    content=error_body(
                        "payload_too_large",
                        f"请求体过大 (Request entity too large). Max allowed: {self.max_size} bytes",
                    ),
                )

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """请求日志：方法、路径、状态码和耗时。"""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

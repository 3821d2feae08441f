"""
统一响应信封 (Unified Response Envelope)

所有成功响应都使用 {"success": true, "data": ..., "message": ...} 结构，
与 exceptions 模块中的错误信封对应。
"""
from typing import Any, Optional


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    """构造成功响应信封 (Build success envelope)"""
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body

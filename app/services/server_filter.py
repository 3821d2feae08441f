"""
服务器过滤选项规范化 (Server Filter Option Normalization)

将查询字符串中未类型化的参数转换为 FilterOptions。纯函数，不抛出异常：
枚举值原样透传（合法性由请求层校验负责），布尔开关只有 "true"（不区分大小写）或 True 才为真。
"""
from typing import Any, Mapping

from app.schemas.server import FilterOptions

_STRING_FIELDS = ("os", "state", "license")
_BOOLEAN_FIELDS = ("network", "disk", "partition", "repository", "detail")


def to_boolean(value: Any) -> bool:
    """布尔值原样返回；字符串与 "true" 做不区分大小写比较；其他一律为 False。"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() == "true"
    return False


def normalize_filter_options(raw: Mapping[str, Any] | None) -> FilterOptions:
    """把原始查询参数映射规范化为 FilterOptions，缺失的字符串字段取空串。"""
    raw = raw or {}
    values: dict[str, Any] = {}
    for name in _STRING_FIELDS:
        value = raw.get(name)
        values[name] = "" if value is None else str(value)
    for name in _BOOLEAN_FIELDS:
        values[name] = to_boolean(raw.get(name))
    return FilterOptions(**values)

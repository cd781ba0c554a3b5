# app/services/order_query_errors.py
from __future__ import annotations

from dataclasses import dataclass


class OrderQueryError(Exception):
    """订单查询条件编译失败（调用方输入问题，HTTP 层映射为 422）"""

    error_code = "invalid_order_query"

    @property
    def message(self) -> str:
        return str(self)


@dataclass(eq=False)
class InvalidSortField(OrderQueryError):
    """排序 token 指向未知列（或列为空）"""

    token: str
    column: str

    error_code = "invalid_sort_field"

    def __str__(self) -> str:
        return f"unknown sort field {self.column!r} in token {self.token!r}"


@dataclass(eq=False)
class InvalidFilterField(OrderQueryError):
    """reverse 中出现未知的过滤字段标识"""

    field: str

    error_code = "invalid_filter_field"

    def __str__(self) -> str:
        return f"unknown filter field {self.field!r} in reverse"

# app/schemas/order_query.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.models.enums import OrderCurrency, OrderPaymentStatus, OrderType


class GetOrdersQuery(BaseModel):
    """
    订单列表过滤 / 排序请求（纯描述，不持有任何数据库能力）。

    - 所有字段可选：缺省 = 不加约束
    - warehouse_ids / order_payment_status：集合成员（IN）
    - date_* / last_updated_date_*：闭区间（>= / <=），不参与 reverse
    - sorters：有序的 "field[:asc|desc]" 列表
    - reverse：需要取反比较的“逻辑字段标识”（如 "id" / "fuzzy" / "warehouse_ids"），不是列名
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Optional[int] = None
    created_by_user_id: Optional[int] = None
    updated_by_user_id: Optional[int] = None
    fuzzy: Optional[str] = None
    warehouse_ids: Optional[frozenset[int]] = None
    person_related_id: Optional[int] = None
    person_in_charge_id: Optional[int] = None
    order_payment_status: Optional[frozenset[OrderPaymentStatus]] = None
    order_type: Optional[OrderType] = None
    order_category_id: Optional[int] = None
    currency: Optional[OrderCurrency] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None
    last_updated_date_start: Optional[int] = None
    last_updated_date_end: Optional[int] = None
    sorters: Optional[tuple[str, ...]] = None
    reverse: Optional[frozenset[str]] = None

    @field_validator("fuzzy")
    @classmethod
    def _clean_fuzzy(cls, v: Optional[str]) -> Optional[str]:
        return (v or "").strip() or None

    @field_validator("warehouse_ids", "order_payment_status", "sorters", "reverse")
    @classmethod
    def _empty_as_absent(cls, v):
        # 空集合与“未传”同义；避免渲染出 IN () 这种非法 SQL
        return v or None

    @classmethod
    def empty(cls) -> "GetOrdersQuery":
        return cls()


# 可被 reverse 引用的过滤字段标识（排序 / reverse 本身除外）
FILTER_FIELDS: tuple[str, ...] = tuple(
    name for name in GetOrdersQuery.model_fields if name not in {"sorters", "reverse"}
)

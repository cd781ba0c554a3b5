# app/schemas/order.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import OrderCurrency, OrderPaymentStatus, OrderType


class OrderItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    sku_id: int
    quantity: int
    price: float
    exchanged: bool = False


class OrderOut(BaseModel):
    """
    订单主档（id / 审计字段 / 日期均由系统生成，缺省 0）。
    order_type 无默认值，必须给出。
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: int = 0
    created_by_user_id: int = 0
    updated_by_user_id: int = 0
    date: int = 0
    last_updated_date: int = 0
    person_in_charge_id: int = 0
    order_category_id: int = 0
    from_guest_order_id: int = 0
    currency: OrderCurrency = OrderCurrency.Unknown
    items: List[OrderItemOut] = Field(default_factory=list)
    total_amount: float = 0.0
    total_amount_settled: float = 0.0
    order_payment_status: OrderPaymentStatus = OrderPaymentStatus.Unsettled
    warehouse_id: int = 0
    person_related_id: int = 0
    description: str = ""
    order_type: OrderType


class OrderListRowOut(OrderOut):
    """列表行：在主档之外带上 join 出来的展示名"""

    warehouse_name: Optional[str] = None
    person_related_name: Optional[str] = None
    person_in_charge_name: Optional[str] = None
    order_status_name: Optional[str] = None


class OrderListResponse(BaseModel):
    ok: bool = True
    rows: List[OrderListRowOut]
    total: int

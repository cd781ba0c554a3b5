# app/api/routers/orders.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_session
from app.models.enums import OrderCurrency, OrderPaymentStatus, OrderType
from app.schemas.order import OrderListResponse, OrderListRowOut
from app.schemas.order_query import GetOrdersQuery
from app.services.order_query_service import query_orders

router = APIRouter(tags=["orders"])


def get_orders_query(
    id: Optional[int] = Query(None),
    created_by_user_id: Optional[int] = Query(None),
    updated_by_user_id: Optional[int] = Query(None),
    fuzzy: Optional[str] = Query(None, description="模糊搜索：订单号 / 往来人 / 经办人 / 分类 / 仓库名"),
    warehouse_ids: Optional[List[int]] = Query(None),
    person_related_id: Optional[int] = Query(None),
    person_in_charge_id: Optional[int] = Query(None),
    order_payment_status: Optional[List[OrderPaymentStatus]] = Query(None),
    order_type: Optional[OrderType] = Query(None),
    order_category_id: Optional[int] = Query(None),
    currency: Optional[OrderCurrency] = Query(None),
    date_start: Optional[int] = Query(None),
    date_end: Optional[int] = Query(None),
    last_updated_date_start: Optional[int] = Query(None),
    last_updated_date_end: Optional[int] = Query(None),
    sorters: Optional[List[str]] = Query(None, description='排序：可重复，形如 "date:desc"'),
    reverse: Optional[List[str]] = Query(None, description="取反比较的字段标识，可重复"),
) -> GetOrdersQuery:
    """HTTP query string → GetOrdersQuery（重复参数收敛为集合 / 有序列表）"""
    return GetOrdersQuery(
        id=id,
        created_by_user_id=created_by_user_id,
        updated_by_user_id=updated_by_user_id,
        fuzzy=fuzzy,
        warehouse_ids=warehouse_ids,
        person_related_id=person_related_id,
        person_in_charge_id=person_in_charge_id,
        order_payment_status=order_payment_status,
        order_type=order_type,
        order_category_id=order_category_id,
        currency=currency,
        date_start=date_start,
        date_end=date_end,
        last_updated_date_start=last_updated_date_start,
        last_updated_date_end=last_updated_date_end,
        sorters=sorters,
        reverse=reverse,
    )


@router.get("/orders", response_model=OrderListResponse)
async def list_orders(
    q: GetOrdersQuery = Depends(get_orders_query),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> OrderListResponse:
    """
    订单列表（过滤 + 排序 + 分页）。
    条件非法（未知排序列 / 未知 reverse 字段）→ 422 Problem。
    """
    settings = get_settings()
    page_size = min(limit or settings.ORDERS_DEFAULT_LIMIT, settings.ORDERS_MAX_LIMIT)

    rows, total = await query_orders(session, q, limit=page_size, offset=offset)
    return OrderListResponse(
        ok=True,
        rows=[OrderListRowOut.model_validate(r) for r in rows],
        total=total,
    )

# app/services/order_query_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.obs.metrics import app_db_errors_total
from app.schemas.order_query import GetOrdersQuery
from app.services.order_query_conditions import build_where, compile_order

log = logging.getLogger("erp.orders.service")

# 列表基础查询：orders + 仓库 + 两次人员（别名）+ 分类字典
ORDER_FROM_JOINS = """
  FROM orders
  JOIN warehouses
    ON warehouses.id = orders.warehouse_id
  JOIN persons AS persons_related
    ON persons_related.id = orders.person_related_id
  JOIN persons AS persons_in_charge
    ON persons_in_charge.id = orders.person_in_charge_id
  JOIN order_status_list
    ON order_status_list.id = orders.order_category_id
"""

ORDER_SELECT_BASE = (
    """
SELECT
  orders.id,
  orders.created_by_user_id,
  orders.updated_by_user_id,
  orders.date,
  orders.last_updated_date,
  orders.person_in_charge_id,
  orders.order_category_id,
  orders.from_guest_order_id,
  orders.currency,
  orders.total_amount,
  orders.total_amount_settled,
  orders.order_payment_status,
  orders.warehouse_id,
  orders.person_related_id,
  orders.description,
  orders.order_type,
  warehouses.name AS warehouse_name,
  persons_related.name AS person_related_name,
  persons_in_charge.name AS person_in_charge_name,
  order_status_list.name AS order_status_name
"""
    + ORDER_FROM_JOINS
)


async def count_orders(session: AsyncSession, query: GetOrdersQuery) -> int:
    where = build_where(query)
    stmt = where.to_text(prefix="SELECT COUNT(*)" + ORDER_FROM_JOINS)
    try:
        res = await session.execute(stmt, where.params)
    except Exception:
        app_db_errors_total.labels("count_orders").inc()
        raise
    return int(res.scalar() or 0)


async def list_orders(
    session: AsyncSession,
    query: GetOrdersQuery,
    *,
    limit: int,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """
    按过滤条件取一页订单头（带展示名）。
    未给 sorters 时不加 ORDER BY，由数据库决定顺序。
    """
    where = build_where(query)
    order_sql = compile_order(query)
    stmt = where.to_text(
        prefix=ORDER_SELECT_BASE,
        suffix=f"{order_sql}\nLIMIT :limit OFFSET :offset",
    )
    params = dict(where.params)
    params["limit"] = int(limit)
    params["offset"] = int(offset)

    log.debug("list_orders where=%r order=%r limit=%s offset=%s", where.sql, order_sql, limit, offset)
    try:
        res = await session.execute(stmt, params)
    except Exception:
        app_db_errors_total.labels("list_orders").inc()
        raise
    return [dict(r) for r in res.mappings().all()]


async def load_order_items(
    session: AsyncSession, order_ids: Iterable[int]
) -> Dict[int, List[Dict[str, Any]]]:
    """order_id -> 行项目列表（按行 id 保序）"""
    ids = sorted({int(x) for x in order_ids})
    if not ids:
        return {}

    stmt = text(
        """
        SELECT order_id, sku_id, quantity, price, exchanged
          FROM order_items
         WHERE order_id IN :ids
         ORDER BY order_id, id
        """
    ).bindparams(bindparam("ids", expanding=True))
    res = await session.execute(stmt, {"ids": ids})

    out: Dict[int, List[Dict[str, Any]]] = {oid: [] for oid in ids}
    for r in res.mappings().all():
        oid = int(r["order_id"])
        out.setdefault(oid, []).append(
            {
                "sku_id": int(r["sku_id"]),
                "quantity": int(r["quantity"]),
                "price": float(r["price"]),
                "exchanged": bool(r["exchanged"]),
            }
        )
    return out


async def query_orders(
    session: AsyncSession,
    query: GetOrdersQuery,
    *,
    limit: int,
    offset: int = 0,
) -> tuple[List[Dict[str, Any]], int]:
    """列表 + 总数；行上挂好 items。"""
    rows = await list_orders(session, query, limit=limit, offset=offset)
    total = await count_orders(session, query)
    items = await load_order_items(session, [r["id"] for r in rows])
    for r in rows:
        r["items"] = items.get(int(r["id"]), [])
    return rows, total

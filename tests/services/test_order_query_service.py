from __future__ import annotations

import pytest

from app.schemas.order_query import GetOrdersQuery
from app.services.order_query_errors import InvalidSortField
from app.services.order_query_service import (
    count_orders,
    list_orders,
    load_order_items,
    query_orders,
)
from tests.helpers.fake_session import FakeSession, order_row

pytestmark = pytest.mark.grp_orders


@pytest.mark.asyncio
async def test_list_orders_binds_filters_and_paging():
    s = FakeSession(order_rows=[order_row(1)])
    q = GetOrdersQuery(warehouse_ids={2, 1}, fuzzy="abc", sorters=["warehouse_id:desc"])

    rows = await list_orders(s, q, limit=20, offset=40)

    assert [r["id"] for r in rows] == [1]
    sql, params = s.executed[0]
    assert "JOIN persons AS persons_related" in sql
    assert "JOIN persons AS persons_in_charge" in sql
    assert "WHERE (CAST(orders.id AS TEXT) LIKE :fuzzy" in sql
    assert "ORDER BY warehouse_name desc" in sql
    assert "LIMIT :limit OFFSET :offset" in sql
    assert params == {"fuzzy": "%abc%", "warehouse_ids": [1, 2], "limit": 20, "offset": 40}


@pytest.mark.asyncio
async def test_list_orders_without_filters_has_no_where_or_order():
    s = FakeSession()
    await list_orders(s, GetOrdersQuery.empty(), limit=10)
    sql, params = s.executed[0]
    assert "WHERE" not in sql
    assert "ORDER BY" not in sql
    assert params == {"limit": 10, "offset": 0}


@pytest.mark.asyncio
async def test_count_orders_reuses_where():
    s = FakeSession(total=3)
    total = await count_orders(s, GetOrdersQuery(id=9, reverse={"id"}))
    assert total == 3
    sql, params = s.executed[0]
    assert sql.startswith("SELECT COUNT(*)")
    assert "orders.id!=:id" in sql
    assert params == {"id": 9}


@pytest.mark.asyncio
async def test_load_order_items_groups_by_order():
    s = FakeSession(
        item_rows=[
            {"order_id": 2, "sku_id": 7, "quantity": 1, "price": 1.0, "exchanged": True},
            {"order_id": 1, "sku_id": 5, "quantity": 2, "price": 2.5, "exchanged": False},
            {"order_id": 2, "sku_id": 8, "quantity": 4, "price": 3.0, "exchanged": False},
        ]
    )
    out = await load_order_items(s, [2, 1, 3])
    assert [i["sku_id"] for i in out[2]] == [7, 8]
    assert out[1][0] == {"sku_id": 5, "quantity": 2, "price": 2.5, "exchanged": False}
    assert out[3] == []
    assert s.executed[0][1] == {"ids": [1, 2, 3]}


@pytest.mark.asyncio
async def test_load_order_items_empty_ids_skips_db():
    s = FakeSession()
    assert await load_order_items(s, []) == {}
    assert s.executed == []


@pytest.mark.asyncio
async def test_query_orders_attaches_items_and_total(fake_session):
    rows, total = await query_orders(fake_session, GetOrdersQuery.empty(), limit=2)
    assert total == 7
    assert rows[0]["items"][0]["sku_id"] == 501
    assert rows[1]["items"] == []


@pytest.mark.asyncio
async def test_invalid_sort_never_reaches_db():
    s = FakeSession()
    with pytest.raises(InvalidSortField):
        await list_orders(s, GetOrdersQuery(sorters=["nope"]), limit=1)
    assert s.executed == []

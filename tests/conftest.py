# tests/conftest.py
from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.db.session import get_session
from app.main import app
from tests.helpers.fake_session import FakeSession, order_row


@pytest.fixture
def fake_session() -> FakeSession:
    """两张订单 + 一条行项目；total 故意比当前页多，验证分页总数来自 COUNT"""
    return FakeSession(
        order_rows=[order_row(1), order_row(2, warehouse_id=2, warehouse_name="二号仓")],
        item_rows=[
            {"order_id": 1, "sku_id": 501, "quantity": 3, "price": 9.5, "exchanged": False},
        ],
        total=7,
    )


@pytest.fixture
def client(fake_session: FakeSession) -> Iterator[TestClient]:
    """HTTP 客户端：DB Session 依赖替换为内存替身，不连真实数据库"""

    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_session, None)

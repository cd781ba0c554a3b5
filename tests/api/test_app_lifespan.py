from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import app.main as app_main

pytestmark = pytest.mark.grp_orders


def test_shutdown_disposes_db_engines(monkeypatch):
    calls: list[str] = []

    async def _fake_close() -> None:
        calls.append("closed")

    monkeypatch.setattr(app_main, "close_engines", _fake_close)

    with TestClient(app_main.app) as c:
        assert c.get("/healthz").status_code == 200
        assert calls == []

    assert calls == ["closed"]

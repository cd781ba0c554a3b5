from __future__ import annotations

import pytest

from app.db import session as db_session

pytestmark = pytest.mark.grp_orders


@pytest.mark.asyncio
async def test_close_engines_resets_cached_engine():
    engine = db_session.get_engine()
    db_session.get_session_maker()
    assert db_session.get_engine() is engine

    await db_session.close_engines()
    assert db_session._engine is None
    assert db_session._session_maker is None

    # 再次取用时重新建引擎
    assert db_session.get_engine() is not engine
    await db_session.close_engines()


@pytest.mark.asyncio
async def test_close_engines_without_engine_is_noop():
    await db_session.close_engines()
    await db_session.close_engines()
    assert db_session._engine is None


def test_normalize_async_dsn():
    assert db_session.normalize_async_dsn("postgres://u:p@h/db") == "postgresql+psycopg://u:p@h/db"
    assert (
        db_session.normalize_async_dsn("'postgresql+asyncpg://u:p@h/db'")
        == "postgresql+psycopg://u:p@h/db"
    )

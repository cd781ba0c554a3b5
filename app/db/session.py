# app/db/session.py
# 统一的异步会话工厂 + FastAPI 依赖（get_session）
from __future__ import annotations

import logging
import re
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import get_settings

log = logging.getLogger("erp.db")


# ---- DSN 归一：postgres/postgresql(+asyncpg) 统一到 psycopg3 ----
def normalize_async_dsn(url: str) -> str:
    url = (url or "").strip()
    # 有些环境会把值写成 '"postgresql+psycopg://.../erp"'，这里统一剥掉两侧引号
    if len(url) >= 2 and url[0] == url[-1] and url[0] in {'"', "'"}:
        url = url[1:-1].strip()
    if url.startswith("postgresql+asyncpg://") or url.startswith("postgres+asyncpg://"):
        return re.sub(r"^postgres(?:ql)?\+asyncpg://", "postgresql+psycopg://", url)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """进程内单例 Engine（首次使用时创建，不在 import 阶段连库）。"""
    global _engine
    if _engine is None:
        settings = get_settings()
        dsn = normalize_async_dsn(settings.DATABASE_URL)
        log.info("[DB] Using DSN (async): %s", dsn)
        _engine = create_async_engine(
            dsn,
            future=True,
            pool_pre_ping=True,
            echo=settings.SQL_ECHO,
        )
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    global _session_maker
    if _session_maker is None:
        _session_maker = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_maker


# ---- FastAPI 依赖 ----
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_maker()() as session:
        yield session


# ---- 关闭引擎（测试/生命周期） ----
async def close_engines() -> None:
    global _engine, _session_maker
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_maker = None

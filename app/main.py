# app/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routers.health import router as health_router
from app.api.routers.orders import router as orders_router
from app.core.config import get_settings
from app.core.logging import setup_logging
from app.db.base import init_models
from app.db.session import close_engines
from app.http_problem_handlers import register_exception_handlers
from app.obs.metrics import PrometheusMiddleware

settings = get_settings()
setup_logging(settings.LOG_LEVEL, json=settings.JSON_LOG)
logger = logging.getLogger("erp")

init_models()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # 进程退出时释放连接池
    await close_engines()
    logger.info("ERP-Orders stopped")


app = FastAPI(
    title="ERP-Orders",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(orders_router)

logger.info("ERP-Orders started (env=%s)", settings.ENV)

"""
FIT Social API 主应用文件。

本文件是FastAPI应用的入口点，负责：
1. 初始化日志
2. 启动时建表
3. 注册各个模块的路由
4. 提供健康检查接口

启动方式：
    uvicorn fitsocial.main:app --reload
"""

from contextlib import asynccontextmanager
import datetime

from fastapi import FastAPI
from .logging_config import setup_logging
from .config import LOG_LEVEL
from .utils import init_db

from .users.router import router as users_router
from .activities.router import router as activities_router

setup_logging(LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="FIT Social API", lifespan=lifespan)

# 路由注册
app.include_router(users_router, tags=["账户"])
app.include_router(activities_router, tags=["活动"])


@app.get("/healthcheck", tags=["系统"])
def healthcheck():
    """健康检查"""
    return {"status": "ok", "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat()}

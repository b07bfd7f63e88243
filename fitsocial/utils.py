"""
本文件包含数据库连接和会话管理的工具函数。

主要功能：
1. 数据库连接配置（从环境变量读取，避免硬编码）
2. 数据库会话管理
3. FastAPI依赖注入
4. 启动时建表
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .config import get_database_url, is_sql_echo_enabled
from .db_base import Base

logger = logging.getLogger(__name__)

DATABASE_URL = get_database_url()

engine = create_engine(DATABASE_URL, pool_pre_ping=True, echo=is_sql_echo_enabled())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI 依赖项：获取数据库会话（Session）。"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """
    创建全部数据表（已存在的表不会重复创建）。

    参数：
        bind: 可选的 Engine/Connection，不传则使用默认 engine
    """
    # 导入模型，确保它们注册到 Base.metadata
    from .users import models as _user_models  # noqa: F401
    from .activities import models as _activity_models  # noqa: F401

    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("[db][init] tables=%s", ",".join(Base.metadata.tables.keys()))

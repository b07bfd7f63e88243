"""
统一的 SQLAlchemy 声明式基类。

所有模块（users、activities）的 ORM 模型都继承这里的 Base，
这样 Base.metadata 中就包含了全部表，建表/清表时只需要操作一个 metadata。
"""

import datetime

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime.datetime:
    """当前 UTC 时间（不带时区），用作 created_at 等列的默认值；所有时间列都按 UTC 存储"""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)

"""
本文件定义了账户相关的数据模型（ORM类）。

User 类：表示一个注册账户，对应 users 表。包含邮箱（唯一）、密码哈希、显示名称和创建时间，
并通过关系关联该账户发布的活动（activities）和点过的赞（likes）。
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from ..db_base import Base, utcnow


class User(Base):
    """
    账户表模型
    - id: 主键
    - email: 登录邮箱，唯一
    - password_hash: bcrypt 哈希后的密码，不会出现在任何响应中
    - name: 显示名称（时间线上展示）
    - created_at: 注册时间
    """
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(128), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    activities = relationship('Activity', back_populates='user')
    likes = relationship('ActivityLike', back_populates='user')

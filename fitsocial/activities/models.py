"""
Activities模块的数据模型

1. Activity 类：一次跑步或步行记录，对应 activities 表。距离以英里为单位（两位小数），
   时长拆成时/分/秒三列保存，activity_date 为活动发生日期，created_at 为记录创建时间。
2. ActivityLike 类：某个账户对某条活动的点赞，对应 activity_likes 表。
   (activity_id, user_id) 上有唯一约束，保证同一账户对同一活动最多点赞一次。
"""

from enum import Enum

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from ..db_base import Base, utcnow


class ActivityType(str, Enum):
    """活动类型枚举"""
    RUN = "run"
    WALK = "walk"


class Activity(Base):
    """
    活动表模型
    - user_id: 外键，发布者
    - type: run 或 walk
    - distance_miles: 距离（英里），numeric(8,2)
    - duration_hours / duration_minutes / duration_seconds: 时长（分、秒范围 0-59）
    - likes: 该活动收到的全部点赞
    """
    __tablename__ = 'activities'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    type = Column(
        SAEnum(ActivityType, name='activity_type', values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    distance_miles = Column(Numeric(8, 2, asdecimal=False), nullable=False)
    duration_hours = Column(Integer, nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False, default=0)
    duration_seconds = Column(Integer, nullable=False, default=0)
    activity_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    user = relationship('User', back_populates='activities')
    likes = relationship('ActivityLike', back_populates='activity')


class ActivityLike(Base):
    """点赞表模型"""
    __tablename__ = 'activity_likes'
    __table_args__ = (
        UniqueConstraint('activity_id', 'user_id', name='uq_activity_likes_activity_user'),
    )
    id = Column(Integer, primary_key=True, index=True)
    activity_id = Column(Integer, ForeignKey('activities.id'), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    activity = relationship('Activity', back_populates='likes')
    user = relationship('User', back_populates='likes')

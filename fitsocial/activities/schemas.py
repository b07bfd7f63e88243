"""
本文件定义了活动与点赞相关的Pydantic数据模型，用于API请求和响应的数据验证与序列化。

包含以下模型：
1. ActivityCreate: 创建活动时的请求模型（距离>0，分/秒在0-59之间，总时长>0）
2. ActivityUpdate: 更新活动时的请求模型（除操作者 user_id 外全部可选）
3. Activity: 活动完整响应模型
4. ActivityWithLikes: 时间线上的活动（附带发布者名称、点赞数、当前查看者是否已点赞）
5. TimelineEntry: ActivityWithLikes 加上配速和时长的展示字符串
6. LikeRequest / Like: 点赞请求与响应
7. SuccessResponse: 删除/取消点赞的结果
"""

from typing import Optional
import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import ActivityType

# 单次活动时长上限（小时），防止超大整数溢出数据库整型列
MAX_DURATION_HOURS = 999


def _round_distance(value: Optional[float]) -> Optional[float]:
    """距离统一保留两位小数；四舍五入后为0视为非法"""
    if value is None:
        return None
    rounded = round(value, 2)
    if rounded <= 0:
        raise ValueError("Distance must be greater than 0")
    return rounded


def _to_naive_utc(value: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
    """带时区的时间换算成 UTC 再去掉时区信息（数据库列不带时区，统一按 UTC 存储）；不带时区的按 UTC 处理"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)


class ActivityCreate(BaseModel):
    """创建活动时的请求模型"""
    user_id: int = Field(..., description="发布者账户ID")
    type: ActivityType = Field(..., description="活动类型：run 或 walk")
    distance_miles: float = Field(..., gt=0, description="距离（英里）")
    duration_hours: int = Field(0, ge=0, le=MAX_DURATION_HOURS, description="时长-小时")
    duration_minutes: int = Field(0, ge=0, le=59, description="时长-分钟（0-59）")
    duration_seconds: int = Field(0, ge=0, le=59, description="时长-秒（0-59）")
    activity_date: datetime.datetime = Field(..., description="活动日期")

    @field_validator("distance_miles")
    @classmethod
    def round_distance(cls, v: float) -> float:
        return _round_distance(v)

    @field_validator("activity_date")
    @classmethod
    def normalize_activity_date(cls, v: datetime.datetime) -> datetime.datetime:
        return _to_naive_utc(v)

    @model_validator(mode="after")
    def check_duration(self):
        if self.duration_hours + self.duration_minutes + self.duration_seconds <= 0:
            raise ValueError("Duration must be greater than 0")
        return self


class ActivityUpdate(BaseModel):
    """
    更新活动时的请求模型

    user_id 是操作者，必须是活动的所有者；其余字段只更新实际传入的部分。
    """
    user_id: int = Field(..., description="操作者账户ID（必须是活动所有者）")
    type: Optional[ActivityType] = None
    distance_miles: Optional[float] = Field(None, gt=0)
    duration_hours: Optional[int] = Field(None, ge=0, le=MAX_DURATION_HOURS)
    duration_minutes: Optional[int] = Field(None, ge=0, le=59)
    duration_seconds: Optional[int] = Field(None, ge=0, le=59)
    activity_date: Optional[datetime.datetime] = None

    @field_validator("distance_miles")
    @classmethod
    def round_distance(cls, v: Optional[float]) -> Optional[float]:
        return _round_distance(v)

    @field_validator("activity_date")
    @classmethod
    def normalize_activity_date(cls, v: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
        return _to_naive_utc(v)

    def changes(self) -> dict:
        """需要写入数据库的字段（不含 user_id，且只包含请求里显式给出的非空字段）"""
        data = self.model_dump(exclude_unset=True, exclude={"user_id"})
        return {k: v for k, v in data.items() if v is not None}


class Activity(BaseModel):
    """活动完整响应模型"""
    id: int
    user_id: int
    type: ActivityType
    distance_miles: float
    duration_hours: int
    duration_minutes: int
    duration_seconds: int
    activity_date: datetime.datetime
    created_at: datetime.datetime
    model_config = ConfigDict(from_attributes=True)  # 允许从ORM对象创建


class ActivityWithLikes(Activity):
    """时间线上的活动"""
    user_name: str
    likes_count: int = 0
    user_has_liked: bool = False


class TimelineEntry(ActivityWithLikes):
    """时间线展示条目"""
    pace: Optional[str] = Field(None, description="配速，如 5:51/mi")
    duration_text: str = Field(..., description="时长，如 1h 5m 3s")


class LikeRequest(BaseModel):
    """点赞/取消点赞请求"""
    user_id: int


class Like(BaseModel):
    """点赞响应模型"""
    id: int
    activity_id: int
    user_id: int
    created_at: datetime.datetime
    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseModel):
    success: bool

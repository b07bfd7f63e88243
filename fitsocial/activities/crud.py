"""
本文件包含活动与点赞相关的数据库操作函数（CRUD操作）。

提供以下功能：
1. 活动的增删改查（更新/删除会校验操作者是否为所有者，删除时先删除该活动的全部点赞）
2. 时间线聚合查询：每条活动附带发布者名称、点赞数、指定查看者是否已点赞
3. 点赞 / 取消点赞

违反业务规则时抛出 fitsocial.exceptions 中的异常，由路由层翻译成 HTTP 状态码。
"""

import logging
from typing import List, Optional, Dict, Any

from sqlalchemy import select, delete, func, case, literal
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models, schemas
from ..users import crud as user_crud
from ..users.models import User
from ..exceptions import (
    ActivityNotFoundError,
    DuplicateLikeError,
    NotOwnerError,
    UserNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# 活动相关

def get_activity(db: Session, activity_id: int) -> Optional[models.Activity]:
    """根据ID获取单条活动，找不到则返回None"""
    stmt = select(models.Activity).where(models.Activity.id == activity_id)
    return db.execute(stmt).scalar_one_or_none()


def get_user_activities(db: Session, user_id: int) -> List[models.Activity]:
    """获取某个账户的全部活动，按活动日期倒序"""
    stmt = (
        select(models.Activity)
        .where(models.Activity.user_id == user_id)
        .order_by(models.Activity.activity_date.desc(), models.Activity.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def create_activity(db: Session, activity: schemas.ActivityCreate) -> models.Activity:
    """创建活动；发布者不存在时抛出 UserNotFoundError"""
    if user_crud.get_user(db, activity.user_id) is None:
        raise UserNotFoundError(activity.user_id)

    db_activity = models.Activity(**activity.model_dump())
    db.add(db_activity)
    db.commit()
    db.refresh(db_activity)
    logger.info(
        "[activities][create] activity_id=%s user_id=%s type=%s",
        db_activity.id, db_activity.user_id, db_activity.type.value,
    )
    return db_activity


def _get_owned_activity(db: Session, activity_id: int, user_id: int) -> models.Activity:
    """取出活动并校验所有者；活动不存在抛 ActivityNotFoundError，不属于该账户抛 NotOwnerError"""
    db_activity = get_activity(db, activity_id)
    if db_activity is None:
        raise ActivityNotFoundError(activity_id)
    if db_activity.user_id != user_id:
        raise NotOwnerError(activity_id, user_id)
    return db_activity


def update_activity(db: Session, activity_id: int, activity_update: schemas.ActivityUpdate) -> models.Activity:
    """
    更新活动（只更新有传递的字段）

    合并后的总时长仍然必须大于0，否则抛出 ValidationError，数据库不做任何修改。
    """
    db_activity = _get_owned_activity(db, activity_id, activity_update.user_id)

    update_data = activity_update.changes()
    hours = update_data.get("duration_hours", db_activity.duration_hours)
    minutes = update_data.get("duration_minutes", db_activity.duration_minutes)
    seconds = update_data.get("duration_seconds", db_activity.duration_seconds)
    if hours + minutes + seconds <= 0:
        raise ValidationError("Duration must be greater than 0")

    for field, value in update_data.items():
        setattr(db_activity, field, value)

    db.commit()
    db.refresh(db_activity)
    logger.info("[activities][update] activity_id=%s fields=%s", activity_id, ",".join(update_data))
    return db_activity


def delete_activity(db: Session, activity_id: int, user_id: int) -> Dict[str, Any]:
    """删除活动：先删除它的全部点赞，再删除活动本身，一次提交"""
    db_activity = _get_owned_activity(db, activity_id, user_id)

    removed_likes = db.execute(
        delete(models.ActivityLike).where(models.ActivityLike.activity_id == activity_id)
    ).rowcount
    db.delete(db_activity)
    db.commit()
    logger.info("[activities][delete] activity_id=%s likes_removed=%s", activity_id, removed_likes)
    return {"success": True}


def list_all_activities(db: Session, viewer_id: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    时间线聚合查询

    activities 内连接 users（取发布者名称），左连接 activity_likes，按活动分组：
    - likes_count: 该活动的点赞数（没有点赞的活动为0，同样会返回）
    - user_has_liked: viewer_id 出现在该活动的点赞人中时为 True；不传 viewer_id 时恒为 False

    结果按创建时间倒序（最新在前），创建时间相同时按ID倒序。
    """
    Activity = models.Activity
    Like = models.ActivityLike

    likes_count = func.count(Like.id)
    if viewer_id is not None:
        viewer_likes = func.coalesce(func.sum(case((Like.user_id == viewer_id, 1), else_=0)), 0)
    else:
        viewer_likes = literal(0)

    stmt = (
        select(
            Activity,
            User.name,
            likes_count.label("likes_count"),
            viewer_likes.label("viewer_likes"),
        )
        .join(Activity.user)
        .outerjoin(Like, Like.activity_id == Activity.id)
        .group_by(Activity.id, User.name)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
    )

    results = []
    for activity, user_name, count, liked in db.execute(stmt).all():
        item = schemas.Activity.model_validate(activity).model_dump()
        item.update(
            user_name=user_name,
            likes_count=int(count or 0),
            user_has_liked=bool(liked),
        )
        results.append(item)
    return results


# 点赞相关

def get_like(db: Session, activity_id: int, user_id: int) -> Optional[models.ActivityLike]:
    stmt = select(models.ActivityLike).where(
        models.ActivityLike.activity_id == activity_id,
        models.ActivityLike.user_id == user_id,
    )
    return db.execute(stmt).scalar_one_or_none()


def get_activity_likes(db: Session, activity_id: int) -> List[models.ActivityLike]:
    """获取某条活动的全部点赞"""
    stmt = (
        select(models.ActivityLike)
        .where(models.ActivityLike.activity_id == activity_id)
        .order_by(models.ActivityLike.created_at, models.ActivityLike.id)
    )
    return list(db.execute(stmt).scalars().all())


def like_activity(db: Session, activity_id: int, user_id: int) -> models.ActivityLike:
    """
    点赞

    - 活动不存在：ActivityNotFoundError
    - 账户不存在：UserNotFoundError
    - 已经点过赞：DuplicateLikeError（唯一约束冲突同样转换为该异常）
    """
    if get_activity(db, activity_id) is None:
        raise ActivityNotFoundError(activity_id)
    if user_crud.get_user(db, user_id) is None:
        raise UserNotFoundError(user_id)
    if get_like(db, activity_id, user_id) is not None:
        raise DuplicateLikeError(activity_id, user_id)

    db_like = models.ActivityLike(activity_id=activity_id, user_id=user_id)
    db.add(db_like)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateLikeError(activity_id, user_id)
    db.refresh(db_like)
    logger.info("[likes][create] activity_id=%s user_id=%s", activity_id, user_id)
    return db_like


def unlike_activity(db: Session, activity_id: int, user_id: int) -> Dict[str, Any]:
    """
    取消点赞（幂等）

    只有确实删除了一行时 success 才为 True；没有可取消的点赞（包括活动或账户不存在）时返回 False，不抛异常。
    """
    result = db.execute(
        delete(models.ActivityLike).where(
            models.ActivityLike.activity_id == activity_id,
            models.ActivityLike.user_id == user_id,
        )
    )
    db.commit()
    removed = (result.rowcount or 0) > 0
    if removed:
        logger.info("[likes][delete] activity_id=%s user_id=%s", activity_id, user_id)
    return {"success": removed}

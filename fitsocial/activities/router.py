"""
本文件定义了活动与点赞相关的API路由。

提供以下API端点：
1. POST / - 创建活动
2. GET / - 全部活动（附带点赞数和查看者点赞状态，viewer_id 可选）
3. GET /timeline - 时间线（在 2 的基础上附带配速和时长展示字符串）
4. GET /{activity_id} - 获取单条活动
5. PUT /{activity_id} - 更新活动（部分字段，需为所有者）
6. DELETE /{activity_id}?user_id= - 删除活动（需为所有者，连同点赞一起删除）
7. POST /{activity_id}/likes - 点赞
8. DELETE /{activity_id}/likes?user_id= - 取消点赞（没有可取消的点赞时 success=false）
9. GET /{activity_id}/likes - 某条活动的全部点赞（按点赞时间先后）
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from . import crud, schemas
from .timeline import get_timeline
from ..exceptions import FitSocialError
from ..utils import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activities")


def _to_http_error(e: FitSocialError) -> HTTPException:
    """业务异常转 HTTPException，details 只写日志，不返回给调用方"""
    logger.info("[activities-api][rejected] status=%s error=%s details=%s", e.status_code, e.message, e.details)
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/", response_model=schemas.Activity)
def create_activity(activity: schemas.ActivityCreate, db: Session = Depends(get_db)):
    """创建活动，发布者不存在时返回404"""
    try:
        return crud.create_activity(db, activity)
    except FitSocialError as e:
        raise _to_http_error(e)
    except Exception:
        logger.exception("[activities-api][create][error] user_id=%s", activity.user_id)
        raise HTTPException(status_code=500, detail="Failed to create activity")


@router.get("/", response_model=list[schemas.ActivityWithLikes])
def read_activities(
    viewer_id: Optional[int] = Query(None, description="当前查看者账户ID，用于计算 user_has_liked"),
    db: Session = Depends(get_db),
):
    """全部用户的活动，最新创建的在前"""
    try:
        return crud.list_all_activities(db, viewer_id)
    except Exception:
        logger.exception("[activities-api][list][error] viewer_id=%s", viewer_id)
        raise HTTPException(status_code=500, detail="Failed to load activities")


@router.get("/timeline", response_model=list[schemas.TimelineEntry])
def read_timeline(
    viewer_id: Optional[int] = Query(None, description="当前查看者账户ID"),
    db: Session = Depends(get_db),
):
    """时间线：活动列表 + 配速 + 时长展示字符串"""
    try:
        return get_timeline(db, viewer_id)
    except Exception:
        logger.exception("[activities-api][timeline][error] viewer_id=%s", viewer_id)
        raise HTTPException(status_code=500, detail="Failed to load activities")


@router.get("/{activity_id}", response_model=schemas.Activity)
def read_activity(activity_id: int, db: Session = Depends(get_db)):
    """获取单条活动"""
    db_activity = crud.get_activity(db, activity_id)
    if db_activity is None:
        raise HTTPException(status_code=404, detail="Activity not found")
    return db_activity


@router.put("/{activity_id}", response_model=schemas.Activity)
def update_activity(activity_id: int, activity_update: schemas.ActivityUpdate, db: Session = Depends(get_db)):
    """更新活动（只更新传入的字段）"""
    try:
        return crud.update_activity(db, activity_id, activity_update)
    except FitSocialError as e:
        raise _to_http_error(e)
    except Exception:
        logger.exception("[activities-api][update][error] activity_id=%s", activity_id)
        raise HTTPException(status_code=500, detail="Failed to update activity")


@router.delete("/{activity_id}", response_model=schemas.SuccessResponse)
def delete_activity(
    activity_id: int,
    user_id: int = Query(..., description="操作者账户ID（必须是活动所有者）"),
    db: Session = Depends(get_db),
):
    """删除活动及其全部点赞"""
    try:
        return crud.delete_activity(db, activity_id, user_id)
    except FitSocialError as e:
        raise _to_http_error(e)
    except Exception:
        logger.exception("[activities-api][delete][error] activity_id=%s", activity_id)
        raise HTTPException(status_code=500, detail="Failed to delete activity")


@router.get("/{activity_id}/likes", response_model=list[schemas.Like])
def read_activity_likes(activity_id: int, db: Session = Depends(get_db)):
    """获取某条活动的全部点赞，活动不存在时返回404"""
    if crud.get_activity(db, activity_id) is None:
        raise HTTPException(status_code=404, detail="Activity not found")
    return crud.get_activity_likes(db, activity_id)


@router.post("/{activity_id}/likes", response_model=schemas.Like)
def like_activity(activity_id: int, like: schemas.LikeRequest, db: Session = Depends(get_db)):
    """点赞；重复点赞返回409"""
    try:
        return crud.like_activity(db, activity_id, like.user_id)
    except FitSocialError as e:
        raise _to_http_error(e)
    except Exception:
        logger.exception("[likes-api][like][error] activity_id=%s user_id=%s", activity_id, like.user_id)
        raise HTTPException(status_code=500, detail="Failed to update like")


@router.delete("/{activity_id}/likes", response_model=schemas.SuccessResponse)
def unlike_activity(
    activity_id: int,
    user_id: int = Query(..., description="取消点赞的账户ID"),
    db: Session = Depends(get_db),
):
    """取消点赞"""
    try:
        return crud.unlike_activity(db, activity_id, user_id)
    except Exception:
        logger.exception("[likes-api][unlike][error] activity_id=%s user_id=%s", activity_id, user_id)
        raise HTTPException(status_code=500, detail="Failed to update like")

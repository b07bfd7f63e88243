"""
本文件定义了账户相关的API路由。

提供以下API端点：
1. POST / - 注册账户
2. POST /login - 登录（失败时返回 null，不是错误）
3. GET /{user_id} - 获取单个账户信息
4. GET /{user_id}/activities - 获取该账户的全部活动（按活动日期倒序）
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from . import crud, schemas
from ..activities import crud as activity_crud
from ..activities import schemas as activity_schemas
from ..exceptions import FitSocialError
from ..utils import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


@router.post("/", response_model=schemas.User)
def register_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    """注册新账户，邮箱重复时返回409"""
    try:
        return crud.create_user(db, user)
    except FitSocialError as e:
        logger.info("[users-api][rejected] status=%s error=%s details=%s", e.status_code, e.message, e.details)
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("[users-api][register][error]")
        raise HTTPException(status_code=500, detail="Registration failed")


@router.post("/login", response_model=Optional[schemas.User])
def login(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    """
    登录
    - 邮箱不存在或密码错误：返回 null（200）
    - 数据库异常：返回 500
    """
    try:
        return crud.login_user(db, credentials)
    except Exception:
        logger.exception("[users-api][login][error]")
        raise HTTPException(status_code=500, detail="Login failed")


@router.get("/{user_id}", response_model=schemas.User)
def read_user(user_id: int, db: Session = Depends(get_db)):
    """获取单个账户信息"""
    db_user = crud.get_user(db, user_id=user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.get("/{user_id}/activities", response_model=list[activity_schemas.Activity])
def read_user_activities(user_id: int, db: Session = Depends(get_db)):
    """获取指定账户的活动列表，最近的活动日期在前"""
    try:
        return activity_crud.get_user_activities(db, user_id)
    except Exception:
        logger.exception("[users-api][activities][error] user_id=%s", user_id)
        raise HTTPException(status_code=500, detail="Failed to load activities")

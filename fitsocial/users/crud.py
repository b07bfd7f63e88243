"""
本文件包含账户相关的数据库操作函数（CRUD操作）。

提供以下功能：
1. 注册账户（邮箱唯一性校验 + 密码哈希）
2. 登录校验（邮箱不存在或密码错误时返回 None，而不是抛异常）
3. 按ID/邮箱查询账户
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models, schemas
from .security import hash_password, verify_password
from ..exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    """根据ID获取单个账户，找不到则返回None"""
    stmt = select(models.User).where(models.User.id == user_id)
    return db.execute(stmt).scalar_one_or_none()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    """根据邮箱获取账户，找不到则返回None"""
    stmt = select(models.User).where(models.User.email == email)
    return db.execute(stmt).scalar_one_or_none()


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    """
    注册新账户

    邮箱已被注册时抛出 DuplicateEmailError。
    先查询一次给出明确的错误；并发注册同一邮箱时由唯一索引兜底，IntegrityError 同样转换为 DuplicateEmailError。
    """
    if get_user_by_email(db, user.email) is not None:
        raise DuplicateEmailError(user.email)

    db_user = models.User(
        email=user.email,
        password_hash=hash_password(user.password),
        name=user.name,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmailError(user.email)
    db.refresh(db_user)
    logger.info("[users][register] user_id=%s", db_user.id)
    return db_user


def login_user(db: Session, credentials: schemas.UserLogin) -> Optional[models.User]:
    """
    登录校验

    返回：
        匹配的账户；邮箱不存在或密码不匹配时返回 None
    """
    db_user = get_user_by_email(db, credentials.email)
    if db_user is None:
        return None
    if not verify_password(credentials.password, db_user.password_hash):
        logger.info("[users][login-failed] user_id=%s", db_user.id)
        return None
    return db_user

"""密码哈希与校验（bcrypt）"""

import logging

import bcrypt

from ..config import BCRYPT_ROUNDS

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """对明文密码加盐哈希，返回可直接入库的字符串"""
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    校验明文密码是否与哈希匹配。

    哈希格式损坏（例如历史遗留的明文记录）时返回 False，而不是抛异常。
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("[auth][bad-hash] stored password hash is not a bcrypt hash")
        return False

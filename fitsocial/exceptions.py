"""
业务异常定义

CRUD 层遇到违反业务规则的情况时抛出这里的异常，路由层再把它们翻译成 HTTPException：
- UserNotFoundError / ActivityNotFoundError -> 404
- NotOwnerError -> 403
- DuplicateEmailError / DuplicateLikeError -> 409
- ValidationError -> 422

数据库连接等基础设施故障不在这里定义，直接以 SQLAlchemyError 向上抛出，由路由层统一记录并返回 500。
"""

from typing import Any, Dict, Optional


class FitSocialError(Exception):
    """所有业务异常的基类"""

    status_code: int = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class UserNotFoundError(FitSocialError):
    status_code = 404

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with id {user_id} not found", {"user_id": user_id})


class ActivityNotFoundError(FitSocialError):
    status_code = 404

    def __init__(self, activity_id: int) -> None:
        super().__init__(f"Activity with id {activity_id} not found", {"activity_id": activity_id})


class NotOwnerError(FitSocialError):
    """操作者不是活动的所有者"""
    status_code = 403

    def __init__(self, activity_id: int, user_id: int) -> None:
        super().__init__(
            "Activity does not belong to user",
            {"activity_id": activity_id, "user_id": user_id},
        )


class DuplicateEmailError(FitSocialError):
    status_code = 409

    def __init__(self, email: str) -> None:
        super().__init__("Email already registered", {"email": email})


class DuplicateLikeError(FitSocialError):
    status_code = 409

    def __init__(self, activity_id: int, user_id: int) -> None:
        super().__init__(
            "User has already liked this activity",
            {"activity_id": activity_id, "user_id": user_id},
        )


class ValidationError(FitSocialError):
    """合并后的数据不满足业务约束（例如时长为0）"""
    status_code = 422

"""
本文件定义了账户相关的Pydantic数据模型，用于API请求和响应的数据验证与序列化。

包含以下模型：
1. UserCreate: 注册账户时的请求模型
2. UserLogin: 登录时的请求模型
3. User: 账户响应模型（不包含密码哈希）
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
import datetime


class UserCreate(BaseModel):
    """注册账户时的请求模型"""
    email: EmailStr
    password: str = Field(..., min_length=6, description="密码，至少6位")
    name: str = Field(..., min_length=1, description="显示名称")


class UserLogin(BaseModel):
    """登录时的请求模型"""
    email: EmailStr
    password: str


class User(BaseModel):
    """账户响应模型"""
    id: int
    email: str
    name: str
    created_at: datetime.datetime
    model_config = ConfigDict(from_attributes=True)  # 允许从ORM对象创建

"""
pytest配置文件，定义测试环境和共享的测试夹具（fixtures）。

主要功能：
1. 配置测试数据库连接（内存 SQLite，每个测试一个全新的库）
2. 提供数据库会话管理
3. 提供FastAPI测试客户端
4. 提供测试数据样本
"""

import os

# 必须在导入应用之前设置：应用启动时会按这些环境变量创建 engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fitsocial.db_base import Base
from fitsocial.main import app
from fitsocial.utils import get_db, init_db


@pytest.fixture
def engine():
    """每个测试独立的内存数据库，测试结束后删表"""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    """提供数据库会话"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(db_session):
    """提供FastAPI测试客户端（get_db 被替换为测试会话）"""
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_user_data():
    """注册账户用的数据样本"""
    return {
        "email": "runner@example.com",
        "password": "secret123",
        "name": "Test Runner",
    }


@pytest.fixture
def sample_activity_data():
    """创建活动用的数据样本（不含 user_id）"""
    return {
        "type": "run",
        "distance_miles": 5.25,
        "duration_hours": 0,
        "duration_minutes": 30,
        "duration_seconds": 45,
        "activity_date": "2024-01-15T07:30:00",
    }


@pytest.fixture
def register(client):
    """注册账户的快捷方法，返回响应JSON"""
    counter = {"n": 0}

    def _register(email=None, name=None, password="secret123"):
        counter["n"] += 1
        payload = {
            "email": email or f"user{counter['n']}@example.com",
            "password": password,
            "name": name or f"User {counter['n']}",
        }
        response = client.post("/users/", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@pytest.fixture
def log_activity(client, sample_activity_data):
    """创建活动的快捷方法，返回响应JSON"""

    def _log(user_id, **overrides):
        payload = {**sample_activity_data, "user_id": user_id, **overrides}
        response = client.post("/activities/", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _log


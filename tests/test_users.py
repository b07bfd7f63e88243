"""
账户相关接口测试
测试注册、登录、查询等基本功能
"""

import datetime
import logging

import pytest
from fastapi import status
from sqlalchemy.exc import SQLAlchemyError

from fitsocial.db_base import utcnow
from fitsocial.exceptions import DuplicateEmailError
from fitsocial.users import crud, models, schemas


class TestUserRegistration:
    """账户注册测试"""

    def test_register_success(self, client, sample_user_data):
        response = client.post("/users/", json=sample_user_data)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["email"] == sample_user_data["email"]
        assert data["name"] == sample_user_data["name"]
        assert "id" in data
        assert "created_at" in data
        # 响应里不能出现密码或哈希
        assert "password" not in data
        assert "password_hash" not in data

    def test_password_is_hashed(self, client, db_session, sample_user_data):
        client.post("/users/", json=sample_user_data)

        db_user = db_session.query(models.User).filter_by(email=sample_user_data["email"]).one()
        assert db_user.password_hash != sample_user_data["password"]
        assert db_user.password_hash.startswith("$2")

    def test_register_duplicate_email(self, client, db_session, sample_user_data):
        first = client.post("/users/", json=sample_user_data)
        assert first.status_code == status.HTTP_200_OK

        second = client.post("/users/", json={**sample_user_data, "name": "Someone Else"})
        assert second.status_code == status.HTTP_409_CONFLICT
        assert second.json()["detail"] == "Email already registered"

        # 只保留第一个账户
        assert db_session.query(models.User).count() == 1

    def test_duplicate_email_caught_by_unique_index(self, client, db_session, sample_user_data, monkeypatch):
        """查询时还看不到对方的并发注册：由唯一索引兜底，仍然是409"""
        client.post("/users/", json=sample_user_data)
        monkeypatch.setattr(crud, "get_user_by_email", lambda db, email: None)

        with pytest.raises(DuplicateEmailError):
            crud.create_user(db_session, schemas.UserCreate(**{**sample_user_data, "name": "Racer"}))

        response = client.post("/users/", json={**sample_user_data, "name": "Racer"})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Email already registered"
        assert db_session.query(models.User).count() == 1

    def test_duplicate_email_details_logged(self, client, sample_user_data, caplog):
        caplog.set_level(logging.INFO, logger="fitsocial.users.router")
        client.post("/users/", json=sample_user_data)

        client.post("/users/", json=sample_user_data)

        assert any(
            "[users-api][rejected]" in r.getMessage() and sample_user_data["email"] in r.getMessage()
            for r in caplog.records
        )

    def test_created_at_is_naive_utc(self, client, sample_user_data):
        response = client.post("/users/", json=sample_user_data)

        created_at = datetime.datetime.fromisoformat(response.json()["created_at"])
        assert created_at.tzinfo is None
        assert abs((utcnow() - created_at).total_seconds()) < 60

    @pytest.mark.parametrize("payload", [
        {"email": "not-an-email", "password": "secret123", "name": "A"},
        {"email": "a@example.com", "password": "12345", "name": "A"},
        {"email": "a@example.com", "password": "secret123", "name": ""},
        {"email": "a@example.com", "password": "secret123"},
    ])
    def test_register_invalid_input(self, client, payload):
        response = client.post("/users/", json=payload)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestUserLogin:
    """登录测试"""

    def test_login_success(self, client, sample_user_data):
        created = client.post("/users/", json=sample_user_data).json()

        response = client.post("/users/login", json={
            "email": sample_user_data["email"],
            "password": sample_user_data["password"],
        })

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == created["id"]
        assert data["name"] == sample_user_data["name"]

    def test_login_wrong_password_returns_null(self, client, sample_user_data):
        client.post("/users/", json=sample_user_data)

        response = client.post("/users/login", json={
            "email": sample_user_data["email"],
            "password": "wrong-password",
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.json() is None

    def test_login_unknown_email_returns_null(self, client):
        response = client.post("/users/login", json={
            "email": "nobody@example.com",
            "password": "whatever",
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.json() is None

    def test_login_database_error_returns_500(self, client, sample_user_data, monkeypatch):
        """数据库异常不能当成登录失败返回 null"""
        client.post("/users/", json=sample_user_data)

        def broken_lookup(db, email):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(crud, "get_user_by_email", broken_lookup)

        response = client.post("/users/login", json={
            "email": sample_user_data["email"],
            "password": sample_user_data["password"],
        })

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Login failed"


class TestUserRetrieval:
    """账户查询测试"""

    def test_get_user_success(self, client, register):
        user = register(name="Alice")

        response = client.get(f"/users/{user['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Alice"

    def test_get_user_not_found(self, client):
        response = client.get("/users/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found"

    def test_get_user_activities_ordered_by_activity_date(self, client, register, log_activity):
        user = register()
        other = register()
        log_activity(user["id"], activity_date="2024-01-10T07:00:00")
        log_activity(user["id"], activity_date="2024-03-01T07:00:00")
        log_activity(user["id"], activity_date="2024-02-05T07:00:00")
        log_activity(other["id"])

        response = client.get(f"/users/{user['id']}/activities")

        assert response.status_code == status.HTTP_200_OK
        dates = [a["activity_date"] for a in response.json()]
        assert dates == ["2024-03-01T07:00:00", "2024-02-05T07:00:00", "2024-01-10T07:00:00"]

    def test_get_user_activities_empty(self, client, register):
        user = register()

        response = client.get(f"/users/{user['id']}/activities")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_get_user_activities_mixed_offsets_ordered_by_instant(self, client, register, log_activity):
        """带时区偏移的活动日期按UTC换算后再排序"""
        user = register()
        ten_utc = log_activity(user["id"], activity_date="2024-01-15T10:00:00+00:00")
        eight_eastern = log_activity(user["id"], activity_date="2024-01-15T08:00:00-05:00")

        assert ten_utc["activity_date"] == "2024-01-15T10:00:00"
        assert eight_eastern["activity_date"] == "2024-01-15T13:00:00"

        response = client.get(f"/users/{user['id']}/activities")

        assert [a["id"] for a in response.json()] == [eight_eastern["id"], ten_utc["id"]]

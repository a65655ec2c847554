import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("JWT_ADMIN_SECRET", "test-admin-secret")
os.environ.setdefault("COOKIE_SECURE", "false")
os.environ.setdefault("COOKIE_SAMESITE", "lax")

from collections.abc import Callable, Iterator
from datetime import date, datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.db.session import get_session
from app.main import app


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    def get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_test_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


def registration_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "name": "Test User",
        "email": "user@test.dev",
        "password": "secret-password",
        "weightInKg": 70,
        "heightInCm": 175,
        "gender": "male",
        "dob": date(datetime.now(timezone.utc).year - 30, 6, 15).isoformat(),
        "goal": "maintain",
        "activityLevel": "moderate",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict[str, str]]:
    """
    Register and log in through the public routes; returns bearer headers.
    """

    def _register(**overrides: Any) -> dict[str, str]:
        payload = registration_payload(**overrides)
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text

        login = client.post(
            "/auth/login",
            json={"email": payload["email"], "password": payload["password"]},
        )
        assert login.status_code == 200, login.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {login.json()['data']['authToken']}"}

    return _register


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    credentials = {"email": "admin@test.dev", "password": "admin-password"}
    response = client.post("/admin/register", json={"name": "Admin", **credentials})
    assert response.status_code == 201, response.text

    login = client.post("/admin/login", json=credentials)
    assert login.status_code == 200, login.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {login.json()['data']['adminAuthToken']}"}

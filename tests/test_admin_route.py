from collections.abc import Callable

from fastapi.testclient import TestClient

from app.core.security import create_admin_token

ADMIN_PAYLOAD = {"name": "Head Coach", "email": "coach@test.dev", "password": "coach-password"}


def test_register_and_login_admin(client: TestClient) -> None:
    register = client.post("/admin/register", json=ADMIN_PAYLOAD)
    assert register.status_code == 201
    assert register.json()["message"] == "Admin registered successfully"

    login = client.post(
        "/admin/login",
        json={"email": "coach@test.dev", "password": "coach-password"},
    )

    assert login.status_code == 200
    token = login.json()["data"]["adminAuthToken"]
    assert token
    assert login.cookies.get("adminAuthToken") == token


def test_register_admin_duplicate_email(client: TestClient) -> None:
    client.post("/admin/register", json=ADMIN_PAYLOAD)

    response = client.post("/admin/register", json=ADMIN_PAYLOAD)

    assert response.status_code == 409
    assert response.json()["message"] == "Admin with this email already exists"


def test_admin_login_rejects_wrong_password(client: TestClient) -> None:
    client.post("/admin/register", json=ADMIN_PAYLOAD)

    response = client.post("/admin/login", json={"email": "coach@test.dev", "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"ok": False, "message": "Invalid admin credentials", "data": None}


def test_admin_checklogin_with_cookie(client: TestClient) -> None:
    client.post("/admin/register", json=ADMIN_PAYLOAD)
    client.post("/admin/login", json={"email": "coach@test.dev", "password": "coach-password"})

    response = client.get("/admin/checklogin")

    assert response.status_code == 200
    assert isinstance(response.json()["data"]["adminId"], int)


def test_admin_checklogin_without_token(client: TestClient) -> None:
    response = client.get("/admin/checklogin")

    assert response.status_code == 401
    assert response.json()["message"] == "Admin authentication failed: No adminAuthToken provided"


def test_user_token_is_not_an_admin_token(
    client: TestClient,
    register_user: Callable[..., dict[str, str]],
) -> None:
    headers = register_user()

    response = client.get("/admin/checklogin", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "Admin authentication failed: Invalid adminAuthToken"


def test_expired_admin_token_is_rejected(client: TestClient) -> None:
    token = create_admin_token(1, expires_minutes=-1)

    response = client.get("/admin/checklogin", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_stale_admin_cookie_falls_back_to_bearer(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    client.cookies.set("adminAuthToken", create_admin_token(1, expires_minutes=-1))

    response = client.get("/admin/checklogin", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Admin authenticated successfully"

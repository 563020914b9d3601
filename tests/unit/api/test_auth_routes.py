"""
Name: Auth Routes Tests

Responsibilities:
  - Register per role through HTTP (201 + cookie, never password_hash)
  - Login failure is a single 401 for unknown email and wrong password
  - Session rehydration (/auth/me, /routes/landing) and logout
"""

import pytest
from fastapi.testclient import TestClient

from freshora.api.main import app
from freshora.crosscutting.config import get_settings

pytestmark = pytest.mark.unit


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _register(client: TestClient, **overrides):
    body = {
        "name": "Ana",
        "email": "ana@test.com",
        "password": "secret1",
    }
    body.update(overrides)
    return client.post("/auth/register", json=body)


def test_register_defaults_to_customer_and_sets_cookie(client):
    response = _register(client)

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["role"] == "customer"
    assert data["landing_route"] == "/"
    assert data["token_type"] == "bearer"
    assert "password_hash" not in data["user"]
    assert "passwordHash" not in data["user"]
    assert get_settings().jwt_cookie_name in response.cookies


def test_register_seller_returns_store_name(client):
    response = _register(
        client, role="seller", email="seller@test.com", storeName="Fresh Farm"
    )

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["storeName"] == "Fresh Farm"
    assert data["landing_route"] == "/seller/dashboard"


def test_register_seller_without_store_name_is_422(client):
    response = _register(client, role="seller", email="seller@test.com")

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_register_admin_with_wrong_secret_is_403(client):
    response = _register(
        client, role="admin", email="boss@test.com", adminSecret="wrong"
    )

    assert response.status_code == 403
    body = response.json()
    assert body["code"] == "FORBIDDEN"
    assert body["message"] == body["detail"]
    assert response.headers["content-type"].startswith("application/problem+json")

    login = client.post(
        "/auth/login", json={"email": "boss@test.com", "password": "secret1"}
    )
    assert login.status_code == 401


@pytest.mark.parametrize("secret_field", [{}, {"adminSecret": ""}])
def test_register_admin_without_secret_is_403(client, secret_field):
    response = _register(client, role="admin", email="boss@test.com", **secret_field)

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"

    login = client.post(
        "/auth/login", json={"email": "boss@test.com", "password": "secret1"}
    )
    assert login.status_code == 401


def test_register_admin_with_configured_secret(client):
    response = _register(
        client,
        role="admin",
        email="boss@test.com",
        adminSecret=get_settings().admin_secret,
    )

    assert response.status_code == 201
    assert response.json()["landing_route"] == "/admin/dashboard"


def test_register_unknown_role_is_422(client):
    response = _register(client, role="superuser")

    assert response.status_code == 422
    assert response.json()["errors"]


def test_register_duplicate_email_is_422(client):
    assert _register(client).status_code == 201

    again = _register(client, email="ANA@test.com")

    assert again.status_code == 422
    assert again.json()["message"]


def test_login_failures_are_identical(client):
    _register(client)

    wrong_password = client.post(
        "/auth/login", json={"email": "ana@test.com", "password": "nope"}
    )
    unknown_email = client.post(
        "/auth/login", json={"email": "ghost@test.com", "password": "nope"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["code"] == unknown_email.json()["code"]
    assert wrong_password.json()["message"] == unknown_email.json()["message"]


def test_login_me_landing_and_logout(client):
    _register(client, role="seller", email="seller@test.com", storeName="Farm")

    login = client.post(
        "/auth/login", json={"email": "seller@test.com", "password": "secret1"}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "seller@test.com"
    assert me.json()["role"] == "seller"

    landing = client.get("/routes/landing", headers=headers)
    assert landing.json() == {"role": "seller", "landing_route": "/seller/dashboard"}

    logout = client.post("/auth/logout")
    assert logout.status_code == 200
    assert logout.json() == {"ok": True}


def test_me_without_token_is_401(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_healthz_reports_memory_storage(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["db"] == "memory"
    assert response.headers["X-Request-Id"]

from sqlalchemy import func, select

from docblog.core.config import get_settings
from docblog.core.security import create_access_token
from docblog.db.session import SessionLocal
from docblog.models.user import User
from conftest import auth_headers, register


def test_register_login_and_me(client):
    created = register(client, "Alice", "alice@example.com")
    assert created["success"] is True
    assert created["user"]["email"] == "alice@example.com"
    assert "password" not in created["user"]

    login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"})
    assert login.status_code == 200
    token = login.json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    body = me.json()
    assert body["name"] == "Alice"
    assert body["id"] == created["user"]["id"]
    assert "createdAt" in body
    assert "password_hash" not in body and "passwordHash" not in body


def test_register_sets_http_only_cookie(client):
    resp = client.post("/api/auth/register", json={"name": "Alice", "email": "alice@example.com", "password": "secret1"})
    cookie = resp.headers["set-cookie"].lower()
    assert cookie.startswith("token=")
    assert "httponly" in cookie
    assert "samesite=strict" in cookie
    assert "secure" not in cookie


def test_email_is_normalized_and_unique(client):
    register(client, "Alice", "  Alice@Example.COM ")
    dup = client.post("/api/auth/register", json={"name": "Other", "email": "alice@example.com", "password": "secret1"})
    assert dup.status_code == 400
    assert dup.json()["error"] == "DUPLICATE_EMAIL"

    login = client.post("/api/auth/login", json={"email": "ALICE@example.com", "password": "secret1"})
    assert login.status_code == 200


def test_register_validation(client):
    short = client.post("/api/auth/register", json={"name": "Al", "email": "al@example.com", "password": "12345"})
    assert short.status_code == 400
    assert short.json()["error"] == "VALIDATION_ERROR"

    bad_email = client.post("/api/auth/register", json={"name": "Al", "email": "not-an-email", "password": "secret1"})
    assert bad_email.status_code == 400

    blank_name = client.post("/api/auth/register", json={"name": "   ", "email": "al@example.com", "password": "secret1"})
    assert blank_name.status_code == 400


def test_invalid_credentials_are_indistinguishable(client):
    register(client, "Alice", "alice@example.com")
    wrong_password = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope123"})
    unknown_user = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret1"})
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_login_requires_fields(client):
    resp = client.post("/api/auth/login", json={"email": "alice@example.com"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


def test_me_requires_token(client):
    missing = client.get("/api/auth/me")
    assert missing.status_code == 401
    assert missing.json()["error"] == "AUTHENTICATION_REQUIRED"

    bogus = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert bogus.status_code == 401
    assert bogus.json()["error"] == "INVALID_TOKEN"


def test_cookie_token_is_accepted(client):
    register(client, "Alice", "alice@example.com")
    # TestClient keeps the cookie set by /register
    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == "alice@example.com"


def test_header_takes_precedence_over_cookie(client):
    register(client, "Alice", "alice@example.com")
    bob_headers = auth_headers(client, "Bob", "bob@example.com")
    # login refreshes the cookie with alice's token
    client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret1"})
    assert client.get("/api/auth/me").json()["email"] == "alice@example.com"
    me = client.get("/api/auth/me", headers=bob_headers)
    assert me.json()["email"] == "bob@example.com"


def test_logout_clears_cookie(client):
    register(client, "Alice", "alice@example.com")
    resp = client.get("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert client.get("/api/auth/me").status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    token = create_access_token("8a6e0804-2bd0-4672-b79d-d97027f9071a")
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "INVALID_TOKEN"


def test_production_cookie_is_secure(client, monkeypatch):
    production = get_settings().model_copy(update={"environment": "prod"})
    monkeypatch.setattr("docblog.routers.auth.get_settings", lambda: production)
    resp = client.post("/api/auth/register", json={"name": "Alice", "email": "alice@example.com", "password": "secret1"})
    assert resp.status_code == 201
    cookie = resp.headers["set-cookie"].lower()
    assert "; secure" in cookie
    assert "httponly" in cookie


def test_register_without_signing_secret_stores_nothing(client, monkeypatch):
    unsigned = get_settings().model_copy(update={"jwt_secret": ""})
    monkeypatch.setattr("docblog.core.security.get_settings", lambda: unsigned)
    resp = client.post("/api/auth/register", json={"name": "Alice", "email": "alice@example.com", "password": "secret1"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "CONFIGURATION_ERROR"
    with SessionLocal() as db:
        assert db.scalar(select(func.count(User.id))) == 0

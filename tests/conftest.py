import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CORS_PARENT_DOMAIN"] = "example.org"

from docblog.db.base import Base
from docblog.db.session import engine
from docblog.main import create_app

DOC_LINK = "https://docs.google.com/document/d/abc123456789012345678901234/edit"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 4


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    path = Path("test.db")
    if path.exists():
        path.unlink()


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def register(client, name: str, email: str, password: str = "secret1") -> dict:
    resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_headers(client, name: str = "Alice", email: str = "alice@example.com") -> dict:
    token = register(client, name, email)["token"]
    return {"Authorization": f"Bearer {token}"}

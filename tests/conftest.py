# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import slatecms.models  # noqa: F401  (populates Base.metadata)
from slatecms.core.settings import settings
from slatecms.db.base import Base
from slatecms.db.session import get_db
from slatecms.main import app
from slatecms.models.auth import User
from slatecms.services import auth_service, user_service
from slatecms.services.auth_service import AuthenticatedUser

API = settings.API_V1_STR


@pytest.fixture(scope="function")
def db() -> Session:
    """
    One in-memory SQLite database per test. StaticPool keeps a single
    connection so the schema survives across the TestClient threadpool.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(autouse=True)
def _override_get_db(db: Session):
    """Every endpoint uses the session of the running test."""
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# -----------------------------
# Service-level actors
# -----------------------------
@pytest.fixture
def admin(db: Session) -> AuthenticatedUser:
    return auth_service.register(db, name="Ana", email="ana@acme.io", password="s3cret-pass").user


@pytest.fixture
def editor(db: Session, admin: AuthenticatedUser) -> AuthenticatedUser:
    u = user_service.create_user(
        db, admin, name="Eli", email="eli@acme.io", password="edit-pass", role="editor"
    )
    return AuthenticatedUser.from_user(db.get(User, u.id))


@pytest.fixture
def other_admin(db: Session) -> AuthenticatedUser:
    """Admin of a second, unrelated workspace."""
    return auth_service.register(db, name="Olga", email="olga@other.io", password="other-pass").user


# -----------------------------
# HTTP-level actors
# -----------------------------
@pytest.fixture
def admin_login(client: TestClient) -> dict:
    r = client.post(f"{API}/auth/register", json={"name": "Ana", "email": "ana@acme.io", "password": "s3cret-pass"})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def admin_headers(admin_login: dict) -> dict:
    return bearer(admin_login["token"])


@pytest.fixture
def editor_headers(client: TestClient, admin_headers: dict) -> dict:
    r = client.post(
        f"{API}/users",
        json={"name": "Eli", "email": "eli@acme.io", "password": "edit-pass", "role": "editor"},
        headers=admin_headers,
    )
    assert r.status_code == 201, r.text
    r = client.post(f"{API}/auth/login", json={"email": "eli@acme.io", "password": "edit-pass"})
    assert r.status_code == 200, r.text
    return bearer(r.json()["token"])

# tests/conftest.py
import os
from uuid import uuid4

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tracker.core.database import Base, get_db  # noqa: E402
from tracker.main import app  # noqa: E402


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Register a user and return its identity plus ready-to-use auth headers."""

    def _register(name: str = "Alice Smith", email: str | None = None, password: str = "Secret123"):
        email = email or f"user{uuid4().hex[:8]}@example.com"
        r = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, "confirmPassword": password},
        )
        assert r.status_code == 201, r.text
        data = r.json()
        return {
            "id": data["user"]["_id"],
            "name": data["user"]["name"],
            "email": data["user"]["email"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register


@pytest.fixture
def alice(register_user):
    return register_user("Alice Smith")


@pytest.fixture
def bob(register_user):
    return register_user("Bob Jones")

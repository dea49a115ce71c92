import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.main import app
from app.models.base import Base


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Ada", "email": "ada@example.com", "password": "secret123"},
    )
    assert r.status_code == 201
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def seeded(client, auth_headers):
    """CS101 -> CS201 -> CS301, plus MATH101 feeding CS201."""
    for course in [
        {"id": "CS101", "name": "Intro to Programming"},
        {"id": "MATH101", "name": "Discrete Math", "credits": 4},
        {"id": "CS201", "name": "Data Structures", "prerequisites": ["CS101", "MATH101"]},
        {"id": "CS301", "name": "Algorithms", "prerequisites": ["CS201"]},
    ]:
        r = client.post("/api/courses", json=course, headers=auth_headers)
        assert r.status_code == 201, r.text
    return client

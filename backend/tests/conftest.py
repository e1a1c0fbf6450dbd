import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-booking-suite")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.services.booking_service import BookingService
from app.storage.database import build_session_factory, init_db
from app.storage.repository import SqlRepository
from main import create_app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with build_session_factory(engine)() as session:
        yield session


@pytest.fixture
def repository(session):
    return SqlRepository(session)


@pytest.fixture
def service(repository):
    return BookingService(repository=repository)


@pytest.fixture
def users(repository):
    return {name: repository.add_user(name) for name in ("jlo", "lebron", "serena")}


@pytest.fixture
def listings(repository, users):
    return {
        "lebron": repository.add_listing(users["lebron"].id, 100),
        "serena": repository.add_listing(users["serena"].id, 250),
    }


@pytest.fixture
def client(engine):
    return TestClient(create_app(engine=engine))


@pytest.fixture
def auth_headers():
    def _headers(username: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(username)}"}

    return _headers

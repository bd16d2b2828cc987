import os

# Set test configuration before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["QUERY_DATABASE_URL"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel
from sqlmodel.pool import StaticPool

from taskactivity.core.database import get_db, get_query_db
from taskactivity.main import app
from taskactivity.models import Role
from taskactivity.repositories import UserRepository, DropdownValueRepository
from taskactivity.services import UserService, DropdownValueService

TEST_PASSWORD = "Secret123!"


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    """HTTP client against the real app with database dependencies overridden."""

    def get_db_override():
        yield session

    app.dependency_overrides[get_db] = get_db_override
    app.dependency_overrides[get_query_db] = get_db_override

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def user_service(session) -> UserService:
    return UserService(UserRepository(session))


@pytest.fixture
def dropdown_service(session) -> DropdownValueService:
    return DropdownValueService(DropdownValueRepository(session))


@pytest.fixture
def make_user(user_service):
    """Factory creating a user with TEST_PASSWORD."""

    def _make(username: str, role: Role = Role.USER, **kwargs):
        kwargs.setdefault("lastname", "Tester")
        return user_service.create_user(username=username, password=TEST_PASSWORD, role=role, **kwargs)

    return _make


@pytest.fixture
def login(client):
    """Sign a user in through the login form; the session cookie stays on the client."""

    def _login(username: str, password: str = TEST_PASSWORD):
        return client.post(
            "/login",
            data={"username": username, "password": password},
            follow_redirects=False,
        )

    return _login


@pytest.fixture
def admin_client(client, make_user, login):
    make_user("admin", role=Role.ADMIN, firstname="Ada")
    login("admin")
    return client


@pytest.fixture
def user_client(client, make_user, login):
    make_user("jdoe", role=Role.USER, firstname="John", lastname="Doe")
    login("jdoe")
    return client

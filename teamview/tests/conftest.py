import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
import os
import tempfile
from datetime import timedelta
from typing import Generator, Any

# Set environment variables BEFORE importing settings or the app,
# so that Settings() picks up the test values.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "testsecretkey"
os.environ["JENKINS_HOME"] = tempfile.mkdtemp(prefix="teamview-home-")

# Import all ORM models first so Base.metadata knows every table.
import teamview.models

from teamview.models.base import Base
from teamview.core.settings import settings as app_settings

from teamview.main import app

engine = create_engine(
    app_settings.DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

from teamview.dependencies import get_db
from teamview.crud.user import create_user, get_user_by_username
from teamview.schemas.user import UserCreate
from teamview.core import security
from teamview.team_store import TeamStore, get_team_store


@pytest.fixture(scope="session", autouse=True)
def create_test_tables_session_scope():
    """
    Create all tables once per test session. Drops them again after the session.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Database session for each test function.
    Rolls back any changes after the test to ensure test isolation.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def teams_root(tmp_path):
    """
    Empty <jenkins-home>/teams directory for one test.
    """
    root = tmp_path / "teams"
    root.mkdir()
    return root


@pytest.fixture(scope="function")
def team_store(teams_root) -> TeamStore:
    return TeamStore(teams_root)


@pytest.fixture(scope="function")
def client(db: Session, team_store: TeamStore) -> Generator[TestClient, None, None]:
    """
    TestClient with the database session and the team store swapped for test ones.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_team_store] = lambda: team_store
    with TestClient(app) as c:
        yield c
    del app.dependency_overrides[get_db]
    del app.dependency_overrides[get_team_store]


def _get_or_create_user(db: Session, user_in: UserCreate) -> Any:
    user = get_user_by_username(db, username=user_in.username)
    if not user:
        user = create_user(db=db, data=user_in.model_dump())
    return user


@pytest.fixture(scope="function")
def test_superuser(db: Session) -> Any:
    return _get_or_create_user(db, UserCreate(
        username="testadmin",
        email="testadmin@example.com",
        password="testpassword",
        full_name="Test Super User",
        is_superuser=True,
        is_active=True
    ))


@pytest.fixture(scope="function")
def test_user(db: Session) -> Any:
    return _get_or_create_user(db, UserCreate(
        username="testuser",
        email="testuser@example.com",
        password="testpassword",
        full_name="Test Normal User",
        is_superuser=False,
        is_active=True
    ))


@pytest.fixture(scope="function")
def other_user(db: Session) -> Any:
    return _get_or_create_user(db, UserCreate(
        username="bob",
        email="bob@example.com",
        password="bobpassword",
        full_name="Bob",
        is_superuser=False,
        is_active=True
    ))


def _token_headers(user: Any) -> dict[str, str]:
    token, _ = security.create_access_token(
        data={"sub": user.username},
        expires_delta=timedelta(minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def superuser_token_headers(test_superuser: Any) -> dict[str, str]:
    return _token_headers(test_superuser)


@pytest.fixture(scope="function")
def normal_user_token_headers(test_user: Any) -> dict[str, str]:
    return _token_headers(test_user)


@pytest.fixture(scope="function")
def other_user_token_headers(other_user: Any) -> dict[str, str]:
    return _token_headers(other_user)

from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from foodorder.core.security import get_token_service  # noqa: E402
from foodorder.database import get_session  # noqa: E402
from foodorder.main import app  # noqa: E402
from tests.utils.factories import create_user_factory  # noqa: E402


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def test_client(db_session):
    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db_session):
    return create_user_factory(
        db_session, email="customer@example.com", password="custpass123", role="user"
    )


@pytest.fixture
def test_admin(db_session):
    return create_user_factory(
        db_session, email="admin@example.com", password="adminpass123", role="admin"
    )


@pytest.fixture
def test_admin_token(test_admin):
    return get_token_service().issue(str(test_admin.id))


@pytest.fixture
def test_user_token(test_user):
    return get_token_service().issue(str(test_user.id))

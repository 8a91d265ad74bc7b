import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from statusboard.auth import hash_password
from statusboard.config import Settings
from statusboard.database import get_session
from statusboard.main import create_app
from statusboard.models.user import User
from statusboard.services.credential_store import SqlCredentialStore
from statusboard.services.status_store import SqlStatusStore


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret",
        bcrypt_rounds=4,
    )


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        # Seed admin user
        admin = User(
            username="admin",
            password_hash=hash_password("admin", rounds=4),
            role="admin",
        )
        session.add(admin)
        session.commit()
        yield session


@pytest.fixture(name="app")
def app_fixture(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture(name="client")
def client_fixture(app: FastAPI, session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def credential_store(session: Session) -> SqlCredentialStore:
    return SqlCredentialStore(session, bcrypt_rounds=4)


@pytest.fixture
def status_store(session: Session) -> SqlStatusStore:
    return SqlStatusStore(session)


@pytest.fixture
def staff_user(session: Session) -> User:
    user = User(
        username="staffer",
        password_hash=hash_password("staffpass", rounds=4),
        role="staff",
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="login")
def login_fixture(client: TestClient):
    def _login(username: str, password: str):
        return client.post(
            "/login",
            data={"username": username, "password": password},
            follow_redirects=False,
        )

    return _login


@pytest.fixture
def admin_client(client: TestClient, login) -> TestClient:
    response = login("admin", "admin")
    assert response.status_code == 303
    return client


@pytest.fixture
def staff_client(client: TestClient, login, staff_user: User) -> TestClient:
    response = login("staffer", "staffpass")
    assert response.status_code == 303
    return client

import os
from dataclasses import dataclass
from itertools import count
from typing import Callable, Dict

# Keep app startup (init_db) off the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from community_api.database import get_session, import_models  # noqa: E402
from community_api.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_PASSWORD = "Passw0rd123"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share the same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. Tables are dropped and recreated for every test
# 4. App dependency overridden to use test_engine (see client_fixture)
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on freshly created tables"""
    import_models()
    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session"""
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Authenticated accounts
# ============================================================================


@dataclass
class Account:
    id: str
    email: str
    tokens: Dict
    headers: Dict[str, str]


_email_counter = count(1)


def _join(client: TestClient, role: str, email: str = None, password: str = TEST_PASSWORD) -> Account:
    email = email or f"{role}{next(_email_counter)}@example.com"
    response = client.post(f"/api/auth/{role}/join", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    data = response.json()
    tokens = data["token"]
    return Account(
        id=data[role]["id"],
        email=email,
        tokens=tokens,
        headers={"Authorization": f"Bearer {tokens['access']}"},
    )


@pytest.fixture
def make_member(client: TestClient) -> Callable[..., Account]:
    """Factory registering a new member and returning its auth headers"""
    return lambda email=None: _join(client, "member", email)


@pytest.fixture
def make_admin(client: TestClient) -> Callable[..., Account]:
    return lambda email=None: _join(client, "admin", email)


@pytest.fixture
def member(make_member) -> Account:
    return make_member()


@pytest.fixture
def other_member(make_member) -> Account:
    return make_member()


@pytest.fixture
def admin(make_admin) -> Account:
    return make_admin()


@pytest.fixture
def category(client: TestClient, admin: Account) -> Dict:
    response = client.post(
        "/api/categories",
        json={"code": "tech", "name": "Technology"},
        headers=admin.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def community(client: TestClient, member: Account, category: Dict) -> Dict:
    """A community owned by ``member``"""
    response = client.post(
        "/api/communities",
        json={"name": "python", "category_id": category["id"], "display_title": "Python"},
        headers=member.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def post(client: TestClient, member: Account, community: Dict) -> Dict:
    """A post by ``member`` in ``community``"""
    response = client.post(
        "/api/posts",
        json={"community_id": community["id"], "title": "Hello world", "body": "First post body"},
        headers=member.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()

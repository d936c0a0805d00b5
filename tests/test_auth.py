"""
Tests for signup, login and bearer-token authentication.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.models.user import User
from app.core.auth_dependency import get_db
from app.core.security import hash_password, verify_password, create_access_token


test_engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    Base.metadata.create_all(bind=test_engine)
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db(client):
    """Database session fixture."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def test_user(db: Session):
    """Create a test user for login tests."""
    test_email = "test_login@example.com"
    test_password = "testpass123"
    user = User(
        full_name="Test Login User",
        email=test_email,
        password_hash=hash_password(test_password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return {"email": test_email, "password": test_password, "user": user}


def test_signup_success(client, db: Session):
    """Signup stores the profile and a bcrypt hash."""
    response = client.post(
        "/auth/signup",
        json={
            "full_name": "Test User",
            "email": "test_signup@example.com",
            "password": "testpass123",
            "skills": ["Python"],
            "target_roles": ["Data Analyst"],
        },
    )

    assert response.status_code == 201
    assert response.json()["message"] == "User created successfully"
    user = db.get(User, response.json()["user_id"])
    assert user.skills == ["Python"]
    assert user.target_roles == ["Data Analyst"]
    assert user.projects == []
    assert user.password_hash != "testpass123"
    assert verify_password("testpass123", user.password_hash)


def test_signup_duplicate_email(client, test_user):
    response = client.post(
        "/auth/signup",
        json={"full_name": "Again", "email": test_user["email"], "password": "testpass123"},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


def test_signup_rejects_short_password(client):
    response = client.post(
        "/auth/signup",
        json={"full_name": "Short", "email": "short@example.com", "password": "abc"},
    )
    assert response.status_code == 422


def test_login_success(client, test_user):
    """Test successful login with correct credentials."""
    response = client.post(
        "/auth/login",
        data={
            "username": test_user["email"],  # OAuth2PasswordRequestForm uses 'username'
            "password": test_user["password"]
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert len(data["access_token"]) > 0


def test_login_wrong_password(client, test_user):
    response = client.post(
        "/auth/login",
        data={"username": test_user["email"], "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_login_unknown_user(client):
    response = client.post(
        "/auth/login",
        data={"username": "nobody@example.com", "password": "testpass123"},
    )
    assert response.status_code == 401


def test_token_grants_access(client, test_user):
    login = client.post(
        "/auth/login",
        data={"username": test_user["email"], "password": test_user["password"]},
    )
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    response = client.get("/api/ai/roadmaps", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "roadmaps": [], "count": 0}


def test_invalid_tokens_rejected(client, test_user):
    garbage = client.get("/api/ai/roadmaps", headers={"Authorization": "Bearer not-a-jwt"})
    unknown = client.get(
        "/api/ai/roadmaps",
        headers={"Authorization": f"Bearer {create_access_token({'sub': 'ghost@example.com'})}"},
    )

    assert garbage.status_code == 401
    assert unknown.status_code == 401
    assert garbage.headers["www-authenticate"] == "Bearer"

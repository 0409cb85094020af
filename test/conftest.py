import os
import pytest

# test environment, set before the app is imported
os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient

from app import app
from auth import create_access_token, get_password_hash
from database import SessionLocal
from helper import rate_limiter
from models import Base, UserDB


@pytest.fixture(autouse=True)
def setup_db():
    db = SessionLocal()
    Base.metadata.drop_all(bind=db.bind)
    Base.metadata.create_all(bind=db.bind)
    rate_limiter.reset()
    yield
    app.dependency_overrides.clear()
    db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def create_user(db):
    def _create_user(username="john", password="secret", verified=True, role="user"):
        user = UserDB(
            username=username,
            email=f"{username}@mail.com",
            hashed_password=get_password_hash(password),
            verified=verified,
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _create_user


@pytest.fixture
def admin_headers(create_user):
    user = create_user(username="admin", password="pw", role="admin")
    token = create_access_token({"sub": user.username})
    return {"Authorization": f"Bearer {token}"}

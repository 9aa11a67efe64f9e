import uuid
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pathfinder.main import app
from pathfinder.core.jwt import create_access_token
from pathfinder.core.security import hash_password
from pathfinder.db.base import Base
from pathfinder.db.models.user import User
from pathfinder.db.models.gamification import Badge, UserBadge
from pathfinder.db.seed import seed_catalog
from pathfinder.db.session import get_db
from pathfinder.services.gamification import init_badges

# Single shared in-memory database for app and test sessions
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    init_badges(session)
    seed_catalog(session)
    app.dependency_overrides[get_db] = override_get_db
    yield session
    session.close()
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


def create_test_user(db, **kwargs) -> User:
    user = User(
        email=kwargs.pop("email", f"student_{uuid.uuid4().hex[:8]}@example.com"),
        hashed_password=hash_password(kwargs.pop("password", "password123")),
        full_name=kwargs.pop("full_name", "Test Student"),
        **kwargs
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def has_badge(db, user_id, badge_slug) -> bool:
    return db.query(UserBadge).join(Badge).filter(
        UserBadge.user_id == user_id,
        Badge.slug == badge_slug,
    ).first() is not None


@pytest.fixture
def user(db):
    return create_test_user(db)


@pytest.fixture
def client(db):
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def auth_client(db, user):
    token = create_access_token({"sub": str(user.id)})
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test", cookies={"access_token": token})

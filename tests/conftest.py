"""Pytest configuration and fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("AI_PROVIDER", None)

from collections.abc import Generator  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from learnloop import models  # noqa: E402
from learnloop.config import get_settings  # noqa: E402
from learnloop.core import container  # noqa: E402
from learnloop.database import Base, create_database_engine, get_db  # noqa: E402
from learnloop.main import app  # noqa: E402

USER_HEADERS = {"X-User-Id": "u1", "X-User-Name": "Ada"}
OTHER_USER_HEADERS = {"X-User-Id": "u2", "X-User-Name": "Grace"}


@pytest.fixture
def test_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """File backed SQLite engine, so separate connections see the same data."""
    engine = create_database_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(test_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def use_cases(db_session: Session) -> Generator[Any, None, None]:
    """Container with its db dependency bound to the test session."""
    container.db.override(db_session)
    try:
        yield container
    finally:
        container.db.reset_override()


@pytest.fixture
def ai_enabled(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Turn AI features on for the duration of a test."""
    monkeypatch.setenv("AI_PROVIDER", "openai")
    monkeypatch.setenv("AI_MODEL_NAME", "gpt-test")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    get_settings.cache_clear()
    yield
    monkeypatch.undo()
    get_settings.cache_clear()


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    user = models.User(id="u1", display_name="Ada", xp=0, streak=0)
    db_session.add(user)
    db_session.commit()
    return user


def create_test_topic(
    db_session: Session, user_id: str = "u1", title: str = "Photosynthesis"
) -> models.Topic:
    topic = models.Topic(user_id=user_id, title=title, difficulty="beginner")
    db_session.add(topic)
    db_session.commit()
    db_session.refresh(topic)
    return topic


def create_test_post(db_session: Session, user_id: str = "u1", content: str = "Hello") -> models.Post:
    post = models.Post(user_id=user_id, content=content, like_count=0)
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture
def test_topic(db_session: Session, test_user: models.User) -> models.Topic:
    return create_test_topic(db_session, user_id=test_user.id)

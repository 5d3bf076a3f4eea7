"""
Pytest fixtures for testing
"""
import uuid
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.infrastructure.db.session import Base
from app.infrastructure.db import models  # noqa: F401  (registers tables)
from app.domain.subscription import Subscription


@pytest.fixture
def db_engine():
    """In-memory SQLite engine; StaticPool so TestClient threads see the same DB"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def user_id():
    """Owner of the sample subscriptions"""
    return uuid.UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")


@pytest.fixture
def make_subscription(user_id):
    """Factory for valid, not yet stored subscriptions"""
    def _make(**overrides) -> Subscription:
        fields = dict(
            service_name="Yandex Plus",
            price=400,
            user_id=user_id,
            start_date=date(2025, 7, 1),
            end_date=None,
        )
        fields.update(overrides)
        return Subscription(**fields)

    return _make

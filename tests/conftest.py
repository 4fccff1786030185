import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

from unittest.mock import AsyncMock, MagicMock

import email_validator

# Permit reserved ".test" domains used by the test fixtures.
email_validator.TEST_ENVIRONMENT = True

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobhub.core.security as security
import jobhub.models  # noqa: F401
from jobhub.database.database import Base, get_db
from jobhub.routers.deps import get_amqp_service, get_mail_service, get_s3_service
from main import app

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def s3_service():
    s3 = MagicMock()
    s3.get_file_url.side_effect = lambda key: f"https://files.example.com/{key}?signature=abc"
    s3.upload_file = AsyncMock(
        side_effect=lambda key, content, content_type: {
            "key": key,
            "size": len(content),
            "content_type": content_type,
        }
    )
    return s3


@pytest.fixture
def amqp_service():
    return MagicMock()


@pytest.fixture
def mail_service():
    mail = MagicMock()
    mail.send_mail.return_value = True
    return mail


@pytest.fixture
def client(db_session, s3_service, amqp_service, mail_service):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_s3_service] = lambda: s3_service
    app.dependency_overrides[get_amqp_service] = lambda: amqp_service
    app.dependency_overrides[get_mail_service] = lambda: mail_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

"""
Shared fixtures: an isolated in-memory database and injected settings.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from account_platform.account_platform.account_service.auth import PasswordHasher, TokenCodec
from account_platform.account_platform.account_service.config import Settings, get_settings
from account_platform.account_platform.account_service.db import create_db_engine, get_db, init_db
from account_platform.account_platform.account_service.main import app
from account_platform.account_platform.account_service.repository import AccountRepository
from account_platform.account_platform.account_service.service import AuthService

@pytest.fixture
def token_secret():
    return "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def settings(token_secret):
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite:///:memory:",
        JWT_SECRET=token_secret,
        JWT_EXPIRES_MINUTES=30,
        BCRYPT_ROUNDS=4,
        _env_file=None,
    )


@pytest.fixture
def engine(settings):
    test_engine = create_db_engine(settings.DATABASE_URL)
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def hasher(settings):
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@pytest.fixture
def codec(settings):
    return TokenCodec(secret=settings.JWT_SECRET, expires_minutes=settings.JWT_EXPIRES_MINUTES)


@pytest.fixture
def service(db_session, hasher, codec):
    return AuthService(AccountRepository(db_session), hasher, codec)


@pytest.fixture
def client(settings, session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

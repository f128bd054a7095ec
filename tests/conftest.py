import os

# Keep bcrypt fast under test; must be set before app.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.models import document  # noqa: F401
from app.db.session import get_db
from app.core.cache import RedisCache, get_cache
from app.core.document_store import DocumentStore, USERS


class InMemoryRedis:
    """Just enough of the redis client API for RedisCache"""

    def __init__(self):
        self.values = {}
        self.ttls = {}

    def ping(self):
        return True

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value
        return True

    def setex(self, key, seconds, value):
        self.values[key] = value
        self.ttls[key] = seconds
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.values.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def open_store(session_factory):
    """Return a callable giving a DocumentStore on a fresh session"""
    sessions = []

    def _open():
        db = session_factory()
        sessions.append(db)
        return DocumentStore(db)

    yield _open
    for db in sessions:
        db.close()


@pytest.fixture
def redis_client():
    return InMemoryRedis()


@pytest.fixture
def cache(redis_client):
    return RedisCache(client=redis_client)


@pytest.fixture
def client(session_factory, cache):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client, open_store):
    """
    Register (if needed) and log a user in.
    Returns a dict with user_id, token, session_id and ready-made headers.
    """

    def _login(email="a@x.com", password="p", username="a", admin=False):
        client.post("/users", json={"email": email, "password": password, "username": username})
        if admin:
            store = open_store()
            user = store.where(USERS, "email", email)[0]
            store.update(USERS, user.id, {"role": "admin"})

        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.json()
        data = response.json()["data"]
        return {
            "user_id": data["user"]["id"],
            "token": data["token"],
            "session_id": data["sessionId"],
            "auth": {"Authorization": f"Bearer {data['token']}"},
            "headers": {"Authorization": f"Bearer {data['token']}", "session": data["sessionId"]},
        }

    return _login

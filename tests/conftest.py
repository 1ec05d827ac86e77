import os

os.environ.setdefault("LIBRARY_DB", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.core.database import Base, get_db
from library_api.main import app
from library_api.models import models  # noqa: F401

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


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_book(client):
    counter = iter(range(1, 1000))

    def _make(**overrides):
        n = next(counter)
        book = {
            "title": f"Book {n}",
            "author": "Author",
            "genre": "FICTION",
            "isbn": f"isbn-{n}",
            "copies": 3,
        }
        book.update(overrides)
        r = client.post("/api/books", json=book)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make

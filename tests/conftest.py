import os

os.environ["DATABASE_URL"] = "sqlite://"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.dialects import sqlite
from sqlalchemy.orm import sessionmaker

from app.api.comments.models import Comment  # noqa: F401
from app.api.ratings.models import Rating  # noqa: F401
from app.api.ratings.router import get_rating_service
from app.api.ratings.service import RatingService
from app.core.http import get_http_client
from app.database.database import Base, build_engine, get_db
from app.main import app

engine = build_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Upstream:
    """Answers outbound httpx requests with whatever handler the test installs"""

    def __init__(self):
        self.handler = None
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is None:
            raise AssertionError(f"unexpected upstream call to {request.url}")
        return self.handler(request)


# ---------- Fixtures ----------
@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def client(db_session, upstream):
    def override_get_db():
        yield db_session

    async def override_get_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as http_client:
            yield http_client

    def override_get_rating_service():
        return RatingService(db_session, insert=sqlite.insert)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rating_service] = override_get_rating_service
    app.dependency_overrides[get_http_client] = override_get_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

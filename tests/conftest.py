"""Shared fixtures: in-memory SQLite with foreign keys, and a test client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

import app.db.base  # noqa: F401
from app.core.exceptions import ContentGenerationUnavailable
from app.db.session import build_engine, get_db
from app.main import app
from app.services.content_generator import get_content_generator


class FakeContentGenerator:
    """Returns canned text, or fails like an unconfigured generator."""

    def __init__(self, text=None):
        self.text = text
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.text is None:
            raise ContentGenerationUnavailable("generator offline")
        return self.text


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_generator():
    return FakeContentGenerator


@pytest.fixture
def generator():
    return FakeContentGenerator()


@pytest.fixture
def client(engine, generator):
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_content_generator] = lambda: generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

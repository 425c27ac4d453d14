"""
Shared fixtures for the API tests.

The app reads its configuration at import time, so the environment is
pointed at a throwaway SQLite file and upload directory before anything
from interview_capture is imported.
"""
import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="interview_capture_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_DIR, "uploads")
os.environ["LOG_DIR"] = os.path.join(_TEST_DIR, "logs")
os.environ["OPENAI_API_KEY"] = ""
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient

from interview_capture.main import app
from interview_capture.db.base import Base
from interview_capture.db import session as db_session
from interview_capture.llm.provider import EmbeddingProvider, EmbeddingResult
from interview_capture.services import embedding_service
import interview_capture.db.models  # noqa: F401


class FakeEmbeddingProvider(EmbeddingProvider):
    """Deterministic vectors, no network."""

    def __init__(self):
        self.calls = []

    def embed(self, text: str, model: str) -> EmbeddingResult:
        self.calls.append(text)
        return EmbeddingResult(vector=[float(len(text)), 1.0, 0.0], model=model)


class FailingEmbeddingProvider(EmbeddingProvider):
    def embed(self, text: str, model: str) -> EmbeddingResult:
        raise RuntimeError("embedding service unavailable")


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=db_session.engine)
    yield
    Base.metadata.drop_all(bind=db_session.engine)


@pytest.fixture
def db():
    """Database session fixture."""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fake_embeddings(monkeypatch):
    provider = FakeEmbeddingProvider()
    monkeypatch.setattr(embedding_service, "get_embedding_provider", lambda: provider)
    return provider


@pytest.fixture
def failing_embeddings(monkeypatch):
    provider = FailingEmbeddingProvider()
    monkeypatch.setattr(embedding_service, "get_embedding_provider", lambda: provider)
    return provider


def register(client, email, password="testpass123", role=None, company_name=None):
    """Register a user and return (auth headers, user dict)."""
    payload = {"email": email, "password": password}
    if role:
        payload["role"] = role
    if company_name:
        payload["company_name"] = company_name
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text
    data = response.json()
    return {"Authorization": f"Bearer {data['token']}"}, data["user"]


@pytest.fixture
def admin_headers(client):
    headers, _ = register(client, "admin@acme.com", role="ADMIN", company_name="Acme")
    return headers


@pytest.fixture
def employee_headers(client):
    headers, _ = register(client, "employee@acme.com", role="EMPLOYEE", company_name="Acme")
    return headers


@pytest.fixture
def other_company_headers(client):
    headers, _ = register(client, "someone@globex.com", role="ADMIN", company_name="Globex")
    return headers


@pytest.fixture
def role(client, admin_headers):
    response = client.post("/roles", json={"title": "Accountant", "description": "Finance"}, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def process(client, admin_headers):
    response = client.post(
        "/processes",
        json={
            "title": "Month-end close",
            "description": "How the books get closed",
            "questions": [
                {"id": "q2", "text": "Who signs off?", "order": 2},
                {"id": "q1", "text": "Which systems do you open first?", "required": True, "order": 1},
            ],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def session(client, admin_headers, role, process):
    response = client.post(
        "/interview-sessions",
        json={"role_id": role["id"], "process_id": process["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()

import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobboard.database import get_db
from jobboard.main import app
from jobboard.config import settings
from jobboard.services.auth_service import auth_service
from jobboard.services.notification_service import NotificationDispatcher, get_dispatcher

TECHCORP_ID = "c0000000-0000-4000-8000-000000000001"
HEALTHFIRST_ID = "c0000000-0000-4000-8000-000000000003"
TECHNOLOGY_DOMAIN_ID = "d0000000-0000-4000-8000-000000000001"
PASSWORD = "secret-password"


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class FakeEmailProvider:
    """Stands in for the email HTTP API via httpx.MockTransport."""

    def __init__(self):
        self.sent: list[dict] = []
        self.fail_with: int | str | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with == "timeout":
            raise httpx.ReadTimeout("timed out", request=request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "provider error"})
        self.sent.append(json.loads(request.content))
        return httpx.Response(200, json={"id": f"email-{len(self.sent)}"})

    def dispatcher(self) -> NotificationDispatcher:
        return NotificationDispatcher(api_key="test-key", transport=httpx.MockTransport(self.handler))


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "JobBoardData"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "jobboard.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    from jobboard.database import init_db
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()


@pytest.fixture
def fresh_auth_service():
    """Reset in-memory sessions for each test."""
    original = auth_service.__dict__.copy()
    auth_service._active_tokens = {}
    yield auth_service
    auth_service.__dict__.update(original)


@pytest.fixture
def email_provider():
    provider = FakeEmailProvider()
    app.dependency_overrides[get_dispatcher] = provider.dispatcher
    return provider


@pytest.fixture
def client(tmp_data, test_db, fresh_auth_service, email_provider):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    c = TestClient(app)
    yield c
    settings.data_path = original_data_path


@pytest.fixture
def make_user(client):
    """Sign up and sign in a user; returns its id and auth headers."""
    counter = {"n": 0}

    def _make(role: str | None = "job_seeker", email: str | None = None, full_name: str | None = "Test User"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@acme.io"
        body = {"email": email, "password": PASSWORD, "full_name": full_name}
        if role:
            body["role"] = role
        r = client.post("/api/v1/auth/signup", json=body)
        assert r.status_code == 201, r.text
        r = client.post("/api/v1/auth/signin", json={"email": email, "password": PASSWORD})
        token = r.json()["token"]
        return {"id": r.json()["user_id"], "email": email, "headers": {"Authorization": f"Bearer {token}"}}

    return _make


@pytest.fixture
def make_job(client):
    def _make(employer, **overrides):
        body = {"title": "Backend Engineer", "company_id": TECHCORP_ID, "minimum_experience": 2}
        body.update(overrides)
        r = client.post("/api/v1/jobs", json=body, headers=employer["headers"])
        assert r.status_code == 201, r.text
        return r.json()["id"]

    return _make


@pytest.fixture
def apply(client):
    def _apply(seeker, job_id, **overrides):
        body = {
            "applicant_name": "Ada Lovelace",
            "age": 30,
            "experience_years": 5,
            "resume_url": f"resumes/{seeker['id']}/cv.pdf",
        }
        body.update(overrides)
        return client.post(f"/api/v1/jobs/{job_id}/applications", json=body, headers=seeker["headers"])

    return _apply

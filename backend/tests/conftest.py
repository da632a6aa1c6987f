import os
import tempfile

# Settings are read once at import time, so the environment has to be in
# place before anything from careertrack is imported.
os.environ["JWT_SECRET"] = "test-secret-key-for-careertrack"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="careertrack-uploads-")
os.environ.pop("SMTP_HOST", None)

import pytest
from fastapi.testclient import TestClient

from careertrack.main import app

PDF = "application/pdf"


@pytest.fixture
def outbox(monkeypatch):
    """Capture OTP deliveries instead of logging them: email -> latest code."""
    sent = {}

    def fake_send(email, code):
        sent[email] = code
        return True

    monkeypatch.setattr("careertrack.api.auth.send_otp", fake_send)
    return sent


@pytest.fixture
def client(outbox):
    # The lifespan disposes the engine, which drops the in-memory database,
    # so every test starts from empty tables.
    with TestClient(app) as c:
        yield c


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client, outbox):
    """Register and verify an account, returning its session token."""

    def _register(email="ada@example.com", name="Ada", password="secret123"):
        resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 200, resp.text
        resp = client.post("/api/auth/verify-otp", json={"email": email, "otp": outbox[email]})
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]["token"]

    return _register


@pytest.fixture
def upload(client):
    def _upload(token, filename="resume.pdf", content=b"%PDF-1.4 sample", mime=PDF):
        return client.post(
            "/api/resumes/upload",
            files={"resume": (filename, content, mime)},
            headers=auth_header(token),
        )

    return _upload

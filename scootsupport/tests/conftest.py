import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["ADMIN_PHONE_NUMBERS"] = "+919890236593"
os.environ["OTP_DEMO_MODE"] = "false"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from scootsupport.core.database import Base, engine, SessionLocal
from scootsupport.main import app
from scootsupport.services.openai_service import openai_service
from scootsupport.services.sms_service import sms_service

ADMIN_PHONE = "+919890236593"
API = "/api/v1"

class FakeCompletions:
    def __init__(self):
        self.calls = []
        self.reply = "Try holding the power button for 10 seconds."
        self.error = None

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

class FakeSMS:
    def __init__(self):
        self.sent = []
        self.error = None

    async def send_sms(self, to, body):
        if self.error:
            raise self.error
        self.sent.append((to, body))
        return f"SM{len(self.sent):04d}"

@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield

@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def llm(monkeypatch):
    completions = FakeCompletions()
    fake_client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(openai_service, "client", fake_client)
    return completions

@pytest.fixture
def sms(monkeypatch):
    fake = FakeSMS()
    monkeypatch.setattr(sms_service, "send_sms", fake.send_sms)
    return fake

@pytest.fixture
def client(llm, sms):
    return TestClient(app)

def login(client, phone, is_admin_request=False):
    """Full phone login: request code, verify it, sign in. Returns auth headers and user info."""
    r = client.post(f"{API}/auth/otp/request", json={"phoneNumber": phone, "isAdminRequest": is_admin_request})
    assert r.status_code == 200, r.text
    code = r.json()["otp"]

    r = client.post(f"{API}/auth/otp/verify", json={"phoneNumber": phone, "otp": code, "isAdminRequest": is_admin_request})
    assert r.status_code == 200, r.text
    verified = r.json()

    r = client.post(f"{API}/auth/sign-in", json={"email": verified["user"]["email"], "password": "TempPass123!"})
    assert r.status_code == 200, r.text
    token = r.json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}, verified["user"]

@pytest.fixture
def user_session(client):
    return login(client, "+15551234567")

@pytest.fixture
def user_headers(user_session):
    return user_session[0]

@pytest.fixture
def admin_headers(client):
    headers, _ = login(client, ADMIN_PHONE, is_admin_request=True)
    return headers

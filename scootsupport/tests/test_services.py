import asyncio

import aiohttp
import pytest
from fastapi.testclient import TestClient

from conftest import API
from scootsupport.core.config import settings
from scootsupport.core.exceptions import UpstreamException
from scootsupport.main import app
from scootsupport.models.user import OtpCode
from scootsupport.services import sms_service as sms_module
from scootsupport.services.openai_service import openai_service
from scootsupport.services.sms_service import SMSService

def test_system_prompt_without_file_context():
    assert openai_service.build_system_prompt() == openai_service.system_prompt

def test_build_messages_trims_history_to_window():
    context = [{"role": "user", "content": str(i)} for i in range(10)]
    messages = openai_service.build_messages("new", context)
    assert len(messages) == settings.chat_prompt_window + 2
    assert messages[1]["content"] == "4"
    assert messages[-1] == {"role": "user", "content": "new"}

def test_sms_without_credentials(monkeypatch):
    monkeypatch.setattr(settings, "twilio_account_sid", None)
    with pytest.raises(UpstreamException):
        asyncio.run(SMSService().send_sms("+15551234567", "hi"))

class FakeTwilioResponse:
    def __init__(self, status, body):
        self.status = status
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    async def text(self):
        return str(self.body)

    async def json(self):
        return self.body

class FakeTwilioSession:
    response = None
    error = None

    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    def post(self, url, **kwargs):
        if self.error:
            raise self.error
        return self.response

@pytest.fixture
def twilio(monkeypatch):
    monkeypatch.setattr(settings, "twilio_account_sid", "AC123")
    monkeypatch.setattr(settings, "twilio_auth_token", "secret")
    monkeypatch.setattr(FakeTwilioSession, "response", FakeTwilioResponse(201, {"sid": "SM42"}))
    monkeypatch.setattr(FakeTwilioSession, "error", None)
    monkeypatch.setattr(sms_module.aiohttp, "ClientSession", FakeTwilioSession)
    return FakeTwilioSession

def test_sms_returns_sid(twilio):
    assert asyncio.run(SMSService().send_sms("+15551234567", "hi")) == "SM42"

def test_sms_provider_error(twilio):
    twilio.response = FakeTwilioResponse(400, {"message": "Invalid 'To' Phone Number"})
    with pytest.raises(UpstreamException) as exc:
        asyncio.run(SMSService().send_sms("+15551234567", "hi"))
    assert "Invalid 'To' Phone Number" in exc.value.details

def test_sms_connection_error(twilio):
    twilio.error = aiohttp.ClientConnectionError("connection refused")
    with pytest.raises(UpstreamException):
        asyncio.run(SMSService().send_sms("+15551234567", "hi"))

def test_sms_failure_surfaces_as_bad_gateway(twilio, db):
    twilio.response = FakeTwilioResponse(500, {"message": "Internal error"})
    client = TestClient(app)
    r = client.post(f"{API}/auth/otp/request", json={"phoneNumber": "+15551234567"})
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "UPSTREAM_ERROR"
    assert db.query(OtpCode).count() == 0

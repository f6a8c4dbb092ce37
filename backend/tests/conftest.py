from __future__ import annotations
import os

# Settings read the environment at import; keep tests off the real provider
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from app.config import Settings
from app.errors import DeliveryError
from app.main import create_app
from app.schemas.email import OutboundMessage


class RecordingTransport:
    """Records messages instead of sending them."""

    name = "SendGrid"

    def __init__(self, fail_with: Exception | None = None):
        self.sent: list[OutboundMessage] = []
        self.fail_with = fail_with
        self.closed = False

    async def send(self, message: OutboundMessage) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(message)

    async def verify(self) -> bool:
        return self.fail_with is None

    async def aclose(self) -> None:
        self.closed = True


def make_settings(**overrides) -> Settings:
    base = dict(environment="development", sendgrid_api_key="", admin_email="admin@example.org",
                mail_from="noreply@example.org")
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def valid_payload() -> dict:
    return {
        "teamName": "Byte Busters",
        "teamEmail": "team@example.org",
        "projectTitle": "FarmLink",
        "projectBackground": "Smallholder farmers lack market access.",
        "problemStatement": "Prices are set by middlemen.",
        "unsdgGoals": ["SDG 2: Zero Hunger"],
        "teamMembers": ["Alice", "Bob"],
        "youtubeLink": "https://youtu.be/dQw4w9WgXcQ",
        "githubRepo": "https://github.com/byte-busters/farmlink",
    }


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport) -> TestClient:
    return TestClient(create_app(make_settings(), transport=transport))


@pytest.fixture
def unconfigured_client() -> TestClient:
    return TestClient(create_app(make_settings()))


@pytest.fixture
def failing_client_factory():
    def _make(exc: Exception = DeliveryError("boom"), **overrides) -> TestClient:
        return TestClient(create_app(make_settings(**overrides), transport=RecordingTransport(fail_with=exc)))
    return _make

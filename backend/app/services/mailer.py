from __future__ import annotations
from typing import Protocol
import httpx
import structlog
from app.errors import DeliveryAuthError, DeliveryConnectionError, DeliveryError
from app.schemas.email import OutboundMessage

log = structlog.get_logger()


class EmailTransport(Protocol):
    name: str

    async def send(self, message: OutboundMessage) -> None: ...

    async def verify(self) -> bool: ...

    async def aclose(self) -> None: ...


def sendgrid_payload(message: OutboundMessage) -> dict:
    personalization: dict = {"to": [{"email": message.to}]}
    if message.cc:
        personalization["cc"] = [{"email": message.cc}]
    payload: dict = {
        "personalizations": [personalization],
        "from": {"email": message.from_address},
        "subject": message.subject,
        "content": [
            {"type": "text/plain", "value": message.text},
            {"type": "text/html", "value": message.html},
        ],
    }
    if message.reply_to:
        payload["reply_to"] = {"email": message.reply_to}
    return payload


class SendGridTransport:
    """SendGrid v3 Web API over a single shared httpx client."""

    name = "SendGrid"

    def __init__(self, api_key: str, base_url: str = "https://api.sendgrid.com",
                 client: httpx.AsyncClient | None = None):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=20.0)
        self._headers = {"Authorization": f"Bearer {api_key}"}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, headers=self._headers, **kwargs)
        except (httpx.NetworkError, httpx.TimeoutException) as e:
            raise DeliveryConnectionError(f"SendGrid unreachable: {e}") from e
        except httpx.HTTPError as e:
            raise DeliveryError(f"SendGrid request failed: {e}") from e

        if resp.status_code in (401, 403):
            raise DeliveryAuthError(f"Unauthorized ({resp.status_code}): {resp.text}")
        if resp.status_code >= 400:
            raise DeliveryError(f"SendGrid rejected request ({resp.status_code}): {resp.text}")
        return resp

    async def send(self, message: OutboundMessage) -> None:
        await self._request("POST", "/v3/mail/send", json=sendgrid_payload(message))
        log.info("email_sent", to=message.to, subject=message.subject)

    async def verify(self) -> bool:
        """Check the API key against the provider. Only logs; never raises."""
        try:
            await self._request("GET", "/v3/scopes")
        except DeliveryError as e:
            log.error("sendgrid_verify_failed", error=str(e))
            return False
        log.info("sendgrid_verified")
        return True

    async def aclose(self) -> None:
        await self._client.aclose()

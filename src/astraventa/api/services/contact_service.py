"""Contact-form relay to the Resend email API.

Sends from the configured sender first and retries exactly once from the
Resend onboarding sender, which works even before a custom domain has been
verified.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from astraventa.api.models.endpoint_requests import ContactRequest
from astraventa.api.models.endpoint_responses import RelayResponse

if TYPE_CHECKING:
    from astraventa.core.config import Config

logger = logging.getLogger(__name__)

RESEND_ENDPOINT = "https://api.resend.com/emails"
FALLBACK_SENDER = "onboarding@resend.dev"
EMAIL_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class SendAttempt:
    """Outcome of one send call; ``data`` is the decoded Resend body or an error dict."""

    sender: str
    ok: bool
    data: Any
    status_code: int | None = None

    @property
    def message_id(self) -> str | None:
        if isinstance(self.data, dict):
            return self.data.get("id")
        return None


def render_email(submission: ContactRequest) -> dict[str, str]:
    """Build subject, HTML and plain-text bodies; user input is HTML-escaped."""
    name = html.escape(submission.name)
    email = html.escape(submission.email)
    message = html.escape(submission.message)
    return {
        "subject": f"New contact message from {submission.name}",
        "html": (
            "<h2>Astraventa AI - New Contact Submission</h2>"
            f"<p><strong>Name:</strong> {name}</p>"
            f"<p><strong>Email:</strong> {email}</p>"
            "<p><strong>Message:</strong></p>"
            f'<p style="white-space:pre-wrap">{message}</p>'
        ),
        "text": f"Name: {submission.name}\nEmail: {submission.email}\n\n{submission.message}",
    }


class ContactEmailService:
    def __init__(
        self,
        api_key: str | None,
        sender: str,
        recipient: str,
        fallback_sender: str = FALLBACK_SENDER,
        timeout: float = EMAIL_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.sender = sender
        self.recipient = recipient
        self.fallback_sender = fallback_sender
        self.timeout = timeout
        self._http_client = http_client
        if not api_key:
            logger.warning("RESEND_API_KEY is not set. Emails will not be sent.")

    @classmethod
    def from_config(cls, config: "Config") -> "ContactEmailService":
        return cls(
            api_key=config.resend_api_key,
            sender=config.resend_from,
            recipient=config.resend_to,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def relay(self, submission: ContactRequest) -> RelayResponse:
        if not self.is_configured:
            return RelayResponse(
                status=200, content={"ok": False, "error": "Email is disabled (missing API key)"}
            )

        email = render_email(submission)

        first = await self._send(self.sender, email)
        if first.ok:
            return self._delivered(first)

        logger.warning(
            f"📧 Send from {first.sender} failed (HTTP {first.status_code}), "
            f"retrying from {self.fallback_sender}"
        )
        fallback = await self._send(self.fallback_sender, email)
        if fallback.ok:
            return self._delivered(fallback)

        logger.error(
            f"📧 Contact email not delivered: {first.sender} -> {first.status_code}, "
            f"{fallback.sender} -> {fallback.status_code}"
        )
        return RelayResponse(
            status=500,
            content={"ok": False, "error": {"first": first.data, "fallback": fallback.data}},
        )

    @staticmethod
    def _delivered(attempt: SendAttempt) -> RelayResponse:
        logger.info(f"📧 Contact email sent from {attempt.sender} (id {attempt.message_id})")
        return RelayResponse(
            status=200,
            content={"ok": True, "id": attempt.message_id, "from": attempt.sender},
        )

    async def _send(self, sender: str, email: dict[str, str]) -> SendAttempt:
        payload = {"from": sender, "to": self.recipient, **email}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    RESEND_ENDPOINT, json=payload, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(RESEND_ENDPOINT, json=payload, headers=headers)
        except httpx.HTTPError as e:
            return SendAttempt(sender=sender, ok=False, data={"message": str(e) or repr(e)})

        try:
            data = response.json()
        except ValueError:
            data = {"message": response.text[:300]}

        return SendAttempt(
            sender=sender, ok=response.is_success, data=data, status_code=response.status_code
        )

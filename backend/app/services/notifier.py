from __future__ import annotations
import asyncio
import structlog
from app.config import Settings
from app.errors import DeliveryConnectionError
from app.schemas.email import OutboundMessage
from app.schemas.submission import Submission
from app.services.mailer import EmailTransport, SendGridTransport

log = structlog.get_logger()


def build_messages(submission: Submission, cfg: Settings) -> tuple[OutboundMessage, OutboundMessage]:
    """Admin notice and participant confirmation for one submission."""
    req = submission.request
    admin = OutboundMessage.plain(
        from_address=cfg.mail_from,
        to=cfg.admin_email,
        reply_to=req.team_email,
        subject=f"🚀 MVP Submission - {req.team_name} - {req.project_title}",
        text=submission.admin_body,
    )
    participant = OutboundMessage.plain(
        from_address=cfg.mail_from,
        to=req.team_email,
        cc=cfg.admin_email,
        subject=f"✅ MVP Submission Confirmed - {req.project_title}",
        text=submission.participant_body,
    )
    return admin, participant


class Notifier:
    def __init__(self, transport: EmailTransport, cfg: Settings):
        self.transport = transport
        self.cfg = cfg

    async def notify(self, submission: Submission) -> None:
        """
        Send both messages concurrently. Raises the first delivery failure;
        the other send is not rolled back and nothing is retried.
        """
        messages = build_messages(submission, self.cfg)
        log.info("sending_emails", submission_id=submission.submission_id, count=len(messages))
        try:
            await asyncio.wait_for(
                asyncio.gather(*(self.transport.send(m) for m in messages)),
                timeout=self.cfg.notify_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise DeliveryConnectionError(
                f"email delivery timed out after {self.cfg.notify_timeout_seconds}s"
            ) from e


def build_notifier(cfg: Settings, transport: EmailTransport | None = None) -> Notifier | None:
    """Notifier for this process, or None when no email credential is configured."""
    if transport is None:
        if not cfg.email_configured:
            log.error("email_not_configured", hint="SENDGRID_API_KEY environment variable not found")
            return None
        transport = SendGridTransport(cfg.sendgrid_api_key, base_url=cfg.sendgrid_api_url)
    log.info("email_transport_ready", service=transport.name)
    return Notifier(transport, cfg)

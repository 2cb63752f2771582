"""Mail transports and the message type they deliver."""

import asyncio
import smtplib
from email.message import EmailMessage

import logfire

from rollcall.adapter.error import MailDeliveryError
from rollcall.config import MailSettings
from rollcall.domain.service.mailer import Message


class MailTransport:
    """Hands a composed email to something that can send it."""

    def send(self, to: str, subject: str, body: str) -> None:
        """Send one plain-text email.

        Raises:
            MailDeliveryError: If the message could not be handed over
        """
        raise NotImplementedError


class SmtpTransport(MailTransport):
    """Sends mail through an SMTP server, one connection per message."""

    def __init__(self, settings: MailSettings) -> None:
        """Initialize SMTP transport.

        Args:
            settings: Mail configuration (host, port, credentials, sender)
        """
        self.settings = settings

    def send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.settings.from_address
        message["To"] = to
        message.set_content(body)

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_username:
                    server.login(
                        self.settings.smtp_username, self.settings.smtp_password or ""
                    )
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"SMTP delivery to {to} failed: {e}") from e


class OutboxTransport(MailTransport):
    """Keeps sent mail in memory for testing.

    Set ``fail`` to make every send raise as if the server refused it.
    """

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise MailDeliveryError(f"Outbox refused message to {to}")
        self.sent.append({"to": to, "subject": subject, "body": body})


class MailMessage(Message):
    """A plain-text email bound to the transport that will send it."""

    def __init__(self, transport: MailTransport, to: str, subject: str, body: str):
        self.transport = transport
        self.to = to
        self.subject = subject
        self.body = body

    async def deliver(self) -> bool:
        """Send the email without blocking the event loop.

        Returns:
            True if the transport accepted the message, False otherwise
        """
        with logfire.span("mail.deliver", to=self.to, subject=self.subject):
            try:
                await asyncio.to_thread(
                    self.transport.send, self.to, self.subject, self.body
                )
            except MailDeliveryError as e:
                logfire.error("Mail delivery failed", to=self.to, error=str(e))
                return False

            logfire.info("Mail delivered", to=self.to, subject=self.subject)
            return True

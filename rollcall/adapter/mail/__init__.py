"""Mail adapter."""

from .mailer import InvitationMailer, load_mailer
from .transport import MailMessage, MailTransport, OutboxTransport, SmtpTransport

__all__ = [
    "InvitationMailer",
    "MailMessage",
    "MailTransport",
    "OutboxTransport",
    "SmtpTransport",
    "load_mailer",
]

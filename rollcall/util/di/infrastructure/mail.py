"""Mail infrastructure providers."""

from dishka import Scope, provide

from rollcall.adapter.mail import MailTransport, SmtpTransport, load_mailer
from rollcall.config import MailSettings
from rollcall.domain.service import MailerRegistry, build_mailer_registry
from rollcall.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider sending through SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mail_transport(self, settings: MailSettings) -> MailTransport:
        """Provide SMTP transport."""
        return SmtpTransport(settings)

    @provide(scope=Scope.APP)
    def get_mailer_registry(
        self, transport: MailTransport, settings: MailSettings
    ) -> MailerRegistry:
        """Provide the registry of invitation and reminder messages.

        Empty when no mailer is configured.
        """
        return build_mailer_registry(load_mailer(settings.mailer, transport, settings))

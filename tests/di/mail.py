"""Mock mail providers for testing."""

from dishka import Scope, provide

from rollcall.adapter.mail import InvitationMailer, MailTransport, OutboxTransport
from rollcall.config import MailSettings
from rollcall.domain.service import MailerRegistry, build_mailer_registry
from rollcall.util.di.infrastructure.mail import MailProvider


class MockMailProvider(MailProvider):
    """Mock mail provider keeping sent mail in an outbox.

    The invitation mailer is always registered, whatever the settings say.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_outbox(self) -> OutboxTransport:
        """Provide in-memory outbox, for inspecting sent mail in tests."""
        return OutboxTransport()

    @provide(scope=Scope.APP)
    def get_mail_transport(self, outbox: OutboxTransport) -> MailTransport:
        """Provide the outbox as the mail transport."""
        return outbox

    @provide(scope=Scope.APP)
    def get_mailer_registry(
        self, transport: MailTransport, settings: MailSettings
    ) -> MailerRegistry:
        """Provide registry built from the invitation mailer."""
        return build_mailer_registry(InvitationMailer(transport, settings))

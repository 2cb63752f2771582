"""Session infrastructure providers."""

from dishka import Scope, provide

from rollcall.adapter.session import JWTSessionManager
from rollcall.config import SessionSettings
from rollcall.domain.service import SessionManager
from rollcall.util.di.base import ProviderBase


class ProdSessionProvider(ProviderBase):
    """Session provider - concrete, signs sessions with the configured secret."""

    @provide(scope=Scope.APP)
    def get_session_manager(self, settings: SessionSettings) -> SessionManager:
        """Provide JWT session manager."""
        return JWTSessionManager(settings)

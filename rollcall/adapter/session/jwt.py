"""JWT-backed sign-in sessions."""

import logfire

from rollcall.config import SessionSettings
from rollcall.domain.model.identity import Identity
from rollcall.domain.service.session import SessionManager, SessionToken
from rollcall.util.jwt import create_token


class JWTSessionManager(SessionManager):
    """Issues signed session tokens for directory users."""

    def __init__(self, settings: SessionSettings) -> None:
        """Initialize session manager.

        Args:
            settings: Session configuration (secret, lifetime, landing path)
        """
        self.settings = settings

    async def sign_in_and_remember(self, identity: Identity) -> SessionToken:
        token, expires_at = create_token(
            uid=identity.uid,
            email=identity.email or "",
            settings=self.settings,
            remember=True,
        )
        logfire.info("User signed in", uid=identity.uid, remember=True)
        return SessionToken(
            uid=identity.uid, token=token, remember=True, expires_at=expires_at
        )

    async def default_post_sign_in_path(self, identity: Identity) -> str:
        _ = identity  # Everyone lands in the same place
        return self.settings.after_sign_in_path

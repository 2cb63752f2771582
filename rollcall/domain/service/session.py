"""Session manager port."""

from datetime import datetime

from rollcall.domain.model.identity import Identity
from rollcall.domain.value.common import ValueObject


class SessionToken(ValueObject):
    """A signed-in session handed back to the caller."""

    uid: str
    token: str
    remember: bool
    expires_at: datetime


class SessionManager:
    """Signs directory users in and decides where they go next."""

    async def sign_in_and_remember(self, identity: Identity) -> SessionToken:
        """Start a remembered session for this user.

        Args:
            identity: The directory user signing in

        Returns:
            The new session
        """
        raise NotImplementedError

    async def default_post_sign_in_path(self, identity: Identity) -> str:
        """Where this user should land after signing in.

        Args:
            identity: The directory user

        Returns:
            Path or URL
        """
        raise NotImplementedError

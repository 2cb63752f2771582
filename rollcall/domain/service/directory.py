"""Directory client port.

The directory service owns user accounts. Everything this package knows about
a user comes through this interface.
"""

from typing import Any

from rollcall.domain.model.identity import Identity
from rollcall.domain.value import UserUid


class DirectoryClient:
    """Generic client interface for the remote user directory.

    Lookups return None when the directory reports that nothing matches.
    ``create`` and ``update`` raise ``IdentityRejectedError`` when the
    directory refuses the attributes. Transport and decoding failures raise
    the adapter's own errors.
    """

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a directory path and return the decoded JSON body."""
        raise NotImplementedError

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        """POST a JSON body to a directory path and return the decoded reply."""
        raise NotImplementedError

    async def find_by_uid(self, uid: UserUid) -> Identity | None:
        """Fetch a user by uid.

        Args:
            uid: Directory user uid

        Returns:
            The user, or None if the directory has no such user
        """
        raise NotImplementedError

    async def find_by_email(self, email: str) -> Identity | None:
        """Fetch the first user with this email address.

        Args:
            email: Email address

        Returns:
            The first matching user, or None
        """
        raise NotImplementedError

    async def create(self, attributes: dict[str, Any]) -> Identity:
        """Create a user.

        Args:
            attributes: User attributes; email is the one required field

        Returns:
            The created user with its server-assigned uid
        """
        raise NotImplementedError

    async def update(self, uid: UserUid, attributes: dict[str, Any]) -> Identity:
        """Update a user.

        Args:
            uid: Directory user uid
            attributes: Attributes to change

        Returns:
            The updated user
        """
        raise NotImplementedError

    async def authenticate_by_token(self, token: str) -> Identity | None:
        """Exchange a one-time token for the user it was issued to.

        Args:
            token: Authentication or confirmation token

        Returns:
            The user, or None if the token is not recognised
        """
        raise NotImplementedError

    async def deauthenticate(self, token: str) -> None:
        """Invalidate an authentication token."""
        raise NotImplementedError

"""Identity domain service."""

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import logfire
from pydantic import Field

from rollcall.domain.error import IdentityRejectedError
from rollcall.domain.model.identity import Identity
from rollcall.domain.service.directory import DirectoryClient
from rollcall.domain.value import ConfirmationToken, UserUid
from rollcall.domain.value.common import ValueObject

from .base import Service

IdentityHook = Callable[[Identity], Awaitable[None]]


class SaveResult(ValueObject):
    """Outcome of creating or updating a directory user.

    A rejected save carries the directory's field errors instead of a user.
    """

    identity: Identity | None = None
    errors: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def saved(self) -> bool:
        return self.identity is not None and not self.errors


class IdentitySaveHooks:
    """Callbacks run after a directory user has been saved.

    Hooks are best effort: a failing hook is logged and never fails the save.
    """

    def __init__(self, hooks: Iterable[IdentityHook] = ()) -> None:
        self._hooks: list[IdentityHook] = list(hooks)

    def subscribe(self, hook: IdentityHook) -> None:
        """Run ``hook`` after every successful save."""
        self._hooks.append(hook)

    async def run(self, identity: Identity) -> None:
        """Run every hook for a saved user."""
        for hook in self._hooks:
            try:
                await hook(identity)
            except Exception as e:
                logfire.warn(
                    "Identity save hook failed",
                    hook=getattr(hook, "__qualname__", repr(hook)),
                    uid=identity.uid,
                    error=str(e),
                )

    def __len__(self) -> int:
        return len(self._hooks)


def _loggable(attributes: dict[str, Any]) -> list[str]:
    """Attribute names that are safe to log."""
    return sorted(name for name in attributes if "password" not in name)


class IdentityService(Service):
    """Domain service for directory user operations."""

    def __init__(
        self, directory_client: DirectoryClient, save_hooks: IdentitySaveHooks
    ) -> None:
        """Initialize identity service.

        Args:
            directory_client: Client for the remote user directory
            save_hooks: Callbacks run after each successful save
        """
        self.directory_client = directory_client
        self.save_hooks = save_hooks

    async def find_by_uid(self, uid: UserUid) -> Identity | None:
        """Get a directory user by uid.

        Args:
            uid: Directory user uid

        Returns:
            User if found, None otherwise
        """
        with logfire.span("identity_service.find_by_uid", uid=uid):
            return await self.directory_client.find_by_uid(uid)

    async def find_by_email(self, email: str) -> Identity | None:
        """Get the first directory user with this email.

        Args:
            email: Email address

        Returns:
            User if found, None otherwise
        """
        with logfire.span("identity_service.find_by_email", email=email):
            return await self.directory_client.find_by_email(email)

    async def create(self, attributes: dict[str, Any]) -> SaveResult:
        """Create a directory user.

        Args:
            attributes: User attributes

        Returns:
            Result holding the new user, or the directory's errors
        """
        with logfire.span(
            "identity_service.create", fields=_loggable(attributes)
        ):
            try:
                identity = await self.directory_client.create(attributes)
            except IdentityRejectedError as e:
                logfire.warn("Directory rejected new user", errors=e.errors)
                return SaveResult(errors=e.errors)

            logfire.info("Directory user created", uid=identity.uid)
            await self.save_hooks.run(identity)
            return SaveResult(identity=identity)

    async def update(
        self, identity: Identity, attributes: dict[str, Any]
    ) -> SaveResult:
        """Update a directory user.

        Args:
            identity: User to update
            attributes: Attributes to change

        Returns:
            Result holding the updated user, or the directory's errors
        """
        with logfire.span(
            "identity_service.update",
            uid=identity.uid,
            fields=_loggable(attributes),
        ):
            try:
                updated = await self.directory_client.update(identity.uid, attributes)
            except IdentityRejectedError as e:
                logfire.warn(
                    "Directory rejected user update", uid=identity.uid, errors=e.errors
                )
                return SaveResult(errors=e.errors)

            logfire.info("Directory user updated", uid=updated.uid)
            await self.save_hooks.run(updated)
            return SaveResult(identity=updated)

    async def confirm(self, identity: Identity) -> SaveResult:
        """Mark a directory user as confirmed."""
        return await self.update(identity, {"confirmed": True})

    async def set_password(
        self, identity: Identity, attributes: dict[str, Any]
    ) -> SaveResult:
        """Apply password-setting form values and confirm the user.

        Args:
            identity: User completing account setup
            attributes: Form values (password, password_confirmation, ...)

        Returns:
            Result holding the confirmed user, or the directory's errors
        """
        return await self.update(identity, {**attributes, "confirmed": True})

    async def send_confirmation_message(self, identity: Identity) -> SaveResult:
        """Ask the directory to send its own confirmation message."""
        return await self.update(identity, {"send_confirmation": True})

    async def authenticate(self, token: ConfirmationToken) -> Identity | None:
        """Exchange a one-time token for the user it belongs to.

        Args:
            token: Confirmation token

        Returns:
            User if the token is recognised, None otherwise
        """
        with logfire.span("identity_service.authenticate", token=token.masked()):
            identity = await self.directory_client.authenticate_by_token(token.root)
            if identity:
                logfire.info("Token authenticated", uid=identity.uid)
            else:
                logfire.warn("Token not recognised", token=token.masked())
            return identity

    async def sign_out(self, identity: Identity) -> None:
        """Invalidate the user's directory authentication token, if any."""
        if not identity.authentication_token:
            return
        with logfire.span("identity_service.sign_out", uid=identity.uid):
            await self.directory_client.deauthenticate(identity.authentication_token)

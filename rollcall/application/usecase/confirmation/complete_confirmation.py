"""Complete confirmation use case."""

import logfire
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from rollcall.application.usecase.base import BaseUseCase
from rollcall.domain.error import CredentialsNotRecognisedError
from rollcall.domain.model.identity import Identity
from rollcall.domain.service import IdentityService, SessionManager, SessionToken
from rollcall.domain.value import ConfirmationToken


class ConfirmationAttributes(BaseModel):
    """User attributes a person may set while confirming their account.

    Anything else submitted alongside is dropped.
    """

    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None
    confirmed: bool | None = None


class CompleteConfirmationRequest(BaseModel):
    """Complete confirmation request."""

    token: str
    attributes: ConfirmationAttributes = Field(default_factory=ConfirmationAttributes)
    destination: str | None = None


class CompleteConfirmationResponse(BaseModel):
    """Complete confirmation response."""

    identity: Identity
    destination: str
    session: SessionToken
    errors: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def saved(self) -> bool:
        return not self.errors


class CompleteConfirmationUseCase(BaseUseCase):
    """Use case for the token handshake that ends an invitation.

    The person arrives with a one-time token from their invitation, is signed
    in as the user it belongs to, and sets the details (usually a password)
    that confirm their directory account.
    """

    def __init__(
        self, identity_service: IdentityService, session_manager: SessionManager
    ) -> None:
        """Initialize complete confirmation use case.

        Args:
            identity_service: Identity domain service
            session_manager: Signs users in and picks their landing page
        """
        self.identity_service = identity_service
        self.session_manager = session_manager

    async def execute(
        self, request: CompleteConfirmationRequest
    ) -> CompleteConfirmationResponse:
        """Authenticate by token, sign in, and confirm the account.

        Args:
            request: Token, submitted attributes and optional destination

        Returns:
            The confirmed user, where to send them, and their new session

        Raises:
            CredentialsNotRecognisedError: If the token matches no user
        """
        masked = request.token.strip()[:8] + "..."
        with logfire.span("complete_confirmation.execute", token=masked):
            try:
                token = ConfirmationToken(root=request.token)
            except PydanticValidationError:
                logfire.warn("Malformed confirmation token", token=masked)
                raise CredentialsNotRecognisedError(masked)

            identity = await self.identity_service.authenticate(token)
            if identity is None:
                raise CredentialsNotRecognisedError(token.masked())

            session = await self.session_manager.sign_in_and_remember(identity)

            attributes = request.attributes.model_dump(exclude_none=True)
            result = await self.identity_service.set_password(identity, attributes)
            if result.saved and result.identity is not None:
                identity = result.identity
            else:
                logfire.warn(
                    "Confirmation details rejected",
                    uid=identity.uid,
                    errors=result.errors,
                )

            destination = (
                request.destination
                or await self.session_manager.default_post_sign_in_path(identity)
            )

            logfire.info(
                "Confirmation completed",
                uid=identity.uid,
                confirmed=identity.confirmed,
                destination=destination,
            )

            return CompleteConfirmationResponse(
                identity=identity,
                destination=destination,
                session=session,
                errors=result.errors,
            )

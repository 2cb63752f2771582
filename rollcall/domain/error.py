"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class CredentialsNotRecognisedError(NotFoundError):
    """Raised when a confirmation token does not authenticate anyone."""

    message = "Sorry: User credentials not recognised."

    def __init__(self, token: str):
        self.resource = "User"
        self.identifier = token
        DomainError.__init__(self, self.message)


class IdentityRejectedError(DomainError):
    """Raised when the directory refuses to create or update a user.

    Carries the directory's field errors, e.g. ``{"email": ["is taken"]}``.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field} {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Directory rejected user: {details or 'invalid'}")

"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class DirectoryError(ProviderError):
    """The user directory could not be reached or answered with a failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DirectoryResponseError(DirectoryError):
    """The user directory answered with a body that could not be decoded."""

    pass


class MailDeliveryError(AdapterError):
    """A message could not be handed to the mail transport."""

    pass

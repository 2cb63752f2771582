"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Invitation sent", record_id=str(record.id), user_uid=uid)

    # Manual spans around remote calls
    with logfire.span("identity_resolver.resolve", user_uid=uid):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from rollcall.config import Settings

# Attribute names that hold details about the people being invited
PERSONAL_DATA_PATTERNS = ["email", "phone", "given_name", "family_name", "chinese_name"]


def should_send(settings: Settings) -> bool:
    """Whether telemetry goes to Logfire cloud.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise having a token
    means yes.
    """
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the service and its scripts.

    Set OBSERVABILITY__SCRUB_PERSONAL_DATA to keep invitees' names, emails
    and phone numbers out of exported spans.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send(settings)
    scrubbing = (
        logfire.ScrubbingOptions(extra_patterns=PERSONAL_DATA_PATTERNS)
        if settings.observability.scrub_personal_data
        else None
    )

    logfire.configure(
        service_name=settings.service_name,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=scrubbing,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        scrub_personal_data=settings.observability.scrub_personal_data,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every query the linked record repository runs."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace every directory request."""
    logfire.instrument_httpx()

#!/usr/bin/env python3
"""Send reminders to everyone invited who has not yet accepted.

Usage:
    python scripts/send_reminders.py interviewer [--batch-size 100]
"""

import argparse
import asyncio
import sys

import logfire

from rollcall.application.usecase.invitation import (
    RemindPendingRequest,
    RemindPendingUseCase,
)
from rollcall.config import Settings
from rollcall.util.di.container import create_container
from rollcall.util.logging import setup_logging
from rollcall.util.observability import configure_logfire


async def send_reminders(record_type: str, batch_size: int) -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(RemindPendingUseCase)
            response = await use_case.execute(
                RemindPendingRequest(record_type=record_type, batch_size=batch_size)
            )
    finally:
        await container.close()

    print(f"Reminded {response.reminded}, skipped {response.skipped}")
    return 0


def main() -> int:
    """Parse arguments and send reminders, logging any failure to Logfire."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("record_type", help="Record type, e.g. interviewer")
    parser.add_argument("--batch-size", type=int, default=100)
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        return asyncio.run(send_reminders(args.record_type, args.batch_size))
    except Exception as e:
        logfire.error(
            "Sending reminders failed",
            record_type=args.record_type,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

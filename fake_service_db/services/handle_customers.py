"""Customer Handler — builds the envelope answering GET /.

Invariants:
    - start/end instants bracket only the store call; composition and serialization are outside
    - duration is derived from the same two instants written to start_time/end_time
    - Success: body "Hello " + names joined by single spaces, code 200
    - Failure: body is the DataAccessError message verbatim, code 500
    - Never raises for store failures; no retries
"""

import logging
from datetime import datetime

from fastapi import status

from fake_service_db.core.errors import DataAccessError
from fake_service_db.core.repository_protocols import CustomerStore
from fake_service_db.core.timing import format_duration, format_timestamp
from fake_service_db.schemas.envelope import Envelope
from fake_service_db.services.customer_queries import fetch_customer_names

logger = logging.getLogger(__name__)


def greeting(names: list[str]) -> str:
    return "Hello " + " ".join(names)


async def handle_get_customers(
    store: CustomerStore | None, service_name: str, timeout: float = 0,
) -> Envelope:
    """Query the store once and wrap the outcome in an envelope."""
    started = datetime.now()
    try:
        names = await fetch_customer_names(store, timeout=timeout)
    except DataAccessError as exc:
        finished = datetime.now()
        logger.error(
            f"Customer query failed: {exc.message}", extra=exc.log_fields(),
        )
        body, code = exc.message, status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        finished = datetime.now()
        body, code = greeting(names), status.HTTP_200_OK

    return Envelope(
        name=service_name,
        start_time=format_timestamp(started),
        end_time=format_timestamp(finished),
        duration=format_duration(finished - started),
        body=body,
        code=code,
    )

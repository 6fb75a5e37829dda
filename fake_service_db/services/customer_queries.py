"""Customer Queries — the single read the service performs against the store.

Invariants:
    - Exactly one statement per call: SELECT name FROM customers
    - No ORDER BY; callers get the store's natural row order
    - The full result is materialized and the session released before returning
    - Every failure (missing store, driver error, undecodable row, deadline) is a DataAccessError
"""

import asyncio
import logging

from pydantic import ValidationError
from sqlalchemy import select

from fake_service_db.core.errors import DataAccessError, ErrorCategory
from fake_service_db.core.repository_protocols import CustomerStore
from fake_service_db.models.customer import CustomerRecord
from fake_service_db.schemas.customer import Customer

logger = logging.getLogger(__name__)


async def fetch_customer_names(
    store: CustomerStore | None, timeout: float = 0,
) -> list[str]:
    """Names of every customer; an empty table yields []."""
    if store is None:
        raise DataAccessError("database connection is not initialized", "connect")

    logger.info("Getting customers from database")
    if timeout <= 0:
        return await _select_names(store)
    try:
        return await asyncio.wait_for(_select_names(store), timeout)
    except asyncio.TimeoutError as exc:
        raise DataAccessError(
            f"query timed out after {timeout:g}s", "execute",
            category=ErrorCategory.TIMEOUT,
        ) from exc


async def _select_names(store: CustomerStore) -> list[str]:
    async with store.session() as db:
        result = await db.execute(select(CustomerRecord.name))
        rows = list(result.scalars().all())

    try:
        customers = [
            Customer.model_validate({"name": name}, strict=True) for name in rows
        ]
    except ValidationError as exc:
        raise DataAccessError(
            f"cannot decode customer row: {exc.errors()[0]['msg']}", "decode",
        ) from exc

    logger.info(
        f"Fetched {len(customers)} customers", extra={"customers": len(customers)},
    )
    return [customer.name for customer in customers]

"""Customer Route — GET / answers with the customer greeting envelope.

Invariants:
    - One store query per request
    - Response status equals the envelope's code (200 or 500)
"""

import logging

from fastapi import APIRouter, Depends, Response

from fake_service_db.api.dependencies import get_service_settings, get_store
from fake_service_db.api.responses import envelope_response
from fake_service_db.config import Settings
from fake_service_db.infrastructure.database import DatabaseSessionManager
from fake_service_db.services.handle_customers import handle_get_customers

logger = logging.getLogger(__name__)
router = APIRouter(tags=["customers"])


@router.get("/")
async def get_customers(
    settings: Settings = Depends(get_service_settings),
    store: DatabaseSessionManager | None = Depends(get_store),
) -> Response:
    """Greet every customer in the store."""
    envelope = await handle_get_customers(
        store, settings.name, timeout=settings.query_timeout_seconds,
    )
    return envelope_response(envelope)

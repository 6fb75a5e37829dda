"""Envelope Responses — writes an Envelope as the HTTP response.

Invariants:
    - HTTP status is always the envelope's code
    - Content-Type is application/json
    - A SerializationError never escapes: it becomes a generic 500 envelope
"""

import logging

from fastapi import Response, status

from fake_service_db.core.errors import SerializationError
from fake_service_db.schemas.envelope import Envelope

logger = logging.getLogger(__name__)

SERIALIZATION_FAILURE_BODY = "internal serialization error"


def envelope_response(envelope: Envelope) -> Response:
    try:
        payload = envelope.to_json()
    except SerializationError as exc:
        logger.error(
            f"Envelope serialization failed: {exc.message}",
            extra=exc.log_fields(),
        )
        envelope = Envelope(
            name=envelope.name,
            start_time=envelope.start_time,
            end_time=envelope.end_time,
            duration=envelope.duration,
            body=SERIALIZATION_FAILURE_BODY,
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        payload = envelope.to_json()

    return Response(
        content=payload,
        status_code=envelope.code,
        media_type="application/json",
    )

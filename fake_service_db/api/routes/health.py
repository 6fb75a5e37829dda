"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health and GET /ready always return 200 with the JSON string "OK"
    - Neither probe touches the store

Design Decisions:
    - Readiness shares the liveness handler, matching the other fake services;
      a store outage shows up on GET / as 500 envelopes, not on /ready
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
@router.get("/ready")
async def health_check():
    """Report that the process is up."""
    return JSONResponse(content="OK")

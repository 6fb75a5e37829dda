"""Request Dependencies — read the application context built at startup.

Invariants:
    - Settings and the store handle come from app.state, never from module globals
    - A missing store is passed through as None; data access reports it per request
"""

from fastapi import Request

from fake_service_db.config import Settings
from fake_service_db.infrastructure.database import DatabaseSessionManager


def get_service_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "store", None)

"""Error Handlers — failures escaping a route still answer with an envelope.

Invariants:
    - FakeServiceError → envelope with its http_status and message
    - Unhandled exceptions → generic 500 envelope, no internal details
"""

from fake_service_db.api.error_handlers import GENERIC_ERROR_MESSAGE
from fake_service_db.core.errors import DecodeError


async def test_service_error_uses_its_status(app, client):
    @app.get("/boom-decode")
    async def _boom():
        raise DecodeError("invalid envelope: bad")

    res = await client.get("/boom-decode")

    assert res.status_code == 400
    data = res.json()
    assert data["code"] == 400
    assert data["error"] == "invalid envelope: bad"
    assert data["name"] == "customers"


async def test_unhandled_exception_is_generic_500(app, client):
    @app.get("/boom")
    async def _boom():
        raise RuntimeError("secret internal detail")

    res = await client.get("/boom")

    assert res.status_code == 500
    data = res.json()
    assert data["code"] == 500
    assert data["body"] == GENERIC_ERROR_MESSAGE
    assert "secret" not in res.text

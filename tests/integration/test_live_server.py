"""Integration tests against a live CIC server.

Skipped unless ICWS_TEST_SERVER, ICWS_TEST_USER and ICWS_TEST_PASSWORD are
set. ICWS_TEST_LOCKED_USER optionally names an account with an expired or
locked password.

Run with: pytest tests/integration -m integration
"""

import os

import pytest

from icws import InvalidCredentialsError, Session

SERVER = os.environ.get("ICWS_TEST_SERVER", "")
USER = os.environ.get("ICWS_TEST_USER", "")
PASSWORD = os.environ.get("ICWS_TEST_PASSWORD", "")
LOCKED_USER = os.environ.get("ICWS_TEST_LOCKED_USER", "")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (SERVER and USER and PASSWORD),
        reason="No live CIC server configured",
    ),
]


@pytest.mark.asyncio
async def test_wrong_password() -> None:
    async with Session() as session:
        with pytest.raises(InvalidCredentialsError):
            await session.connect(SERVER, USER, PASSWORD + "wrong")


@pytest.mark.asyncio
async def test_unknown_user() -> None:
    async with Session() as session:
        with pytest.raises(InvalidCredentialsError):
            await session.connect(SERVER, USER + "notexist", PASSWORD)


@pytest.mark.asyncio
@pytest.mark.skipif(not LOCKED_USER, reason="ICWS_TEST_LOCKED_USER not set")
async def test_locked_user() -> None:
    async with Session() as session:
        with pytest.raises(InvalidCredentialsError):
            await session.connect(SERVER, LOCKED_USER, PASSWORD)


@pytest.mark.asyncio
async def test_connect_and_disconnect() -> None:
    async with Session() as session:
        await session.connect(SERVER, USER, PASSWORD)
        assert session.session_id
        assert session.csrf_token
        assert session.session_cookie
        assert session.server_name
        assert session.user_id

        result = await session.disconnect()
        assert result.ok
        assert not session.is_connected

"""ICWS session lifecycle: connect, authenticated requests, disconnect."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from icws.config.schema import ClientConfig
from icws.core.constants import CONNECTION_PATH, CONNECTION_REQUEST_TYPE
from icws.core.endpoint import Endpoint, resolve
from icws.core.errors import (
    EmptyAddressError,
    EmptyPasswordError,
    EmptyUserError,
    IcwsError,
    UnknownServerError,
)
from icws.core.locks import ReadWriteLock
from icws.rest.dispatcher import Dispatcher
from icws.rest.types import ClassifiedResponse, Credentials, Request, SessionState

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _host_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(host) for host in value]
    return []


@dataclass
class DisconnectResult:
    """Outcome of Session.disconnect.

    Local credentials are always cleared; a failed remote DELETE is reported
    here instead of being raised.

    Attributes:
        attempted: False when the session was not connected (no request sent).
        error: The error raised by the remote DELETE, if any.
    """

    attempted: bool
    error: IcwsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Session:
    """An ICWS session against one CIC server.

    The session is Disconnected until connect() succeeds and returns to
    Disconnected after disconnect(). Session id, CSRF token and cookie are
    stored together and are either all present or all absent.

    connect() and disconnect() hold the exclusive side of an internal
    read/write lock; request() and the verb helpers hold the shared side, so
    requests may overlap each other but never a lifecycle transition.

    Usage:
        async with Session() as session:
            await session.connect("https://cic.example.com", "agent", "1234")
            status = await session.get("/status/user-statuses")
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize a disconnected session.

        Args:
            config: Client settings; defaults to ClientConfig().
            transport: Optional httpx transport handed to the dispatcher.
        """
        self._config = config or ClientConfig()
        self._dispatcher = Dispatcher(self._config, transport=transport)
        self._lock = ReadWriteLock()

        self._endpoint: Endpoint | None = None
        self._application = self._config.application_name
        self._language = self._config.language
        self._credentials: Credentials | None = None

        self._alternate_hosts: list[str] = []
        self._user_id: str | None = None
        self._user_display_name: str | None = None
        self._server_name: str | None = None

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Disconnect if connected, then close the HTTP client."""
        try:
            await self.disconnect()
        finally:
            await self.aclose()

    def __repr__(self) -> str:
        state = f"id={self.session_id!r}" if self.is_connected else "disconnected"
        return f"Session({self.base_url or '<no server>'}, {state})"

    # === State ===

    @property
    def is_connected(self) -> bool:
        return self._credentials is not None

    @property
    def endpoint(self) -> Endpoint | None:
        return self._endpoint

    @property
    def base_url(self) -> str | None:
        return self._endpoint.base_url if self._endpoint else None

    @property
    def application_name(self) -> str:
        return self._application

    @property
    def language(self) -> str:
        return self._language

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    @property
    def session_id(self) -> str | None:
        return self._credentials.session_id if self._credentials else None

    @property
    def csrf_token(self) -> str | None:
        return self._credentials.csrf_token if self._credentials else None

    @property
    def session_cookie(self) -> str | None:
        return self._credentials.cookie if self._credentials else None

    @property
    def alternate_hosts(self) -> list[str]:
        return list(self._alternate_hosts)

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def user_display_name(self) -> str | None:
        return self._user_display_name

    @property
    def server_name(self) -> str | None:
        return self._server_name

    def _snapshot(self, endpoint: Endpoint | None = None, language: str | None = None) -> SessionState:
        endpoint = endpoint or self._endpoint
        if endpoint is None:
            raise EmptyAddressError()
        return SessionState(
            base_url=endpoint.base_url,
            language=language or self._language,
            credentials=self._credentials,
        )

    def _clear(self) -> None:
        self._credentials = None
        self._alternate_hosts = []
        self._user_id = None
        self._user_display_name = None
        self._server_name = None

    # === Lifecycle ===

    async def connect(
        self,
        address: str,
        user: str,
        password: str,
        application: str | None = None,
        language: str | None = None,
        *,
        market_license: str | None = None,
        market_code: str | None = None,
    ) -> Session:
        """Authenticate against a CIC server.

        Address errors are reported before user/password errors, and no
        request is sent when any of them fails.

        Args:
            address: Server URL, e.g. ``https://cic.example.com`` (port 8019
                implied) or ``http://cic.example.com:8018``.
            user: CIC user id.
            password: The user's password.
            application: Application name reported to the server. Blank keeps
                the current value.
            language: Locale for Accept-Language. Blank keeps the current value.
            market_license: Marketplace application license name, if any.
            market_code: Marketplace application code, if any.

        Returns:
            This session, now connected.

        Raises:
            InputValidationError: Blank or malformed address, blank user or
                password.
            InvalidCredentialsError: The server rejected the user/password.
            TransportError: The server could not be reached.
            IcwsError: Any other classified failure of the connect request.
        """
        endpoint = resolve(address)
        if _is_blank(user):
            raise EmptyUserError()
        if _is_blank(password):
            raise EmptyPasswordError()

        application = self._application if _is_blank(application) else application
        language = self._language if _is_blank(language) else language
        assert application is not None and language is not None

        payload: dict[str, Any] = {
            "__type": CONNECTION_REQUEST_TYPE,
            "applicationName": application,
            "userID": user,
            "password": password,
        }
        if not _is_blank(market_license):
            payload["marketPlaceApplicationLicenseName"] = market_license
        if not _is_blank(market_code):
            payload["marketPlaceApplicationCode"] = market_code

        async with self._lock.write():
            logger.info("Connecting to %s as %s", endpoint, user)
            state = self._snapshot(endpoint, language)
            response = await self._dispatcher.dispatch(
                state, Request("POST", CONNECTION_PATH, payload, scoped=False)
            )
            credentials = self._credentials_from(response)

            data = response.body
            self._endpoint = endpoint
            self._application = application
            self._language = language
            self._credentials = credentials
            self._alternate_hosts = _host_list(data.get("alternateHostList"))
            self._user_id = data.get("userID")
            self._user_display_name = data.get("userDisplayName")
            self._server_name = data.get("icServer")

        logger.info(
            "Connected to %s (%s) as %s, session %s",
            endpoint,
            self._server_name,
            self._user_id,
            credentials.session_id,
        )
        return self

    @staticmethod
    def _credentials_from(response: ClassifiedResponse) -> Credentials:
        data = response.body
        path = CONNECTION_PATH
        if not isinstance(data, dict):
            raise UnknownServerError(
                "POST", path, response.status, data, detail="connect response is not an object"
            )
        session_id = data.get("sessionId")
        csrf_token = data.get("csrfToken")
        if not session_id or not csrf_token or not response.cookie:
            raise UnknownServerError(
                "POST",
                path,
                response.status,
                data,
                detail="connect response lacks sessionId, csrfToken or cookie",
            )
        return Credentials(
            session_id=str(session_id),
            csrf_token=str(csrf_token),
            cookie=response.cookie,
        )

    async def disconnect(self) -> DisconnectResult:
        """Tear down the session.

        Sends DELETE to the connection resource, then clears local
        credentials whatever the outcome. A remote failure is logged and
        returned in the result, never raised, so the session can never be
        left believing it still holds valid credentials.

        Returns:
            DisconnectResult; ``attempted`` is False when already disconnected.
        """
        async with self._lock.write():
            if self._credentials is None:
                return DisconnectResult(attempted=False)

            session_id = self._credentials.session_id
            state = self._snapshot()
            error: IcwsError | None = None
            try:
                await self._dispatcher.dispatch(state, Request("DELETE", CONNECTION_PATH))
            except IcwsError as e:
                error = e
            finally:
                self._clear()

        if error is not None:
            logger.warning("Disconnect of session %s failed remotely: %s", session_id, error)
        else:
            logger.info("Disconnected session %s", session_id)
        return DisconnectResult(attempted=True, error=error)

    async def aclose(self) -> None:
        """Close the HTTP client without contacting the server."""
        await self._dispatcher.aclose()

    # === Requests ===

    async def request(self, verb: str, path: str, body: Any | None = None) -> ClassifiedResponse:
        """Send one request in the context of this session.

        Once connected the path is scoped under ``/icws/<session_id>`` and the
        CSRF token and cookie are attached. Before connecting (or after
        disconnecting) the request goes to ``/icws<path>`` without credentials.

        Raises:
            EmptyAddressError: The session has never been connected to a server.
            TransportError: The server could not be reached.
            IcwsError: The classified failure of the request.
        """
        async with self._lock.read():
            state = self._snapshot()
            return await self._dispatcher.dispatch(state, Request(verb, path, body))

    async def get(self, path: str) -> Any:
        return (await self.request("GET", path)).body

    async def post(self, path: str, body: Any | None = None) -> Any:
        return (await self.request("POST", path, body)).body

    async def put(self, path: str, body: Any | None = None) -> Any:
        return (await self.request("PUT", path, body)).body

    async def patch(self, path: str, body: Any | None = None) -> Any:
        return (await self.request("PATCH", path, body)).body

    async def delete(self, path: str) -> Any:
        return (await self.request("DELETE", path)).body

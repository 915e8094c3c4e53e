"""ICWS client: session-oriented REST client for CIC servers.

Example:
    from icws import Session

    async with Session() as session:
        await session.connect("https://cic.example.com", "agent", "1234")
        print(session.session_id, session.server_name)
"""

from icws.config import ClientConfig, load_config
from icws.core.endpoint import Endpoint, resolve
from icws.core.errors import (
    ConfigError,
    EmptyAddressError,
    EmptyPasswordError,
    EmptyUserError,
    ErrorKind,
    IcwsError,
    InputValidationError,
    InvalidCredentialsError,
    InvalidPortError,
    InvalidSchemeError,
    InvalidSessionError,
    MethodNotAllowedError,
    MissingCookieError,
    ProtocolError,
    ServerError,
    TransportError,
    UnknownServerError,
)
from icws.rest import ClassifiedResponse, Dispatcher, Request
from icws.session import DisconnectResult, Session

__version__ = "0.1.0"

__all__ = [
    "Session",
    "DisconnectResult",
    "Dispatcher",
    "Request",
    "ClassifiedResponse",
    "Endpoint",
    "resolve",
    "ClientConfig",
    "load_config",
    # Errors
    "ErrorKind",
    "IcwsError",
    "ConfigError",
    "InputValidationError",
    "EmptyAddressError",
    "EmptyUserError",
    "EmptyPasswordError",
    "InvalidSchemeError",
    "InvalidPortError",
    "TransportError",
    "ProtocolError",
    "MissingCookieError",
    "UnknownServerError",
    "ServerError",
    "MethodNotAllowedError",
    "InvalidCredentialsError",
    "InvalidSessionError",
]

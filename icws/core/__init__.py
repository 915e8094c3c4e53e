"""Core types: errors, endpoint resolution, locking and redaction."""

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
from icws.core.locks import ReadWriteLock

__all__ = [
    "Endpoint",
    "resolve",
    "ReadWriteLock",
    "ErrorKind",
    "IcwsError",
    "ConfigError",
    # Validation
    "InputValidationError",
    "EmptyAddressError",
    "EmptyUserError",
    "EmptyPasswordError",
    "InvalidSchemeError",
    "InvalidPortError",
    # Transport
    "TransportError",
    # Protocol
    "ProtocolError",
    "MissingCookieError",
    "UnknownServerError",
    # Application
    "ServerError",
    "MethodNotAllowedError",
    "InvalidCredentialsError",
    "InvalidSessionError",
]

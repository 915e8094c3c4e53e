"""Typed exception hierarchy for the ICWS client.

Every error carries a stable ``kind`` identifier so callers can log or
display it without re-querying the server. Errors fall in four families:

- InputValidationError: rejected locally before any network call
- TransportError: the HTTP exchange itself failed (network, timeout, undecodable body)
- ProtocolError: the server answered in a way the protocol does not allow
- ServerError: the server reported an application-level failure
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Stable identifiers for every error the client can raise."""

    EMPTY_ADDRESS = "com.inin.icws.error.connect.empty_server"
    EMPTY_USER = "com.inin.icws.error.connect.empty_user"
    EMPTY_PASSWORD = "com.inin.icws.error.connect.empty_password"
    INVALID_SCHEME = "com.inin.icws.error.url.invalid_protocol"
    INVALID_PORT = "com.inin.icws.error.url.invalid_port"
    TRANSPORT = "com.inin.icws.error.transport"
    MISSING_COOKIE = "com.inin.icws.error.response.missing_cookie"
    UNKNOWN_SERVER_ERROR = "com.inin.icws.error.server.unknown"
    METHOD_NOT_ALLOWED = "com.inin.icws.error.request.method_not_allowed"
    INVALID_CREDENTIALS = "com.inin.icws.error.connect.invalid_credentials"
    INVALID_SESSION = "com.inin.icws.error.session.invalid"
    CONFIG = "com.inin.icws.error.config"


class IcwsError(Exception):
    """Base class for all ICWS client errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(IcwsError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""

    kind = ErrorKind.CONFIG


# === Validation ===


class InputValidationError(IcwsError):
    """Base class for errors detected locally before any request is sent."""


class EmptyAddressError(InputValidationError):
    """The server address is blank or names no host."""

    kind = ErrorKind.EMPTY_ADDRESS

    def __init__(self, address: str | None = None) -> None:
        self.address = address
        super().__init__(f"{self.kind.value}: server address is empty")


class EmptyUserError(InputValidationError):
    kind = ErrorKind.EMPTY_USER

    def __init__(self) -> None:
        super().__init__(f"{self.kind.value}: user is empty")


class EmptyPasswordError(InputValidationError):
    kind = ErrorKind.EMPTY_PASSWORD

    def __init__(self) -> None:
        super().__init__(f"{self.kind.value}: password is empty")


class InvalidSchemeError(InputValidationError):
    """The address scheme is neither http nor https."""

    kind = ErrorKind.INVALID_SCHEME

    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(f"{self.kind.value}({scheme or '<none>'})")


class InvalidPortError(InputValidationError):
    """The port is not 8018/8019 or does not match the scheme."""

    kind = ErrorKind.INVALID_PORT

    def __init__(self, port: int | str, scheme: str = "") -> None:
        self.port = port
        self.scheme = scheme
        suffix = f" for {scheme}" if scheme else ""
        super().__init__(f"{self.kind.value}({port}){suffix}")


# === Transport ===


class TransportError(IcwsError):
    """The HTTP exchange failed: no response, or a body that could not be decoded.

    The underlying httpx exception is chained as ``__cause__``.
    """

    kind = ErrorKind.TRANSPORT

    def __init__(self, verb: str, path: str, reason: str) -> None:
        self.verb = verb
        self.path = path
        self.reason = reason
        super().__init__(f"{self.kind.value}: {verb} {path} failed: {reason}")


# === Protocol ===


class ProtocolError(IcwsError):
    """Base class for malformed or unexpected server behavior."""

    def __init__(self, message: str, verb: str, path: str, status: int) -> None:
        self.verb = verb
        self.path = path
        self.status = status
        super().__init__(message)


class MissingCookieError(ProtocolError):
    """A 201 response arrived without a Set-Cookie header."""

    kind = ErrorKind.MISSING_COOKIE

    def __init__(self, verb: str, path: str, status: int = 201) -> None:
        super().__init__(
            f"{self.kind.value}: {verb} {path} returned {status} without Set-Cookie",
            verb,
            path,
            status,
        )


class UnknownServerError(ProtocolError):
    """The server failed in a way that maps to no known error."""

    kind = ErrorKind.UNKNOWN_SERVER_ERROR

    def __init__(
        self,
        verb: str,
        path: str,
        status: int,
        body: Any = None,
        detail: str | None = None,
    ) -> None:
        self.body = body if body is not None else {}
        self.error_id: str | None = None
        self.error_code: int | None = None
        self.server_message: str | None = None
        if isinstance(self.body, dict):
            error_id = self.body.get("errorId")
            error_code = self.body.get("errorCode")
            message = self.body.get("message")
            self.error_id = error_id if isinstance(error_id, str) else None
            self.error_code = error_code if isinstance(error_code, int) else None
            self.server_message = message if isinstance(message, str) else None
        text = detail or self.server_message or self.error_id or "no details"
        super().__init__(
            f"{self.kind.value}({status}): {verb} {path}: {text}",
            verb,
            path,
            status,
        )


# === Application ===


class ServerError(IcwsError):
    """Base class for business errors reported by the server."""

    def __init__(
        self,
        verb: str,
        path: str,
        status: int,
        error_id: str | None = None,
        error_code: int | None = None,
        server_message: str | None = None,
    ) -> None:
        self.verb = verb
        self.path = path
        self.status = status
        self.error_id = error_id
        self.error_code = error_code
        self.server_message = server_message
        detail = server_message or error_id or f"errorCode {error_code}"
        super().__init__(f"{self.kind.value}({status}): {verb} {path}: {detail}")


class MethodNotAllowedError(ServerError):
    kind = ErrorKind.METHOD_NOT_ALLOWED


class InvalidCredentialsError(ServerError):
    kind = ErrorKind.INVALID_CREDENTIALS


class InvalidSessionError(ServerError):
    """The session is unknown to the server or access was denied."""

    kind = ErrorKind.INVALID_SESSION

"""Request/response types for the ICWS REST exchange."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """The credential set issued by a successful connect.

    Attributes:
        session_id: Server session identifier, scopes every resource path.
        csrf_token: Anti-forgery token sent as ININ-ICWS-CSRF-Token.
        cookie: Session cookie sent back verbatim in the Cookie header.
    """

    session_id: str
    csrf_token: str
    cookie: str


@dataclass(frozen=True)
class SessionState:
    """Snapshot of what the dispatcher needs from a session.

    Taken once per request so header and path construction read a single
    consistent view of the credentials.
    """

    base_url: str
    language: str
    credentials: Credentials | None = None


@dataclass
class Request:
    """One ICWS request.

    Attributes:
        verb: HTTP method, upper-case.
        path: Resource path relative to the /icws[/<session_id>] prefix.
        body: Optional JSON-serializable payload.
        scoped: Prefix the path with the session id when connected. The
            connect POST is always unscoped.
    """

    verb: str
    path: str
    body: Any | None = None
    scoped: bool = True


@dataclass
class ClassifiedResponse:
    """A successful response after status classification.

    Attributes:
        status: HTTP status code (2xx).
        body: Decoded JSON body; None for 204, {} for an empty body.
        cookie: First Set-Cookie value, present on 201 responses.
    """

    status: int
    body: Any | None = None
    cookie: str | None = None

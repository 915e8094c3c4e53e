"""ICWS REST exchange: request types, wire protocol and the dispatcher."""

from icws.rest.dispatcher import Dispatcher
from icws.rest.protocol import (
    ACCESS_DENIED,
    AUTHENTICATION_FAILURE_ID,
    METHOD_NOT_ALLOWED_IDS,
    SESSION_NOT_FOUND,
    build_headers,
    build_path,
    classify,
    classify_error,
)
from icws.rest.types import ClassifiedResponse, Credentials, Request, SessionState

__all__ = [
    "Dispatcher",
    "Request",
    "ClassifiedResponse",
    "Credentials",
    "SessionState",
    "build_path",
    "build_headers",
    "classify",
    "classify_error",
    "METHOD_NOT_ALLOWED_IDS",
    "AUTHENTICATION_FAILURE_ID",
    "SESSION_NOT_FOUND",
    "ACCESS_DENIED",
]

"""ICWS REST protocol: path and header construction, body codec, classification.

Everything here is pure so the wire contract can be tested without a
transport. The Dispatcher composes these around one HTTP exchange.
"""

import json
from typing import Any

from icws.core.constants import (
    COOKIE_HEADER,
    CSRF_HEADER,
    JSON_CONTENT_TYPE,
    LANGUAGE_HEADER,
    PATH_PREFIX,
)
from icws.core.errors import (
    InvalidCredentialsError,
    InvalidSessionError,
    MethodNotAllowedError,
    MissingCookieError,
    ServerError,
    UnknownServerError,
)
from icws.rest.types import ClassifiedResponse, Credentials, SessionState

# errorId values reported by the server
METHOD_NOT_ALLOWED_IDS = frozenset({
    "error.request.unsupported",
    "error.request.accessDenied.httpMethodNotAllowed",
})
AUTHENTICATION_FAILURE_ID = "error.request.connection.authenticationFailure"

# errorCode values reported by the server
SESSION_NOT_FOUND = 2
ACCESS_DENIED = 7
INVALID_SESSION_CODES = frozenset({SESSION_NOT_FOUND, ACCESS_DENIED})


def build_path(path: str, credentials: Credentials | None) -> str:
    """Build the absolute request path.

    ``/icws`` + (``/<session_id>`` once connected) + path. A missing leading
    slash on ``path`` is added.
    """
    if not path.startswith("/"):
        path = "/" + path
    if credentials is None:
        return PATH_PREFIX + path
    return f"{PATH_PREFIX}/{credentials.session_id}{path}"


def encode_body(body: Any | None) -> bytes | None:
    """Serialize a request body to UTF-8 JSON, or None when there is no body."""
    if body is None:
        return None
    return json.dumps(body, ensure_ascii=False).encode("utf-8")


def build_headers(state: SessionState, content: bytes | None) -> dict[str, str]:
    """Build request headers from a session snapshot.

    Credentials are attached whenever the snapshot holds them, including on
    a reconnecting POST to the connection resource.
    """
    headers: dict[str, str] = {LANGUAGE_HEADER: state.language}
    if content is not None:
        headers["Content-Type"] = JSON_CONTENT_TYPE
        headers["Content-Length"] = str(len(content))
    if state.credentials is not None:
        headers[CSRF_HEADER] = state.credentials.csrf_token
        headers[COOKIE_HEADER] = state.credentials.cookie
    return headers


def decode_body(content: bytes) -> Any:
    """Decode a JSON response body; an empty body decodes to ``{}``.

    Raises:
        ValueError: If the body is not valid JSON.
    """
    text = content.decode("utf-8-sig").strip()
    if not text:
        return {}
    return json.loads(text)


def _decode_error_body(content: bytes) -> dict[str, Any]:
    """Best-effort decode for error responses; anything but an object is ``{}``."""
    try:
        data = decode_body(content)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _error_code(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def classify_error(verb: str, path: str, status: int, body: dict[str, Any]) -> Exception:
    """Map a non-2xx response to the matching error.

    Priority: method-not-allowed errorIds, then authentication failure,
    then session errorCodes (2 = not found, 7 = access denied); anything
    else is an UnknownServerError carrying the raw body.
    """
    raw_id = body.get("errorId")
    error_id = raw_id if isinstance(raw_id, str) else None
    error_code = _error_code(body.get("errorCode"))
    message = body.get("message")
    if not isinstance(message, str):
        message = None

    error_cls: type[ServerError] | None = None
    if error_id in METHOD_NOT_ALLOWED_IDS:
        error_cls = MethodNotAllowedError
    elif error_id == AUTHENTICATION_FAILURE_ID:
        error_cls = InvalidCredentialsError
    elif error_code in INVALID_SESSION_CODES:
        error_cls = InvalidSessionError

    if error_cls is None:
        return UnknownServerError(verb, path, status, body)
    return error_cls(
        verb,
        path,
        status,
        error_id=error_id,
        error_code=error_code,
        server_message=message,
    )


def classify(
    verb: str,
    path: str,
    status: int,
    content: bytes,
    set_cookies: list[str],
) -> ClassifiedResponse:
    """Classify an HTTP response into a success value or raise a typed error.

    Args:
        verb: Request method, for error context.
        path: Request path, for error context.
        status: HTTP status code.
        content: Raw response body.
        set_cookies: All Set-Cookie header values, in order.

    Returns:
        ClassifiedResponse for any 2xx status.

    Raises:
        MissingCookieError: 201 without Set-Cookie.
        MethodNotAllowedError, InvalidCredentialsError, InvalidSessionError:
            Server-reported application errors.
        UnknownServerError: Any other non-2xx, or an undecodable 2xx body.
    """
    if not 200 <= status <= 299:
        raise classify_error(verb, path, status, _decode_error_body(content))

    if status == 204:
        return ClassifiedResponse(status=status)

    try:
        body = decode_body(content)
    except ValueError as e:
        raise UnknownServerError(
            verb, path, status, detail=f"invalid JSON body: {e}"
        ) from e

    if status == 201:
        if not set_cookies:
            raise MissingCookieError(verb, path, status)
        cookie = set_cookies[0]
        if isinstance(body, dict):
            body["cookie"] = cookie
        return ClassifiedResponse(status=status, body=body, cookie=cookie)

    return ClassifiedResponse(status=status, body=body)

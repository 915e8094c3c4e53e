"""One HTTP exchange per call against an ICWS server."""

import logging
import ssl

import httpx

from icws.config.schema import ClientConfig
from icws.core.constants import SUPPORTED_VERBS
from icws.core.errors import TransportError
from icws.core.redaction import redact_dict, redact_secrets
from icws.rest.protocol import build_headers, build_path, classify, encode_body
from icws.rest.types import ClassifiedResponse, Request, SessionState

logger = logging.getLogger(__name__)


class Dispatcher:
    """Sends ICWS requests and classifies the responses.

    The dispatcher holds no session state: every call receives a
    SessionState snapshot and derives path and headers from it. It owns the
    httpx.AsyncClient, created lazily on first use.

    Usage:
        dispatcher = Dispatcher(ClientConfig())
        state = SessionState(base_url="https://cic:8019", language="en-US")
        response = await dispatcher.dispatch(state, Request("POST", "/connection", body))
        await dispatcher.aclose()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Client settings (TLS verification, timeout).
            transport: Optional httpx transport, e.g. httpx.MockTransport
                in tests. When None, httpx's default network transport is used.
        """
        self._config = config or ClientConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def verify(self) -> bool | str:
        """TLS verification setting: ssl_ca_cert (custom CA) > verify_ssl (bool)."""
        if self._config.ssl_ca_cert:
            return self._config.ssl_ca_cert
        return self._config.verify_ssl

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            verify: bool | str | ssl.SSLContext = self.verify
            if verify is False:
                logger.warning(
                    "TLS certificate verification is disabled; "
                    "set verify_ssl or ssl_ca_cert to enable it"
                )
            elif isinstance(verify, str):
                verify = ssl.create_default_context(cafile=verify)
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                verify=verify,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client. Safe to call multiple times."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def dispatch(self, state: SessionState, request: Request) -> ClassifiedResponse:
        """Perform one request/response exchange.

        Args:
            state: Credential snapshot of the issuing session.
            request: Verb, path and optional body.

        Returns:
            The classified successful response.

        Raises:
            TransportError: On DNS, connection, timeout or other network failure,
                or when the response body cannot be read or decoded.
            IcwsError: Any error produced by response classification.
        """
        verb = request.verb.upper()
        if verb not in SUPPORTED_VERBS:
            raise ValueError(f"Unsupported HTTP verb: {request.verb!r}")

        path = build_path(request.path, state.credentials if request.scoped else None)
        content = encode_body(request.body)
        headers = build_headers(state, content)
        client = self._ensure_client()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s %s%s headers=%s body=%s",
                verb,
                state.base_url,
                path,
                redact_dict(headers),
                redact_dict({"body": request.body})["body"],
            )

        try:
            response = await client.request(
                verb,
                state.base_url + path,
                content=content,
                headers=headers,
            )
        except httpx.HTTPError as e:
            # Covers network failures and bodies that cannot be read or decoded
            logger.warning("%s %s failed: %s", verb, path, e)
            raise TransportError(verb, path, str(e) or type(e).__name__) from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s %s -> %d %s",
                verb,
                path,
                response.status_code,
                redact_secrets(response.text[:2000]),
            )

        return classify(
            verb,
            path,
            response.status_code,
            response.content,
            response.headers.get_list("set-cookie"),
        )

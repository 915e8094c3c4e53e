"""Server address validation.

A CIC server only answers ICWS on two ports: 8018 for plain HTTP and 8019
for HTTPS. Addresses are parsed once, validated against that pairing and
turned into an immutable Endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from icws.core.constants import DEFAULT_PORTS
from icws.core.errors import EmptyAddressError, InvalidPortError, InvalidSchemeError


@dataclass(frozen=True)
class Endpoint:
    """A validated ICWS server endpoint."""

    scheme: str
    host: str
    port: int

    @property
    def is_secure(self) -> bool:
        return self.scheme == "https"

    @property
    def base_url(self) -> str:
        """Canonical ``scheme://host:port`` form, IPv6 hosts bracketed."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}"

    def __str__(self) -> str:
        return self.base_url


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def resolve(address: str | None) -> Endpoint:
    """Validate a server address and return its canonical endpoint.

    Args:
        address: Server URL such as ``https://cic.example.com`` or
            ``http://10.0.0.5:8018``. The port may be omitted.

    Returns:
        The validated Endpoint.

    Raises:
        EmptyAddressError: If the address is blank or has no host.
        InvalidSchemeError: If the scheme is not exactly http or https.
        InvalidPortError: If the port is not 8018/8019 or does not match
            the scheme (http->8018, https->8019).
    """
    if _is_blank(address):
        raise EmptyAddressError(address)
    assert address is not None

    parsed = urlsplit(address.strip())
    scheme = parsed.scheme
    if scheme not in DEFAULT_PORTS:
        raise InvalidSchemeError(scheme)

    if not parsed.hostname:
        raise EmptyAddressError(address)

    try:
        port = parsed.port
    except ValueError:
        # urlsplit raises on non-numeric or out-of-range ports
        raw = parsed.netloc.rpartition(":")[2]
        raise InvalidPortError(raw, scheme) from None

    if port is None:
        port = DEFAULT_PORTS[scheme]

    if port != DEFAULT_PORTS[scheme]:
        raise InvalidPortError(port, scheme)

    return Endpoint(scheme=scheme, host=parsed.hostname, port=port)

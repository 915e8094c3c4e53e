"""Pydantic model for ICWS client configuration, and its JSON file reader."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from icws.core.constants import DEFAULT_APPLICATION, DEFAULT_LANGUAGE, get_default_config_path
from icws.core.errors import ConfigError

logger = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    """Settings shared by every session created from this config.

    Example config.json:
        {
            "application_name": "wallboard",
            "language": "fr-FR",
            "verify_ssl": true,
            "ssl_ca_cert": "/etc/ssl/cic-ca.pem"
        }
    """

    model_config = ConfigDict(extra="forbid")

    application_name: str = DEFAULT_APPLICATION
    """Name reported to the server in the connection request."""

    language: str = DEFAULT_LANGUAGE
    """Locale sent as Accept-Language on every request."""

    verify_ssl: bool = False
    """Verify the server's TLS certificate. Off by default because CIC servers
    commonly present self-signed certificates. SECURITY WARNING: with
    verification off, connections are open to man-in-the-middle attacks."""

    ssl_ca_cert: str | None = None
    """Path to a CA bundle used to verify the server. Takes priority over
    verify_ssl; prefer this over disabling verification."""

    timeout: float | None = None
    """Per-request timeout in seconds. None leaves deadlines to the caller."""

    @field_validator("application_name", "language")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("timeout")
    @classmethod
    def positive_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("timeout must be positive")
        return v


def load_config(path: Path | None = None) -> ClientConfig:
    """Read a ClientConfig from a JSON file.

    An explicit path must exist. Without one, ~/.icws/config.json is read
    when present and the defaults are returned otherwise.

    Raises:
        ConfigError: Missing explicit file, unreadable file, invalid JSON or
            failed validation.
    """
    if path is None:
        path = get_default_config_path()
        if not path.is_file():
            logger.debug("No config at %s, using defaults", path)
            return ClientConfig()

    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if not text.strip():
        return ClientConfig()

    try:
        config = ClientConfig.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}:\n{e}") from e
    logger.debug("Loaded config from %s", path)
    return config

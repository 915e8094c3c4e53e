"""Protocol constants and global paths for the ICWS client.

Single source of truth for wire-level names. All modules should import from
here instead of hardcoding header names, ports or the config location.
"""

from pathlib import Path

ICWS_DIR_NAME = ".icws"

# Every resource lives under this prefix, followed by /<session_id> once connected
PATH_PREFIX = "/icws"
CONNECTION_PATH = "/connection"

HTTP_PORT = 8018
HTTPS_PORT = 8019
DEFAULT_PORTS = {"http": HTTP_PORT, "https": HTTPS_PORT}

DEFAULT_APPLICATION = "icws_client"
DEFAULT_LANGUAGE = "en-US"

CONNECTION_REQUEST_TYPE = "urn:inin.com:connection:icAuthConnectionRequestSettings"

CSRF_HEADER = "ININ-ICWS-CSRF-Token"
COOKIE_HEADER = "Cookie"
LANGUAGE_HEADER = "Accept-Language"
JSON_CONTENT_TYPE = "application/json"

SUPPORTED_VERBS = frozenset({"GET", "POST", "PUT", "PATCH", "UPDATE", "DELETE"})


def get_icws_dir() -> Path:
    """Get ~/.icws (global config directory)."""
    return Path.home() / ICWS_DIR_NAME


def get_default_config_path() -> Path:
    """Get default config file path."""
    return get_icws_dir() / "config.json"

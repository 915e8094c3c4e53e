"""Configuration loading and validation."""

from icws.config.schema import ClientConfig, load_config

__all__ = [
    "ClientConfig",
    "load_config",
]

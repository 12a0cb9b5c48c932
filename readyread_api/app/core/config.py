"""
Configuration management.

Settings come from three places, in this order:

1. a dotenv file (``.env`` by default), loaded into the process
   environment with ``python-dotenv``;
2. a YAML file (``config/config.yml`` by default) holding the ``http``
   and ``database`` sections;
3. environment variables for values that must not live in the YAML
   file (``DATABASE_DSN``) or that operators tweak per run
   (``LOG_LEVEL``).

Absent YAML keys fall back to the defaults declared on the dataclasses
below.  ``DATABASE_DSN`` has no default; loading fails with
``ConfigError`` when it is missing.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = "config/config.yml"
DEFAULT_DOTENV_PATH = ".env"


class ConfigError(Exception):
    """Raised when the application configuration cannot be loaded."""


@dataclass
class HttpSettings:
    """HTTP listener settings (the ``http`` YAML section)."""

    port: int = 8080
    # Megabytes; shifted left 20 bits before use.
    max_header_bytes: int = 1
    read_timeout: int = 20
    write_timeout: int = 20

    @property
    def max_header_size(self) -> int:
        return self.max_header_bytes << 20


@dataclass
class DatabaseSettings:
    """Database settings (the ``database`` YAML section)."""

    dsn: str = ""
    request_timeout: int = 5
    connection_timeout: int = 5
    shutdown_timeout: int = 5
    pool_size: int = 10
    max_overflow: int = 5


@dataclass
class Settings:
    """Application settings."""

    project_name: str = "ReadyRead API"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    http: HttpSettings = field(default_factory=HttpSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)


# YAML key -> dataclass attribute for each section.
_HTTP_KEYS = {
    "port": "port",
    "maxHeaderBytes": "max_header_bytes",
    "readTimeout": "read_timeout",
    "writeTimeout": "write_timeout",
}
_DATABASE_KEYS = {
    "requestTimeout": "request_timeout",
    "connectionTimeout": "connection_timeout",
    "shutdownTimeout": "shutdown_timeout",
    "poolSize": "pool_size",
    "maxOverflow": "max_overflow",
}


def _read_section(raw: Dict[str, Any], name: str, keys: Dict[str, str]) -> Dict[str, int]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"section '{name}' must be a mapping")
    values: Dict[str, int] = {}
    for yaml_key, attr in keys.items():
        if yaml_key not in section:
            continue
        try:
            values[attr] = int(section[yaml_key])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name}.{yaml_key} must be an integer, got {section[yaml_key]!r}") from e
    return values


def read_config_file(config_path: str) -> Dict[str, Any]:
    """Parse the YAML configuration file into a dictionary."""
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"config file {config_path} does not exist")
    try:
        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse config file {config_path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping")
    return raw


def load_settings(
    config_path: Optional[str] = None,
    dotenv_path: Optional[str] = None,
) -> Settings:
    """Load the dotenv file and the YAML config and build ``Settings``.

    Parameters
    ----------
    config_path : Optional[str]
        Path of the YAML file.  Defaults to ``CONFIG_PATH`` from the
        environment, then to ``config/config.yml``.
    dotenv_path : Optional[str]
        Path of the dotenv file.  Defaults to ``.env``.

    Raises
    ------
    ConfigError
        If the YAML file is missing or malformed, a value has the wrong
        type, or ``DATABASE_DSN`` is not set.
    """
    logger = logging.getLogger(__name__)

    dotenv_path = dotenv_path or DEFAULT_DOTENV_PATH
    logger.info("loading .env file")
    if load_dotenv(dotenv_path):
        logger.info("loaded .env file")
    else:
        logger.warning("no variables loaded from %s, using process environment", dotenv_path)

    config_path = config_path or os.getenv("CONFIG_PATH", DEFAULT_CONFIG_PATH)
    logger.info("reading application config from %s", config_path)
    raw = read_config_file(config_path)

    http = HttpSettings(**_read_section(raw, "http", _HTTP_KEYS))
    database = DatabaseSettings(**_read_section(raw, "database", _DATABASE_KEYS))

    database.dsn = os.getenv("DATABASE_DSN", "")
    if not database.dsn:
        raise ConfigError("DATABASE_DSN environment variable is required")

    settings = Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        http=http,
        database=database,
    )
    logger.info("done reading application config")
    return settings

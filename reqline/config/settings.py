"""
Configuration for Reqline.

Settings come from an optional YAML file (``~/.reqline/config.yaml`` unless
another path is given) laid over built-in defaults. String values may
reference the environment as ``${NAME}`` or ``${NAME:fallback}``.

Example::

    server:
      port: ${PORT:8000}
      environment: development
    executor:
      request_timeout_ms: 5000
    logging:
      level: DEBUG
      format: console
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from reqline.exceptions import InvalidConfigurationError
from reqline.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_PORT = 8000
DEFAULT_REQUEST_TIMEOUT_MS = 10_000
VALID_ENVIRONMENTS = ["development", "production", "test"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "console"]

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<fallback>[^}]*))?\}")


def _expand_env_vars(value: Any) -> Any:
    """
    Substitute ``${NAME}`` and ``${NAME:fallback}`` references, recursing into
    mappings and lists. An unset variable without a fallback becomes "".
    """
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    return _ENV_REFERENCE.sub(
        lambda match: os.environ.get(match.group("name"), match.group("fallback") or ""),
        value,
    )


@dataclass
class ServerConfig:
    """HTTP API server configuration."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    environment: str = "production"
    max_request_size_mb: int = 10
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def max_request_size_bytes(self) -> int:
        return self.max_request_size_mb * 1024 * 1024


@dataclass
class ExecutorConfig:
    """Outbound request configuration."""

    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    follow_redirects: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "json"  # "json" or "console"


@dataclass
class ReqlineConfig:
    """Main Reqline configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    executor: ExecutorConfig = field(default_factory=ExecutorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.reqline/config.yaml")


def get_default_config() -> ReqlineConfig:
    """
    Get default configuration.

    The PORT and REQLINE_ENV environment variables override the default port
    and environment.

    Returns:
        ReqlineConfig: Default configuration object
    """
    server = ServerConfig(
        port=_int_value(os.environ.get("PORT", DEFAULT_PORT), "server.port"),
        environment=os.environ.get("REQLINE_ENV", "production"),
    )
    return ReqlineConfig(server=server)


def load_config(config_path: Optional[str] = None) -> ReqlineConfig:
    """
    Load and validate configuration.

    A missing or empty file yields the defaults. Any other problem with the
    file, whether unreadable, not YAML, or holding bad values, is fatal.

    Args:
        config_path: YAML file to read (default: ``get_default_config_path()``)

    Returns:
        ReqlineConfig: Validated configuration

    Raises:
        InvalidConfigurationError: If the file cannot be used
    """
    config_path = os.path.expanduser(str(config_path or get_default_config_path()))
    config_data = _read_config_file(config_path)

    try:
        if config_data is None:
            config = get_default_config()
        else:
            config = _build_config_from_dict(_expand_env_vars(config_data))
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error("invalid_configuration", path=config_path, reason=str(e))
        raise InvalidConfigurationError(f"Invalid configuration in '{config_path}': {e}")

    logger.debug("configuration_loaded", path=config_path, defaults=config_data is None)
    return config


def _read_config_file(config_path: str) -> Optional[Dict[str, Any]]:
    """Return the parsed top-level mapping, or None when there is nothing to read."""
    if not os.path.exists(config_path):
        logger.info(f"No configuration file at {config_path}, using defaults")
        return None

    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        raise InvalidConfigurationError(f"Cannot load configuration file '{config_path}': {e}")

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return None
    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': top level must be a mapping"
        )
    return config_data


def _int_value(value: Any, name: str) -> int:
    # Values expanded from ${VAR} arrive as strings.
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")


def _bool_value(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise InvalidConfigurationError(f"{name} must be a boolean, got {value!r}")


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _build_config_from_dict(config_data: Dict[str, Any]) -> ReqlineConfig:
    """
    Build ReqlineConfig from dictionary loaded from YAML.

    Merges user configuration with defaults.

    Args:
        config_data: Dictionary loaded from YAML file

    Returns:
        ReqlineConfig: Configuration object
    """
    default_config = get_default_config()

    server_data = _section(config_data, 'server')
    origins = server_data.get('cors_allow_origins', default_config.server.cors_allow_origins)
    if isinstance(origins, str):
        origins = [origin.strip() for origin in origins.split(",") if origin.strip()]
    server = ServerConfig(
        host=server_data.get('host', default_config.server.host),
        port=_int_value(server_data.get('port', default_config.server.port), "server.port"),
        environment=server_data.get('environment', default_config.server.environment),
        max_request_size_mb=_int_value(
            server_data.get('max_request_size_mb', default_config.server.max_request_size_mb),
            "server.max_request_size_mb",
        ),
        cors_allow_origins=list(origins),
    )

    executor_data = _section(config_data, 'executor')
    executor = ExecutorConfig(
        request_timeout_ms=_int_value(
            executor_data.get('request_timeout_ms', default_config.executor.request_timeout_ms),
            "executor.request_timeout_ms",
        ),
        follow_redirects=_bool_value(
            executor_data.get('follow_redirects', default_config.executor.follow_redirects),
            "executor.follow_redirects",
        ),
    )

    logging_data = _section(config_data, 'logging')
    logging = LoggingConfig(
        level=logging_data.get('level', default_config.logging.level),
        file=os.path.expanduser(logging_data.get('file', default_config.logging.file) or ""),
        format=logging_data.get('format', default_config.logging.format),
    )

    return ReqlineConfig(
        server=server,
        executor=executor,
        logging=logging,
    )


def _validate_config(config: ReqlineConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if not 1 <= config.server.port <= 65535:
        raise InvalidConfigurationError(
            f"port must be between 1 and 65535, got {config.server.port}"
        )

    if config.server.environment not in VALID_ENVIRONMENTS:
        raise InvalidConfigurationError(
            f"environment must be one of {VALID_ENVIRONMENTS}, "
            f"got '{config.server.environment}'"
        )

    if config.server.max_request_size_mb <= 0:
        raise InvalidConfigurationError(
            f"max_request_size_mb must be positive, got {config.server.max_request_size_mb}"
        )

    if config.executor.request_timeout_ms <= 0:
        raise InvalidConfigurationError(
            f"request_timeout_ms must be positive, got {config.executor.request_timeout_ms}"
        )

    if str(config.logging.level).upper() not in VALID_LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging level must be one of {VALID_LOG_LEVELS}, "
            f"got '{config.logging.level}'"
        )

    if config.logging.format not in VALID_LOG_FORMATS:
        raise InvalidConfigurationError(
            f"logging format must be one of {VALID_LOG_FORMATS}, "
            f"got '{config.logging.format}'"
        )

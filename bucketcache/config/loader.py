"""
bucketcache — Configuration Loader

Loads and validates settings from environment variables and .env files.
Provides a singleton settings instance used for bucket defaults.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import DEFAULT_ENGINE, DEFAULT_TTL, CacheSettings

logger = logging.getLogger(__name__)

_config_instance: CacheSettings | None = None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> CacheSettings:
    """
    Load settings from environment variables and an optional .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if settings were already loaded

    Returns:
        Validated CacheSettings instance

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info("Loading environment from %s", env_path)
        load_dotenv(env_path, override=True)
    else:
        logger.debug("No .env file found, using environment variables only")

    redis_url = os.getenv("REDIS_URL")

    try:
        ttl = float(os.getenv("BUCKETCACHE_TTL", str(DEFAULT_TTL)))
        config_dict = {
            "environment": os.getenv("ENVIRONMENT", "development"),
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "bucket": {
                "engine": os.getenv("BUCKETCACHE_ENGINE", DEFAULT_ENGINE),
                "ttl": int(ttl) if ttl.is_integer() else ttl,
                "redis_url": redis_url,
                "redis_max_connections": int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
                "redis_socket_timeout": int(os.getenv("REDIS_SOCKET_TIMEOUT", "5")),
            },
        }
        _config_instance = CacheSettings(**config_dict)  # type: ignore[arg-type]
    except ValidationError as e:
        logger.error(
            "Configuration validation failed: %s",
            e,
            extra={"validation_errors": e.errors()},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables.",
            details={"validation_errors": e.errors()},
        ) from e
    except ValueError as e:
        logger.error("Invalid numeric setting in environment: %s", e, extra={"error": str(e)})
        raise ConfigurationError(
            f"Failed to load configuration: {e}",
            details={"error": str(e)},
        ) from e

    logger.debug(
        "Configuration loaded (environment: %s)",
        _config_instance.environment,
        extra={"environment": _config_instance.environment, "engine": _config_instance.bucket.engine},
    )
    return _config_instance


def get_config() -> CacheSettings:
    """Return the current settings, loading them on first access."""
    if _config_instance is None:
        return load_config()
    return _config_instance


def reload_config(env_file: str | None = None) -> CacheSettings:
    """Force reload settings."""
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """
    Drop the cached settings instance.

    Intended for tests that change environment variables between cases.
    """
    global _config_instance
    _config_instance = None


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging for applications embedding bucketcache.

    The library never calls this itself.

    Args:
        level: Log level name (default: settings log_level)
    """
    logging.basicConfig(
        level=level or get_config().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

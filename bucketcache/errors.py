"""
bucketcache — Error Types

Defines the exception hierarchy raised by the bucket facade itself.
Errors reported by engines are never wrapped; they reach the caller as-is.
"""

from typing import Any


class BucketCacheError(Exception):
    """Base exception for all bucketcache errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging or API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(BucketCacheError):
    """Raised when a bucket or engine is constructed with malformed arguments."""


class ConfigurationError(BucketCacheError):
    """Raised when settings are invalid or an engine is misconfigured."""


class MissingDependencyError(BucketCacheError):
    """Raised when a named engine implementation cannot be imported."""

    def __init__(
        self,
        package: str,
        feature: str | None = None,
        install_hint: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        if feature:
            message = f"Missing required module '{package}' for {feature}"
        else:
            message = f"Missing required module '{package}'"

        if install_hint:
            message += f". Install with: {install_hint}"

        error_details = details or {}
        error_details.update(
            {
                "package": package,
                "feature": feature,
                "install_hint": install_hint,
            }
        )

        super().__init__(message, error_details)
        self.package = package


__all__ = [
    "BucketCacheError",
    "ConfigurationError",
    "InvalidArgumentError",
    "MissingDependencyError",
]

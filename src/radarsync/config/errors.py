"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid or a run is set up unsafely."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required environment variables are absent or blank."""


class InvalidIdentifierError(ConfigurationError):
    """Raised when a configured playlist or artist id cannot be parsed."""

    def __init__(self, source: str, value: str, reason: str) -> None:
        self.source = source
        self.value = value
        super().__init__(f"{source} is not a valid id ({value!r}): {reason}")

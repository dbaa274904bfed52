"""Exception classes for version calculation."""

from typing import Optional


class VersionModifierError(Exception):
    """Base exception for all version-modification errors."""


class ConfigurationError(VersionModifierError):
    """Raised when the configured version suffix cannot be interpreted."""

    def __init__(self, suffix: Optional[str], message: str = ""):
        self.suffix = suffix
        if message:
            super().__init__(f"Invalid version suffix '{suffix}': {message}")
        else:
            super().__init__(f"Invalid version suffix '{suffix}'")


class MetadataReadError(VersionModifierError):
    """Raised when repository metadata cannot be fetched or read."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(
            f"Cannot read metadata from: {location} to determine last "
            f"version-suffix serial number. Error: {reason}"
        )


class MetadataParseError(VersionModifierError):
    """Raised when repository metadata is not well-formed."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(
            f"Cannot parse metadata from: {location} to determine last "
            f"version-suffix serial number. Error: {reason}"
        )

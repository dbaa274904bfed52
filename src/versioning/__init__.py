"""Version-suffix calculation for multi-artifact builds."""

from .calculator import VersionCalculator
from .errors import ConfigurationError, MetadataParseError, MetadataReadError, VersionModifierError
from .models import ArtifactRef, PublishedVersionsSource, VersionCalculation, VersioningConfig
from .service import VersioningService, reconcile_incremental_qualifiers

__all__ = [
    "ArtifactRef",
    "ConfigurationError",
    "MetadataParseError",
    "MetadataReadError",
    "PublishedVersionsSource",
    "VersionCalculation",
    "VersionCalculator",
    "VersionModifierError",
    "VersioningConfig",
    "VersioningService",
    "reconcile_incremental_qualifiers",
]

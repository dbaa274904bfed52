"""Per-artifact version-suffix calculation.

Given an artifact's current version and the build's suffix policy, work out
the base version, the suffix to append, the serial number to use in
incremental mode and whether ``-SNAPSHOT`` must be restored.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from .errors import ConfigurationError
from .models import PublishedVersionsSource, VersionCalculation, VersioningConfig
from .pattern import find_suffix, has_numeric_tail, match_suffix

logger = logging.getLogger(__name__)


class VersionCalculator:
    """Computes a ``VersionCalculation`` for one artifact at a time.

    Args:
        config: Build-wide suffix policy.
        source: Published-versions lookup, consulted only in incremental mode.
    """

    def __init__(self, config: VersioningConfig, source: Optional[PublishedVersionsSource] = None):
        self.config = config
        self.source = source

    def calculate(self, group_id: str, artifact_id: str, original_version: str) -> VersionCalculation:
        """Calculate the new version of ``group_id:artifact_id``.

        Raises:
            ConfigurationError: the configured suffix has an unexpected shape.
            MetadataReadError, MetadataParseError: propagated from the
                published-versions lookup.
        """
        base_version = original_version

        snapshot = False
        if base_version.endswith(Constants.SNAPSHOT_SUFFIX):
            snapshot = True
            base_version = base_version[: -len(Constants.SNAPSHOT_SUFFIX)]

        vc = VersionCalculation(original_version, base_version)

        suffix = self.config.effective_suffix
        logger.debug(
            "Got the following version suffixes: static=%s incremental=%s",
            self.config.suffix,
            self.config.incremental_suffix,
        )
        if suffix is None:
            return vc

        match = match_suffix(suffix)
        if match is None:
            # Already carries the literal suffix: nothing to do.
            if base_version.endswith(suffix):
                vc.clear()
                return vc
            raise ConfigurationError(suffix, "expected <name>[-.<digits>]")

        suffix_base = match.base
        sep = match.separator or Constants.DEFAULT_SUFFIX_SEPARATOR

        idx = base_version.find(suffix_base)
        # Need room for at least one base character plus a separator.
        if idx > 1:
            base_version = base_version[: idx - 1]
            vc.base_version = base_version
            logger.debug("Trimmed version (without pre-existing suffix): %s", base_version)

        if suffix == self.config.incremental_suffix:
            vc.version_suffix = suffix_base
            candidates = self._version_candidates(group_id, artifact_id, original_version)
            max_serial, sep = self._max_serial(candidates, base_version, sep)
            vc.suffix_separator = sep
            vc.incremental_qualifier = max_serial + 1
        else:
            vc.version_suffix = suffix

        # Versions already ending in a dashed number take the suffix as a
        # dotted qualifier segment.
        vc.base_version_separator = "." if has_numeric_tail(base_version) else "-"
        vc.snapshot = self.config.preserve_snapshot and snapshot

        if is_debug_enabled(logger):
            logger.debug(
                "Calculated version",
                extra=extra_context(
                    event="calculation",
                    component="calculator",
                    target=f"{group_id}:{artifact_id}",
                    original=original_version,
                    rendered=vc.render_version(),
                ),
            )
        return vc

    def _version_candidates(self, group_id: str, artifact_id: str, original_version: str) -> List[str]:
        candidates = [original_version]
        if self.source is not None:
            logger.debug("Resolving suffixes already found in metadata to determine increment base.")
            candidates.extend(sorted(self.source.published_versions(group_id, artifact_id)))
        return candidates

    @staticmethod
    def _max_serial(candidates: List[str], base_version: str, sep: str) -> Tuple[int, str]:
        """Return ``(max_serial, separator)`` over candidates sharing ``base_version``."""
        max_serial = 0
        for version in candidates:
            found = find_suffix(version)
            if found is None:
                continue
            if found.start < 2:
                logger.debug(
                    "Ignoring invalid version: '%s' (seems to be naked version suffix with no base).",
                    version,
                )
                continue

            base = version[: found.start - 1]
            if base != base_version:
                logger.debug(
                    "Ignoring irrelevant version: '%s' ('%s' doesn't match on base-version: '%s').",
                    version,
                    base,
                    base_version,
                )
                continue

            serial = found.serial or 0
            if serial > max_serial:
                logger.debug("new max serial number: %s (previous was: %s)", serial, max_serial)
                max_serial = serial
                # don't assume '-' between suffix base and serial
                sep = found.separator or sep
        return max_serial, sep

"""Batch version calculation across every artifact of a build.

Runs in two phases: a per-artifact calculation that may run in a thread pool,
then a reconciliation barrier that gives every incremental result the same
serial before anything is rendered.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from .calculator import VersionCalculator
from .models import ArtifactRef, PublishedVersionsSource, VersionCalculation, VersioningConfig

logger = logging.getLogger(__name__)


def reconcile_incremental_qualifiers(calculations: Mapping[str, VersionCalculation]) -> Optional[int]:
    """Give every incremental calculation the highest qualifier among them.

    Returns the shared qualifier, or None when nothing is incremental.
    """
    incremental = [calc for calc in calculations.values() if calc.is_incremental]
    if not incremental:
        return None
    max_qualifier = max(calc.incremental_qualifier for calc in incremental)
    for calc in incremental:
        calc.incremental_qualifier = max_qualifier
    return max_qualifier


class VersioningService:
    """Computes the version changes for one build.

    Args:
        config: Build-wide suffix policy.
        source: Published-versions lookup for incremental mode.
        max_workers: Threads used for per-artifact calculation; 1 runs inline.
    """

    def __init__(
        self,
        config: VersioningConfig,
        source: Optional[PublishedVersionsSource] = None,
        max_workers: int = Constants.MAX_WORKERS,
    ):
        self.config = config
        self.calculator = VersionCalculator(config, source)
        self.max_workers = max(1, int(max_workers))

    def calculate_versioning_changes(self, artifacts: Iterable[ArtifactRef]) -> Dict[str, str]:
        """Return ``{groupId:artifactId: new version}`` for artifacts needing a change."""
        if not self.config.enabled:
            logger.info("Version modification disabled; no suffix configured or build already processed.")
            return {}

        artifacts = list(artifacts)
        with Timer() as t:
            results = self._calculate_all(artifacts)

        calculations: Dict[str, VersionCalculation] = {}
        for artifact, calc in results:
            logger.info(
                "Modifying version of: %s\n    from: %s\n    to: %s",
                artifact.ga,
                artifact.version,
                calc,
            )
            if calc.has_calculation:
                calculations[artifact.ga] = calc

        shared = reconcile_incremental_qualifiers(calculations)
        if shared is not None:
            logger.debug("Using incremental qualifier %s for %d artifact(s)", shared, len(calculations))

        changes = {ga: calc.render_version() for ga, calc in calculations.items()}
        if is_debug_enabled(logger):
            logger.debug(
                "Versioning changes calculated",
                extra=extra_context(
                    event="batch_complete",
                    component="service",
                    artifacts=len(artifacts),
                    changed=len(changes),
                    duration_ms=t.duration_ms(),
                ),
            )
        return changes

    def _calculate_all(self, artifacts: List[ArtifactRef]) -> List[Tuple[ArtifactRef, VersionCalculation]]:
        if self.max_workers == 1 or len(artifacts) < 2:
            return [(a, self._calculate(a)) for a in artifacts]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: List[Tuple[ArtifactRef, Future]] = [
                (a, executor.submit(self._calculate, a)) for a in artifacts
            ]
            # result() re-raises the first failure in input order
            return [(a, future.result()) for a, future in futures]

    def _calculate(self, artifact: ArtifactRef) -> VersionCalculation:
        return self.calculator.calculate(artifact.group_id, artifact.artifact_id, artifact.version)

"""Data models for version-suffix calculation."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence, Set, Tuple

from constants import Constants


def parse_bool(value: Optional[str]) -> bool:
    """Only a case-insensitive ``"true"`` is true, as Maven user properties read."""
    return value is not None and str(value).strip().lower() == "true"


@dataclass(frozen=True)
class ArtifactRef:
    """One artifact of the build: Maven coordinates plus its current version."""
    group_id: str
    artifact_id: str
    version: str

    @property
    def ga(self) -> str:
        """Colon-joined ``groupId:artifactId`` key."""
        return f"{self.group_id}:{self.artifact_id}"

    @classmethod
    def parse(cls, token: str) -> "ArtifactRef":
        """Parse a ``groupId:artifactId:version`` token."""
        parts = [p.strip() for p in token.strip().split(":")]
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Expected groupId:artifactId:version, got '{token}'")
        return cls(parts[0], parts[1], parts[2])


@dataclass(frozen=True)
class VersioningConfig:
    """Build-wide suffix policy, populated once and read-only afterwards."""
    suffix: Optional[str] = None
    incremental_suffix: Optional[str] = None
    preserve_snapshot: bool = False
    marker_file: Optional[str] = None
    remote_repositories: Tuple[str, ...] = ()

    @property
    def effective_suffix(self) -> Optional[str]:
        """Static suffix if configured, else the incremental suffix base."""
        return self.suffix if self.suffix is not None else self.incremental_suffix

    @property
    def enabled(self) -> bool:
        """A suffix is configured and the build has not been processed yet."""
        if self.effective_suffix is None:
            return False
        return not (self.marker_file and os.path.exists(self.marker_file))

    @classmethod
    def from_properties(
        cls,
        props: Mapping[str, str],
        project_dir: Optional[str] = None,
        repositories: Sequence[str] = (),
    ) -> "VersioningConfig":
        """Build a config from Maven-style user properties.

        ``project_dir`` locates the ``target/versioning.log`` marker; without
        it no marker is checked.
        """
        marker = os.path.join(project_dir, Constants.MARKER_FILE) if project_dir else None
        return cls(
            suffix=props.get(Constants.VERSION_SUFFIX_PROP) or None,
            incremental_suffix=props.get(Constants.INCREMENT_SERIAL_SUFFIX_PROP) or None,
            preserve_snapshot=parse_bool(props.get(Constants.VERSION_SUFFIX_SNAPSHOT_PROP)),
            marker_file=marker,
            remote_repositories=tuple(repositories),
        )


class PublishedVersionsSource(Protocol):
    """Supplies every version already published for a coordinate."""

    def published_versions(self, group_id: str, artifact_id: str) -> Set[str]:
        ...


class VersionCalculation:
    """The computed parts of one artifact's new version."""

    def __init__(self, original_version: str, base_version: str):
        self.original_version = original_version
        self.base_version = base_version
        self.base_version_separator = "-"
        self.version_suffix: Optional[str] = None
        self.suffix_separator = Constants.DEFAULT_SUFFIX_SEPARATOR
        self.incremental_qualifier = 0
        self.snapshot = False

    @property
    def has_calculation(self) -> bool:
        return self.version_suffix is not None

    @property
    def is_incremental(self) -> bool:
        return self.incremental_qualifier > 0

    def clear(self) -> None:
        """Drop every computed part so the original version renders unchanged."""
        self.base_version = self.original_version
        self.base_version_separator = "-"
        self.version_suffix = None
        self.suffix_separator = Constants.DEFAULT_SUFFIX_SEPARATOR
        self.incremental_qualifier = 0
        self.snapshot = False

    def render_version(self) -> str:
        if not self.has_calculation:
            return self.original_version
        parts = [self.base_version, self.base_version_separator, self.version_suffix]
        if self.is_incremental:
            parts.extend([self.suffix_separator, str(self.incremental_qualifier)])
        if self.snapshot:
            parts.append(Constants.SNAPSHOT_SUFFIX)
        return "".join(parts)

    def __str__(self) -> str:
        return self.render_version()

    def __repr__(self) -> str:
        return (
            f"VersionCalculation(original={self.original_version!r}, "
            f"rendered={self.render_version()!r})"
        )

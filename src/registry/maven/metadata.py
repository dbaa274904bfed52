"""Maven repository metadata client.

Reads ``maven-metadata.xml`` for a ``groupId:artifactId`` from every configured
repository and returns the union of the published versions. Repositories may
be HTTP(S) base URLs, ``file://`` URLs or local directory paths.
"""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from typing import Iterable, List, Set
from urllib.parse import unquote, urlsplit

from constants import Constants
from common.http_client import robust_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.errors import MetadataParseError, MetadataReadError

logger = logging.getLogger(__name__)


def metadata_path(group_id: str, artifact_id: str) -> str:
    """Repository-relative path of the artifact-level metadata file."""
    return f"{group_id.replace('.', '/')}/{artifact_id}/{Constants.METADATA_FILE}"


def parse_metadata_versions(text: str, location: str) -> List[str]:
    """Extract ``versioning/versions/version`` entries from metadata XML.

    Raises:
        MetadataParseError: ``text`` is not well-formed XML.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MetadataParseError(location, str(exc)) from exc

    # Metadata may declare a default namespace (METADATA/1.1.0); match on it.
    ns = root.tag[: root.tag.index("}") + 1] if root.tag.startswith("{") else ""

    versions: List[str] = []
    for version_elem in root.findall(f"{ns}versioning/{ns}versions/{ns}version"):
        ver_text = version_elem.text
        if ver_text and ver_text.strip():
            versions.append(ver_text.strip())
    return versions


def _local_root(repository: str):
    """Return the filesystem root of a local repository, or None for remote ones."""
    parts = urlsplit(repository)
    if parts.scheme in ("http", "https"):
        return None
    if parts.scheme == "file":
        return unquote(parts.path)
    return repository


class MavenMetadataClient:
    """Published-versions lookup backed by Maven repository metadata.

    Args:
        repositories: Repository base URLs or local paths, searched in order.
    """

    def __init__(self, repositories: Iterable[str] = (Constants.REPOSITORY_URL_MAVEN_CENTRAL,)):
        self.repositories = [r.rstrip("/") for r in repositories if r and r.strip()]

    def published_versions(self, group_id: str, artifact_id: str) -> Set[str]:
        """Union of versions published for the coordinate across all repositories.

        Raises:
            MetadataReadError: a repository could not be read.
            MetadataParseError: a repository returned malformed metadata.
        """
        logger.debug("Reading available versions from repository metadata for: %s:%s", group_id, artifact_id)
        versions: Set[str] = set()
        for repository in self.repositories:
            logger.debug("Checking: %s", safe_url(repository))
            versions.update(self._resolve(repository, group_id, artifact_id))
        return versions

    def _resolve(self, repository: str, group_id: str, artifact_id: str) -> List[str]:
        relative = metadata_path(group_id, artifact_id)
        local_root = _local_root(repository)
        if local_root is not None:
            return self._read_local(os.path.join(local_root, *relative.split("/")))
        return self._read_remote(f"{repository}/{relative}")

    def _read_local(self, path: str) -> List[str]:
        if not os.path.isfile(path):
            logger.debug("No metadata at %s", path)
            return []
        try:
            with open(path, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as exc:
            raise MetadataReadError(path, str(exc)) from exc
        logger.debug("Reading: %s", path)
        return self._log_versions(parse_metadata_versions(text, path), path)

    def _read_remote(self, url: str) -> List[str]:
        target = safe_url(url)
        status_code, _, text = robust_get(url)
        if status_code == 404:
            logger.debug("No metadata at %s", target)
            return []
        if status_code != 200:
            logger.error(
                "Failed to resolve metadata",
                extra=extra_context(
                    event="http_response",
                    component="metadata",
                    outcome="error",
                    status_code=status_code,
                    target=target,
                ),
            )
            reason = text if status_code == 0 else f"HTTP {status_code}"
            raise MetadataReadError(target, reason)
        return self._log_versions(parse_metadata_versions(text, target), target)

    @staticmethod
    def _log_versions(versions: List[str], location: str) -> List[str]:
        if is_debug_enabled(logger):
            logger.debug(
                "Got versions: %s",
                versions,
                extra=extra_context(
                    event="metadata_versions",
                    component="metadata",
                    target=location,
                    count=len(versions),
                ),
            )
        return versions

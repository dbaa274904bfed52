"""Configuration assembly for the CLI.

Merges, lowest to highest precedence: built-in defaults, the YAML config file,
``-D`` user properties and explicit CLI flags. The result is a single
immutable ``VersioningConfig`` handed to the service.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from constants import Constants
from versioning.errors import ConfigurationError
from versioning.models import VersioningConfig

logger = logging.getLogger(__name__)

# YAML ``versioning:`` keys mapped to Maven user property names
_YAML_PROPERTY_KEYS = {
    "suffix": Constants.VERSION_SUFFIX_PROP,
    "incremental_suffix": Constants.INCREMENT_SERIAL_SUFFIX_PROP,
    "preserve_snapshot": Constants.VERSION_SUFFIX_SNAPSHOT_PROP,
}

# YAML ``http:`` keys mapped to Constants attributes
_HTTP_TUNABLES = {
    "timeout": "REQUEST_TIMEOUT",
    "retries": "HTTP_RETRY_MAX",
    "cache_ttl": "HTTP_CACHE_TTL_SEC",
}


def parse_defines(defines: Iterable[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` tokens into a dict; later keys win."""
    props: Dict[str, str] = {}
    for token in defines or []:
        key, sep, value = token.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(token, "user properties must be given as KEY=VALUE")
        props[key] = value.strip()
    return props


def _section(cfg: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = cfg.get(name) if isinstance(cfg, Mapping) else None
    return section if isinstance(section, Mapping) else {}


def apply_http_overrides(cfg: Mapping[str, Any]) -> None:
    """Apply the ``http:`` section of the config file to ``Constants``."""
    for key, attr in _HTTP_TUNABLES.items():
        value = _section(cfg, "http").get(key)
        if value is None:
            continue
        try:
            setattr(Constants, attr, int(value))
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer http.%s value: %r", key, value)


def build_versioning_config(args, file_cfg: Optional[Mapping[str, Any]] = None) -> VersioningConfig:
    """Build the effective ``VersioningConfig`` from CLI args and config file."""
    section = _section(file_cfg or {}, "versioning")

    props: Dict[str, str] = {}
    for key, prop in _YAML_PROPERTY_KEYS.items():
        if section.get(key) is not None:
            value = section[key]
            props[prop] = str(value).lower() if isinstance(value, bool) else str(value)
    props.update(parse_defines(getattr(args, "DEFINES", None) or []))

    if getattr(args, "SUFFIX", None):
        props[Constants.VERSION_SUFFIX_PROP] = args.SUFFIX
    if getattr(args, "INCREMENTAL_SUFFIX", None):
        props[Constants.INCREMENT_SERIAL_SUFFIX_PROP] = args.INCREMENTAL_SUFFIX
    if getattr(args, "PRESERVE_SNAPSHOT", False):
        props[Constants.VERSION_SUFFIX_SNAPSHOT_PROP] = "true"

    repositories = getattr(args, "REPOSITORIES", None) or section.get("repositories")
    if not repositories:
        repositories = [Constants.REPOSITORY_URL_MAVEN_CENTRAL]
    elif isinstance(repositories, str):
        repositories = [repositories]

    project_dir = getattr(args, "PROJECT_DIR", None) or section.get("project_dir")

    config = VersioningConfig.from_properties(props, project_dir=project_dir, repositories=repositories)
    logger.debug(
        "Effective versioning config: suffix=%s incremental=%s preserve_snapshot=%s repositories=%d",
        config.suffix,
        config.incremental_suffix,
        config.preserve_snapshot,
        len(config.remote_repositories),
    )
    return config


def resolve_jobs(args, file_cfg: Optional[Mapping[str, Any]] = None) -> int:
    """Worker count: CLI ``--jobs``, else ``versioning.jobs``, else the default."""
    jobs = getattr(args, "JOBS", None)
    if jobs is None:
        jobs = _section(file_cfg or {}, "versioning").get("jobs", Constants.MAX_WORKERS)
    try:
        return max(1, int(jobs))
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid jobs value: %r", jobs)
        return Constants.MAX_WORKERS

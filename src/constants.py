"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    CONFIG_ERROR = 3
    METADATA_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SNAPSHOT_SUFFIX = "-SNAPSHOT"
    SERIAL_SUFFIX_PATTERN = r"([^-.]+)(?:([-.])(\d+))?$"
    DEFAULT_SUFFIX_SEPARATOR = "-"

    # Maven user properties
    VERSION_SUFFIX_PROP = "version.suffix"
    INCREMENT_SERIAL_SUFFIX_PROP = "version.incremental.suffix"
    VERSION_SUFFIX_SNAPSHOT_PROP = "version.suffix.snapshot"

    MARKER_FILE = os.path.join("target", "versioning.log")
    METADATA_FILE = "maven-metadata.xml"
    REPOSITORY_URL_MAVEN_CENTRAL = "https://repo1.maven.org/maven2"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "VERSUFFIX_LOG_LEVEL"
    CONFIG_ENV = "VERSUFFIX_CONFIG"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300
    MAX_WORKERS = 1


DEFAULT_CONFIG_PATHS = (
    "versuffix.yml",
    "versuffix.yaml",
    os.path.join("~", ".config", "versuffix", "versuffix.yml"),
)


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the first YAML configuration file found.

    Lookup order: explicit ``path``, ``$VERSUFFIX_CONFIG``, then
    ``DEFAULT_CONFIG_PATHS``. A missing file yields an empty dict; a file that
    exists but cannot be parsed is logged and ignored.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = []
    if path:
        candidates.append(path)
    env_path = os.environ.get(Constants.CONFIG_ENV)
    if env_path:
        candidates.append(env_path)
    candidates.extend(DEFAULT_CONFIG_PATHS)

    for candidate in candidates:
        full = os.path.expanduser(candidate)
        if not os.path.isfile(full):
            continue
        try:
            with open(full, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", full, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top level is not a mapping", full)
            return {}
        logger.debug("Loaded configuration from %s", full)
        return data
    return {}

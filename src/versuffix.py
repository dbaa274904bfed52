"""versuffix - compute suffixed versions for the artifacts of a build.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import ExitCodes, _load_yaml_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import apply_http_overrides, build_versioning_config, resolve_jobs
from registry.maven.metadata import MavenMetadataClient
from versioning.errors import ConfigurationError, MetadataParseError, MetadataReadError
from versioning.models import ArtifactRef
from versioning.service import VersioningService

logger = logging.getLogger(__name__)


def load_artifacts_file(file_name):
    """Loads ``groupId:artifactId:version`` lines from a file.

    Blank lines and lines starting with ``#`` are skipped.

    Args:
        file_name (str): File path containing the list of artifacts.

    Returns:
        list: List of artifact tokens
    """
    try:
        with open(file_name, encoding='utf-8') as file:
            return [line.strip() for line in file if line.strip() and not line.strip().startswith("#")]
    except FileNotFoundError as e:
        logging.error("File not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except IOError as e:
        logging.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def build_artifact_list(args):
    """Build the artifact list from ``-p`` tokens or a ``-l`` file."""
    tokens = args.ARTIFACTS or load_artifacts_file(args.LIST_FROM_FILE)
    artifacts = []
    for token in tokens:
        try:
            artifacts.append(ArtifactRef.parse(token))
        except ValueError as e:
            logging.error("%s, aborting", e)
            sys.exit(ExitCodes.FILE_ERROR.value)
    return artifacts


def write_output(changes, path=None):
    """Write the version map as JSON to ``path`` or stdout."""
    payload = json.dumps(changes, indent=2, sort_keys=True)
    if not path:
        sys.stdout.write(payload + "\n")
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            file.write(payload + "\n")
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _setup_logging(args):
    if getattr(args, "LOG_LEVEL", None):
        os.environ['VERSUFFIX_LOG_LEVEL'] = str(args.LOG_LEVEL).upper()
    configure_logging()
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def run(args):
    """Run one calculation pass and return the exit code."""
    config_path = getattr(args, "CONFIG", None)
    if config_path and not os.path.isfile(config_path):
        logging.error("Config file not found: %s, aborting", config_path)
        return ExitCodes.FILE_ERROR.value
    file_cfg = _load_yaml_config(config_path)
    apply_http_overrides(file_cfg)

    try:
        config = build_versioning_config(args, file_cfg)
    except ConfigurationError as e:
        logging.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value

    artifacts = build_artifact_list(args)
    if is_debug_enabled(logger):
        logger.debug(
            "Built artifact list",
            extra=extra_context(event="decision", component="cli", action="build_artifact_list", count=len(artifacts)),
        )

    service = VersioningService(
        config,
        MavenMetadataClient(config.remote_repositories),
        max_workers=resolve_jobs(args, file_cfg),
    )
    try:
        changes = service.calculate_versioning_changes(artifacts)
    except ConfigurationError as e:
        logging.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value
    except MetadataReadError as e:
        logging.error("%s", e)
        return ExitCodes.CONNECTION_ERROR.value
    except MetadataParseError as e:
        logging.error("%s", e)
        return ExitCodes.METADATA_ERROR.value

    write_output(changes, getattr(args, "OUTPUT", None))
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    sys.exit(run(args))


if __name__ == "__main__":
    main()

"""Argument parsing functionality for versuffix."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="versuffix",
        description=(
            "versuffix - compute suffixed versions for the artifacts of a build"
        ),
        add_help=True,
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("-p", "--artifact",
                             dest="ARTIFACTS",
                             help="Artifact as groupId:artifactId:version (repeatable)",
                             action="append", type=str)
    input_group.add_argument("-l", "--load_list",
                             dest="LIST_FROM_FILE",
                             help="Load groupId:artifactId:version lines from a file",
                             action="store", type=str)

    parser.add_argument("--suffix",
                        dest="SUFFIX",
                        help="Static version suffix, e.g. redhat-4",
                        action="store", type=str)
    parser.add_argument("--incremental-suffix",
                        dest="INCREMENTAL_SUFFIX",
                        help="Suffix base whose serial is incremented, e.g. redhat",
                        action="store", type=str)
    parser.add_argument("--preserve-snapshot",
                        dest="PRESERVE_SNAPSHOT",
                        help="Keep -SNAPSHOT on versions that have it",
                        action="store_true")
    parser.add_argument("-D", "--define",
                        dest="DEFINES",
                        help=(
                            "User property KEY=VALUE, e.g. "
                            f"{Constants.VERSION_SUFFIX_PROP}=redhat-1 (repeatable)"
                        ),
                        action="append", type=str,
                        default=[])
    parser.add_argument("-r", "--repository",
                        dest="REPOSITORIES",
                        help="Repository URL or local path to read metadata from (repeatable)",
                        action="append", type=str)
    parser.add_argument("--project-dir",
                        dest="PROJECT_DIR",
                        help="Project directory holding target/versioning.log",
                        action="store", type=str)
    parser.add_argument("-j", "--jobs",
                        dest="JOBS",
                        help="Number of artifacts calculated concurrently",
                        action="store", type=int)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to JSON output file (stdout if omitted)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)

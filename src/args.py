"""Argument parsing functionality for modweaver."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="modweaver",
        description=(
            "modweaver - Resolve artifact placeholders in module descriptor templates"
        ),
        add_help=True,
    )

    parser.add_argument("-s", "--source",
                        dest="SOURCE",
                        help="Directory containing module templates",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Directory receiving processed modules",
                        action="store", type=str,
                        required=True)
    parser.add_argument("--versions",
                        dest="VERSIONS",
                        help="Version table file (.properties or YAML)",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-m", "--mode",
                        dest="MODE",
                        help="Packaging mode: fat embeds artifacts, thin keeps coordinates (default: from config, else thin)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_MODES)
    parser.add_argument("--local-repository",
                        dest="LOCAL_REPOSITORY",
                        help="Maven-layout local repository (default: ~/.m2/repository)",
                        action="store", type=str)
    parser.add_argument("--channel",
                        dest="CHANNELS",
                        help="Channel definition file or URL; may be repeated",
                        action="append", type=str)
    parser.add_argument("--channel-resolution",
                        dest="CHANNEL_RESOLUTION",
                        help="Honor channel-managed version overrides",
                        action="store_true", default=None)
    parser.add_argument("--require-channel",
                        dest="REQUIRE_CHANNEL",
                        help="Fail unless a channel manages every artifact version",
                        action="store_true", default=None)
    parser.add_argument("--schema-group",
                        dest="SCHEMA_GROUPS",
                        help="groupId whose artifacts ship XML schemas to extract; may be repeated",
                        action="append", type=str)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help="YAML configuration file",
                        action="store", type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: MODWEAVER_LOG_LEVEL or INFO)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)

"""modweaver - resolve artifact placeholders in module descriptor templates.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import load_config, resolve_settings
from channels import ChannelArtifactResolver, load_channels
from coords import ArtifactResolutionError, ChannelResolutionError, ModweaverError, VersionTable
from resolver import LocalRepositoryResolver
from template import SchemaExtractor, SchemaProcessor, process_templates

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def _exit_code_for(exc: BaseException) -> int:
    """Map an error, or the error that caused it, to an exit code."""
    cause = exc
    while cause is not None:
        if isinstance(cause, ChannelResolutionError):
            return ExitCodes.CONNECTION_ERROR.value
        if isinstance(cause, ArtifactResolutionError):
            return ExitCodes.RESOLUTION_ERROR.value
        cause = cause.__cause__
    return ExitCodes.FILE_ERROR.value


def build_resolver(settings):
    """Local repository resolver, wrapped with channels when any are configured."""
    resolver = LocalRepositoryResolver(settings.local_repository)
    if settings.channels:
        return ChannelArtifactResolver(load_channels(settings.channels), resolver)
    return resolver


def run(args) -> int:
    """Run one processing pass and return its exit code."""
    cfg = load_config(args)
    try:
        settings = resolve_settings(args, cfg)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return ExitCodes.FILE_ERROR.value
    if is_debug_enabled(logger):
        logger.debug(
            "Effective settings",
            extra=extra_context(
                event="config",
                component="cli",
                action="resolve_settings",
                mode=settings.mode.value,
                channels=len(settings.channels),
                channel_resolution=settings.channel_resolution,
                require_channel=settings.require_channel,
            )
        )

    try:
        version_table = VersionTable.load(args.VERSIONS)
    except (OSError, ModweaverError) as e:
        logger.error("Cannot load version table %s: %s", args.VERSIONS, e)
        return ExitCodes.FILE_ERROR.value

    try:
        resolver = build_resolver(settings)
    except ChannelResolutionError as e:
        logger.error("%s", e)
        return ExitCodes.CONNECTION_ERROR.value

    if settings.schema_groups:
        schema_processor = SchemaExtractor(
            os.path.join(args.OUTPUT, Constants.SCHEMA_DIR), settings.schema_groups
        )
    else:
        schema_processor = SchemaProcessor()

    try:
        report = process_templates(
            args.SOURCE,
            args.OUTPUT,
            settings.mode,
            version_table,
            resolver,
            schema_processor=schema_processor,
            channel_artifact_resolution=settings.channel_resolution,
            require_channel=settings.require_channel,
        )
    except FileNotFoundError as e:
        logger.error("Template directory not found: %s", e)
        return ExitCodes.FILE_ERROR.value
    except OSError as e:
        logger.error("Cannot copy template files: %s", e)
        return ExitCodes.FILE_ERROR.value
    except ModweaverError as e:
        logger.error("%s", e)
        return _exit_code_for(e)

    logger.info(
        "Processed %d module(s) in %s mode, copied %d file(s), skipped %d non-module descriptor(s)",
        len(report.processed), settings.mode.value, report.copied, report.skipped,
    )
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    sys.exit(run(args))


if __name__ == "__main__":
    main()

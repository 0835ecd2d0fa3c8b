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
    RESOLUTION_ERROR = 3


class PackagingMode(Enum):
    """Packaging strategies applied to module templates.

    Args:
        Enum (string): Packaging strategies supported by the program.
    """

    FAT = "fat"
    THIN = "thin"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_MODES = [
        PackagingMode.FAT.value,
        PackagingMode.THIN.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_CACHE_TTL_SEC = 300

    LOCAL_REPOSITORY = os.path.join(os.path.expanduser("~"), ".m2", "repository")
    DEFAULT_EXTENSION = "jar"
    SCHEMA_DIR = os.path.join("docs", "schema")

    # Module descriptor vocabulary
    MODULE_XML_FILE = "module.xml"
    MODULE_ELEMENT = "module"
    RESOURCES_ELEMENT = "resources"
    ARTIFACT_ELEMENT = "artifact"
    RESOURCE_ROOT_ELEMENT = "resource-root"
    NAME_ATTRIBUTE = "name"
    PATH_ATTRIBUTE = "path"
    VERSION_ATTRIBUTE = "version"
    JANDEX_OPTION = "jandex"

    ENV_CONFIG = "MODWEAVER_CONFIG"
    ENV_LOG_LEVEL = "MODWEAVER_LOG_LEVEL"
    DEFAULT_CONFIG_FILES = [
        "modweaver.yml",
        "modweaver.yaml",
        os.path.join(os.path.expanduser("~"), ".config", "modweaver", "modweaver.yml"),
    ]


# YAML keys that map directly onto Constants attributes
_TUNABLES = {
    "request_timeout": ("REQUEST_TIMEOUT", int),
    "http_retry_max": ("HTTP_RETRY_MAX", int),
    "http_cache_ttl": ("HTTP_CACHE_TTL_SEC", int),
    "local_repository": ("LOCAL_REPOSITORY", str),
}


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the first available YAML configuration file.

    Args:
        path: Explicit configuration path; when omitted the MODWEAVER_CONFIG
            environment variable and the default locations are tried in order.

    Returns:
        Parsed configuration mapping, empty when no file was found.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = [path] if path else [os.environ.get(Constants.ENV_CONFIG)] + Constants.DEFAULT_CONFIG_FILES
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            continue
        with open(candidate, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring configuration %s: top level is not a mapping", candidate)
            return {}
        logger.debug("Loaded configuration from %s", candidate)
        return data
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply recognized tunables from a configuration mapping onto Constants."""
    for key, (attr, cast) in _TUNABLES.items():
        if cfg.get(key) is None:
            continue
        try:
            setattr(Constants, attr, cast(cfg[key]))
        except (TypeError, ValueError):
            logger.warning("Invalid value for %s in configuration: %r", key, cfg[key])

"""CLI configuration: merge YAML configuration with command-line overrides.

CLI flags have the highest precedence, then the configuration file, then the
built-in defaults held in Constants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import Constants, PackagingMode, _load_yaml_config, apply_config

logger = logging.getLogger(__name__)


@dataclass
class RunSettings:
    """Effective settings of one modweaver run."""
    mode: PackagingMode = PackagingMode.THIN
    local_repository: str = Constants.LOCAL_REPOSITORY
    channels: List[str] = field(default_factory=list)
    channel_resolution: bool = False
    require_channel: bool = False
    schema_groups: List[str] = field(default_factory=list)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def load_config(args) -> Dict[str, Any]:
    """Load the YAML configuration named by ``--config`` or found by default."""
    path = getattr(args, "CONFIG", None)
    cfg = _load_yaml_config(path)
    if path and not cfg:
        logger.warning("Configuration file %s is empty or missing", path)
    apply_config(cfg)
    return cfg


def resolve_settings(args, cfg: Optional[Dict[str, Any]] = None) -> RunSettings:
    """Apply CLI overrides on top of configuration values."""
    cfg = cfg or {}

    mode_name = getattr(args, "MODE", None) or cfg.get("mode") or PackagingMode.THIN.value
    try:
        mode = PackagingMode(str(mode_name).lower())
    except ValueError as exc:
        raise ValueError(f"Unsupported packaging mode in configuration: {mode_name}") from exc

    channel_resolution = getattr(args, "CHANNEL_RESOLUTION", None)
    if channel_resolution is None:
        channel_resolution = bool(cfg.get("channel_resolution", False))
    require_channel = getattr(args, "REQUIRE_CHANNEL", None)
    if require_channel is None:
        require_channel = bool(cfg.get("require_channel", False))

    return RunSettings(
        mode=mode,
        local_repository=getattr(args, "LOCAL_REPOSITORY", None) or Constants.LOCAL_REPOSITORY,
        channels=_as_list(getattr(args, "CHANNELS", None)) or _as_list(cfg.get("channels")),
        channel_resolution=channel_resolution,
        require_channel=require_channel,
        schema_groups=_as_list(getattr(args, "SCHEMA_GROUPS", None)) or _as_list(cfg.get("schema_groups")),
    )

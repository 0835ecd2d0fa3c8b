"""Load channel definitions from YAML files or URLs."""
from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List

import yaml

from common.http_client import robust_get
from common.logging_utils import safe_url
from coords.errors import ChannelResolutionError

from .model import Channel, Stream

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_source(source: str) -> str:
    if _is_url(source):
        status_code, _, text = robust_get(source)
        if status_code != 200:
            raise ChannelResolutionError(
                f"Failed to fetch channel {safe_url(source)} (status {status_code})"
            )
        return text
    try:
        with open(source, "r", encoding="utf-8") as fh:
            return fh.read()
    except OSError as exc:
        raise ChannelResolutionError(f"Failed to read channel {source}: {exc}") from exc


def _parse_stream(raw: Any, source: str) -> Stream:
    if not isinstance(raw, dict):
        raise ChannelResolutionError(f"Invalid stream in channel {source}: {raw!r}")
    group_id = raw.get("groupId")
    artifact_id = raw.get("artifactId")
    version = raw.get("version")
    pattern = raw.get("versionPattern")
    if not group_id or not artifact_id:
        raise ChannelResolutionError(f"Stream without groupId/artifactId in channel {source}")
    if (version is None) == (pattern is None):
        raise ChannelResolutionError(
            f"Stream {group_id}:{artifact_id} in channel {source} needs exactly one of version or versionPattern"
        )
    if pattern is not None:
        try:
            re.compile(str(pattern))
        except re.error as exc:
            raise ChannelResolutionError(
                f"Invalid versionPattern for {group_id}:{artifact_id} in channel {source}: {exc}"
            ) from exc
    return Stream(
        group_id=str(group_id),
        artifact_id=str(artifact_id),
        version=None if version is None else str(version),
        version_pattern=None if pattern is None else str(pattern),
    )


def parse_channel(text: str, source: str = "<string>") -> Channel:
    """Parse one channel YAML document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ChannelResolutionError(f"Invalid channel YAML in {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ChannelResolutionError(f"Channel {source} must be a mapping")
    streams = [_parse_stream(raw, source) for raw in data.get("streams") or []]
    return Channel(name=str(data.get("name") or source), streams=streams, source=source)


def load_channel(source: str) -> Channel:
    """Load a channel from a filesystem path or an http(s) URL."""
    channel = parse_channel(_read_source(source), source=safe_url(source) if _is_url(source) else source)
    logger.info("Loaded channel %s with %d streams", channel.name, len(channel.streams))
    return channel


def load_channels(sources: Iterable[str]) -> List[Channel]:
    return [load_channel(source) for source in sources]

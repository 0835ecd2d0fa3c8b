"""Placeholder and coordinate parsing utilities."""

import logging
from typing import Mapping, Optional

from constants import Constants

from .errors import ArtifactResolutionError, InvalidCoordinatesError
from .models import MavenArtifact, PlaceholderExpression

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "${"
PLACEHOLDER_SUFFIX = "}"


def is_placeholder(s: str) -> bool:
    """Return True for strings of the exact form ``${body}``."""
    return (
        len(s) >= len(PLACEHOLDER_PREFIX) + len(PLACEHOLDER_SUFFIX)
        and s.startswith(PLACEHOLDER_PREFIX)
        and s.endswith(PLACEHOLDER_SUFFIX)
    )


def parse_placeholder(s: str) -> PlaceholderExpression:
    """Decode one reference string into its lookup key and options.

    ``${key}`` and ``${key?options}`` are placeholders; anything else,
    including strings with unbalanced markers, is a literal coordinate and
    comes back unchanged.
    """
    if not is_placeholder(s):
        return PlaceholderExpression(raw=s, is_placeholder=False, key=s)
    body = s[len(PLACEHOLDER_PREFIX):-len(PLACEHOLDER_SUFFIX)]
    options_index = body.find("?")
    if options_index >= 0:
        return PlaceholderExpression(
            raw=s,
            is_placeholder=True,
            key=body[:options_index],
            options=body[options_index + 1:],
        )
    return PlaceholderExpression(raw=s, is_placeholder=True, key=body)


def strip_options(body: str) -> str:
    """Drop a ``?options`` suffix from a placeholder body.

    A leading ``?`` is kept: the key would otherwise be empty.
    """
    options_index = body.find("?")
    if options_index > 0:
        return body[:options_index]
    return body


def parse_coords(text: str) -> MavenArtifact:
    """Split ``groupId:artifactId[:version][:classifier][:extension]``.

    Empty version and classifier segments mean "not given"; the extension
    defaults to ``jar``.
    """
    parts = text.strip().split(":")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise InvalidCoordinatesError(f"Unexpected artifact coordinates format: {text}")
    version = parts[2] if len(parts) > 2 and parts[2] else None
    classifier = parts[3] if len(parts) > 3 and parts[3] else None
    extension = parts[4] if len(parts) > 4 and parts[4] else Constants.DEFAULT_EXTENSION
    return MavenArtifact(
        group_id=parts[0],
        artifact_id=parts[1],
        version=version,
        classifier=classifier,
        extension=extension,
    )


def to_artifact_coords(
    version_table: Mapping[str, str],
    text: str,
    optional: bool = False,
    channel_artifact_resolution: bool = False,
    require_channel: bool = False,
) -> Optional[MavenArtifact]:
    """Turn coordinate text into an unresolved artifact, completing the version.

    A versionless coordinate takes its version from the ``groupId:artifactId``
    entry of the version table. When no entry exists the artifact is absent
    (``optional``), left versionless for a channel to complete, or an error.

    Args:
        version_table: Version table used to complete versionless coordinates.
        text: Coordinate text, or a single-segment version table key.
        optional: Return None instead of failing when no version is known.
        channel_artifact_resolution: Channel overrides are honored downstream.
        require_channel: A channel must supply the version downstream.

    Returns:
        The unresolved artifact, or None when optional and unknown.
    """
    if ":" not in text:
        entry = version_table.get(text)
        if entry is None:
            if optional:
                return None
            raise ArtifactResolutionError(f"Unknown version table property {text}", coords=text)
        text = entry

    try:
        artifact = parse_coords(text)
    except InvalidCoordinatesError as exc:
        raise ArtifactResolutionError(str(exc), coords=text) from exc
    if artifact.has_version:
        return artifact

    entry = version_table.get(artifact.key)
    if entry is not None:
        try:
            managed = parse_coords(entry)
        except InvalidCoordinatesError as exc:
            raise ArtifactResolutionError(
                f"Invalid version table entry for {artifact.key}: {entry}", coords=text
            ) from exc
        if managed.has_version:
            return MavenArtifact(
                group_id=artifact.group_id,
                artifact_id=artifact.artifact_id,
                version=managed.version,
                classifier=artifact.classifier or managed.classifier,
                extension=managed.extension if artifact.extension == Constants.DEFAULT_EXTENSION else artifact.extension,
            )

    if optional:
        return None
    if channel_artifact_resolution or require_channel:
        logger.debug("Version of %s left to channel resolution", artifact.key)
        return artifact
    raise ArtifactResolutionError(f"Failed to resolve the version of {artifact.key}", coords=text)

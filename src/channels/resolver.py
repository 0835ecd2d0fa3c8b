"""Artifact resolver applying channel-managed version overrides."""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from packaging import version

from common.logging_utils import extra_context, is_debug_enabled
from coords.errors import ArtifactResolutionError, ChannelResolutionError
from coords.models import MavenArtifact
from resolver.base import ArtifactResolver

from .model import Channel, Stream

logger = logging.getLogger(__name__)

_NUMERIC_PREFIX = re.compile(r"^\d+(\.\d+)*")


def version_sort_key(v: str) -> Tuple[version.Version, version.Version, str]:
    """Order versions by numeric prefix, then PEP 440 pre/post releases, then text.

    Maven qualifiers (``2.1.0.Final``) rank by their numeric prefix, so
    ``2.1.0.Final`` sorts above ``2.0.0``.
    """
    match = _NUMERIC_PREFIX.match(v)
    prefix = version.Version(match.group(0)) if match else version.Version("0")
    try:
        full = version.Version(v)
    except version.InvalidVersion:
        full = prefix
    return prefix, full, v


class ChannelArtifactResolver(ArtifactResolver):
    """Delegating resolver whose versions come from channels when asked to.

    The first channel with a stream for ``groupId:artifactId`` wins. Without a
    managing channel, ``require_channel`` fails and plain channel resolution
    keeps the coordinate's own version.
    """

    def __init__(self, channels: Sequence[Channel], delegate: ArtifactResolver):
        self.channels = list(channels)
        self.delegate = delegate

    def resolve(
        self,
        coords: str,
        channel_artifact_resolution: bool = False,
        require_channel: bool = False,
    ) -> MavenArtifact:
        artifact = self.parse(coords)
        if channel_artifact_resolution or require_channel:
            managed = self.find_version(artifact)
            if managed is not None:
                if is_debug_enabled(logger) and managed != artifact.version:
                    logger.debug(
                        "Channel override",
                        extra=extra_context(
                            event="decision",
                            component="channel_resolver",
                            action="override",
                            target=artifact.key,
                            requested=artifact.version,
                            resolved=managed,
                        )
                    )
                artifact = artifact.with_version(managed)
            elif require_channel:
                raise ChannelResolutionError(
                    f"No channel provides a version for {artifact.key}", coords=coords
                )
        return self.locate_versioned(artifact, coords)

    def find_version(self, artifact: MavenArtifact) -> Optional[str]:
        for channel in self.channels:
            stream = channel.find_stream(artifact.group_id, artifact.artifact_id)
            if stream is None:
                continue
            if stream.version_pattern is None:
                return stream.version
            return self._latest_matching(stream, artifact)
        return None

    def _latest_matching(self, stream: Stream, artifact: MavenArtifact) -> Optional[str]:
        candidates: List[str] = [
            v for v in self.available_versions(artifact.group_id, artifact.artifact_id)
            if stream.accepts(v)
        ]
        if not candidates:
            raise ChannelResolutionError(
                f"No available version of {artifact.key} matches {stream.version_pattern}",
                coords=str(artifact),
            )
        return max(candidates, key=version_sort_key)

    def locate(self, artifact: MavenArtifact) -> MavenArtifact:
        try:
            return self.delegate.locate(artifact)
        except ArtifactResolutionError:
            raise
        except OSError as exc:
            raise ArtifactResolutionError(
                f"Failed to locate {artifact.coords()}: {exc}", coords=str(artifact)
            ) from exc

    def available_versions(self, group_id: str, artifact_id: str) -> List[str]:
        return self.delegate.available_versions(group_id, artifact_id)

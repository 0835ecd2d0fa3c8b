"""Base class for artifact resolvers."""

import logging
from abc import ABC, abstractmethod
from typing import List

from coords.errors import ArtifactResolutionError, ChannelResolutionError, InvalidCoordinatesError
from coords.models import MavenArtifact
from coords.parser import parse_coords

logger = logging.getLogger(__name__)


class ArtifactResolver(ABC):
    """Turns coordinate text into a located :class:`MavenArtifact`.

    Subclasses implement :meth:`locate`; :meth:`resolve` handles parsing and
    the channel flags. A resolver without channels cannot honor
    ``require_channel`` and fails; ``channel_artifact_resolution`` alone is
    best effort and falls back to the version in the coordinate.
    """

    def resolve(
        self,
        coords: str,
        channel_artifact_resolution: bool = False,
        require_channel: bool = False,
    ) -> MavenArtifact:
        """Resolve coordinate text to an artifact with a local path.

        Raises:
            ArtifactResolutionError: the coordinate is malformed, has no
                version, or the artifact cannot be located.
            ChannelResolutionError: ``require_channel`` was requested.
        """
        artifact = self.parse(coords)
        if require_channel:
            raise ChannelResolutionError(
                f"No channel is configured to resolve {coords}", coords=coords
            )
        return self.locate_versioned(artifact, coords)

    @staticmethod
    def parse(coords: str) -> MavenArtifact:
        try:
            return parse_coords(coords)
        except InvalidCoordinatesError as exc:
            raise ArtifactResolutionError(str(exc), coords=coords) from exc

    def locate_versioned(self, artifact: MavenArtifact, coords: str) -> MavenArtifact:
        if not artifact.has_version:
            raise ArtifactResolutionError(
                f"Failed to resolve the version of {artifact.key}", coords=coords
            )
        return self.locate(artifact)

    @abstractmethod
    def locate(self, artifact: MavenArtifact) -> MavenArtifact:
        """Return ``artifact`` with its local path set, or raise
        :class:`ArtifactResolutionError`."""

    def available_versions(self, group_id: str, artifact_id: str) -> List[str]:
        """Versions this resolver can locate for ``groupId:artifactId``."""
        return []

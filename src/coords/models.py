"""Data models for artifact coordinates and resolution outcomes."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from constants import Constants

from .errors import ArtifactResolutionError


@dataclass(frozen=True)
class PlaceholderExpression:
    """Parsed form of a raw attribute value.

    For literals ``key`` holds the original string unchanged and ``options``
    is None.
    """
    raw: str
    is_placeholder: bool
    key: str
    options: Optional[str] = None

    @property
    def jandex(self) -> bool:
        """Whether the options segment marks an annotation-indexed variant."""
        return self.options is not None and Constants.JANDEX_OPTION in self.options


@dataclass(frozen=True)
class MavenArtifact:
    """Maven coordinates, optionally materialized to a local file."""
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    classifier: Optional[str] = None
    extension: str = Constants.DEFAULT_EXTENSION
    path: Optional[str] = None

    @property
    def has_version(self) -> bool:
        return bool(self.version)

    @property
    def key(self) -> str:
        """``groupId:artifactId``, the version table lookup key."""
        return f"{self.group_id}:{self.artifact_id}"

    def gav(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version or ''}"

    def coords(self) -> str:
        """Module descriptor coordinate: ``g:a:v[:classifier]``."""
        if self.classifier:
            return f"{self.gav()}:{self.classifier}"
        return self.gav()

    def file_name(self) -> str:
        """Repository file name: ``a-v[-classifier].ext``."""
        name = f"{self.artifact_id}-{self.version}"
        if self.classifier:
            name = f"{name}-{self.classifier}"
        return f"{name}.{self.extension}"

    def with_version(self, version: str) -> "MavenArtifact":
        return replace(self, version=version)

    def with_path(self, path: str) -> "MavenArtifact":
        return replace(self, path=path)

    def __str__(self) -> str:
        return f"{self.gav()}:{self.classifier or ''}:{self.extension}"


class ResolutionStatus(Enum):
    """Outcome of resolving one reference."""
    RESOLVED = "resolved"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True)
class ResolutionResult:
    """Explicit resolution outcome so callers never confuse a skip with an error."""
    status: ResolutionStatus
    artifact: Optional[MavenArtifact] = None
    error: Optional[ArtifactResolutionError] = None

    @classmethod
    def resolved(cls, artifact: MavenArtifact) -> "ResolutionResult":
        return cls(ResolutionStatus.RESOLVED, artifact=artifact)

    @classmethod
    def absent(cls) -> "ResolutionResult":
        return cls(ResolutionStatus.ABSENT)

    @classmethod
    def failed(cls, error: ArtifactResolutionError) -> "ResolutionResult":
        return cls(ResolutionStatus.FAILED, error=error)

    @property
    def is_resolved(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED

    def unwrap(self) -> Optional[MavenArtifact]:
        """Return the artifact, None when absent, or raise the recorded failure."""
        if self.status is ResolutionStatus.FAILED:
            raise self.error
        return self.artifact

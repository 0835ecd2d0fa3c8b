"""Exception hierarchy shared by resolvers, channels and template processing."""

from typing import Optional


class ModweaverError(Exception):
    """Base class for every error raised by modweaver."""


class InvalidCoordinatesError(ModweaverError, ValueError):
    """Coordinate text does not have at least ``groupId:artifactId``."""


class ArtifactResolutionError(ModweaverError):
    """A present coordinate could not be turned into a concrete artifact."""

    def __init__(self, message: str, coords: Optional[str] = None):
        super().__init__(message)
        self.coords = coords


class ChannelResolutionError(ArtifactResolutionError):
    """A channel-managed version was required but no channel provides one."""


class TemplateProcessingError(ModweaverError):
    """A module template could not be parsed, processed or rewritten."""

"""Artifact coordinates, placeholder parsing and version tables."""

from .errors import (
    ArtifactResolutionError,
    ChannelResolutionError,
    InvalidCoordinatesError,
    ModweaverError,
    TemplateProcessingError,
)
from .models import MavenArtifact, PlaceholderExpression, ResolutionResult, ResolutionStatus
from .parser import parse_coords, parse_placeholder, to_artifact_coords
from .version_table import VersionTable

__all__ = [
    "ArtifactResolutionError",
    "ChannelResolutionError",
    "InvalidCoordinatesError",
    "ModweaverError",
    "TemplateProcessingError",
    "MavenArtifact",
    "PlaceholderExpression",
    "ResolutionResult",
    "ResolutionStatus",
    "parse_coords",
    "parse_placeholder",
    "to_artifact_coords",
    "VersionTable",
]

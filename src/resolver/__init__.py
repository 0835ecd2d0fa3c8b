"""Artifact resolvers locating concrete artifacts for coordinates."""

from .base import ArtifactResolver
from .local import LocalRepositoryResolver

__all__ = [
    "ArtifactResolver",
    "LocalRepositoryResolver",
]

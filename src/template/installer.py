"""Installers placing resolved artifacts according to the packaging mode."""

import logging
import os
import shutil

from coords.errors import ArtifactResolutionError
from coords.models import MavenArtifact
from resolver.base import ArtifactResolver

logger = logging.getLogger(__name__)


class ArtifactInstaller:
    """Common state of both installers: the resolver used by template references."""

    def __init__(self, resolver: ArtifactResolver):
        self._resolver = resolver

    @property
    def resolver(self) -> ArtifactResolver:
        return self._resolver


class FatArtifactInstaller(ArtifactInstaller):
    """Copies artifacts next to the module descriptor."""

    def install(self, artifact: MavenArtifact, target_dir: str) -> str:
        """Copy the artifact into ``target_dir`` and return the file name used.

        Raises:
            ArtifactResolutionError: the artifact has no local file.
        """
        if not artifact.path or not os.path.isfile(artifact.path):
            raise ArtifactResolutionError(
                f"Artifact {artifact.coords()} has no local file to embed", coords=str(artifact)
            )
        file_name = artifact.file_name()
        os.makedirs(target_dir, exist_ok=True)
        shutil.copy2(artifact.path, os.path.join(target_dir, file_name))
        logger.debug("Copied %s to %s", artifact.coords(), target_dir)
        return file_name


class ThinArtifactInstaller(ArtifactInstaller):
    """Leaves artifacts in the repository; only their coordinate is recorded."""

    def install(self, artifact: MavenArtifact) -> str:
        return artifact.coords()

"""Resolver reading artifacts from a Maven-layout local repository."""

import logging
import os
from typing import List, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from coords.errors import ArtifactResolutionError
from coords.models import MavenArtifact

from .base import ArtifactResolver

logger = logging.getLogger(__name__)


class LocalRepositoryResolver(ArtifactResolver):
    """Locates artifacts under ``root/group/path/artifactId/version/``.

    Nothing is downloaded; a missing file is a resolution failure.
    """

    def __init__(self, root: Optional[str] = None):
        self.root = os.path.abspath(os.path.expanduser(root or Constants.LOCAL_REPOSITORY))

    def artifact_dir(self, group_id: str, artifact_id: str) -> str:
        return os.path.join(self.root, *group_id.split("."), artifact_id)

    def artifact_path(self, artifact: MavenArtifact) -> str:
        return os.path.join(
            self.artifact_dir(artifact.group_id, artifact.artifact_id),
            artifact.version,
            artifact.file_name(),
        )

    def locate(self, artifact: MavenArtifact) -> MavenArtifact:
        path = self.artifact_path(artifact)
        found = os.path.isfile(path)
        if is_debug_enabled(logger):
            logger.debug(
                "Local repository lookup",
                extra=extra_context(
                    event="lookup",
                    component="local_resolver",
                    action="locate",
                    outcome="found" if found else "missing",
                    target=path,
                )
            )
        if not found:
            raise ArtifactResolutionError(
                f"Artifact {artifact.coords()} not found in {self.root}", coords=str(artifact)
            )
        return artifact.with_path(path)

    def available_versions(self, group_id: str, artifact_id: str) -> List[str]:
        base = self.artifact_dir(group_id, artifact_id)
        if not os.path.isdir(base):
            return []
        return sorted(
            entry for entry in os.listdir(base)
            if os.path.isdir(os.path.join(base, entry))
        )

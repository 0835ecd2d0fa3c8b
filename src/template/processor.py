"""Template processors rewriting module descriptors for fat and thin packaging."""

import logging
import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from common.logging_utils import extra_context, is_debug_enabled, Timer
from coords.parser import is_placeholder, strip_options, to_artifact_coords

from .installer import ArtifactInstaller, FatArtifactInstaller, ThinArtifactInstaller
from .model import ModuleTemplate
from .reference import ArtifactReference
from .schemas import SchemaProcessor

logger = logging.getLogger(__name__)


class TemplateProcessor(ABC):
    """Resolves the version header and every artifact reference of one template.

    The tree is mutated in place and nothing is rolled back: a failure leaves
    already rewritten references rewritten. Callers needing atomicity process
    a copy.
    """

    def __init__(
        self,
        template: ModuleTemplate,
        version_table: Mapping[str, str],
        installer: ArtifactInstaller,
        target_path: str,
        schema_processor: Optional[SchemaProcessor] = None,
        channel_artifact_resolution: bool = False,
        require_channel: bool = False,
    ):
        self.template = template
        self.version_table = version_table
        self.installer = installer
        self.target_dir = os.path.dirname(target_path)
        self.schema_processor = schema_processor or SchemaProcessor()
        self.channel_artifact_resolution = channel_artifact_resolution
        self.require_channel = require_channel

    def process(self) -> None:
        if not self.template.is_module:
            return
        with Timer() as t:
            self.process_module_version()
            count = self.process_artifacts()
        if is_debug_enabled(logger):
            logger.debug(
                "Template processed",
                extra=extra_context(
                    event="function_exit",
                    component="template_processor",
                    action="process",
                    outcome="success",
                    module=self.template.name,
                    count=count,
                    duration_ms=t.duration_ms(),
                )
            )

    def process_module_version(self) -> None:
        """Replace a ``${...}`` module version with the resolved version, if known."""
        version_expr = self.template.version
        if version_expr is None or not is_placeholder(version_expr):
            return
        artifact_name = strip_options(version_expr[2:-1])
        artifact = to_artifact_coords(
            self.version_table,
            artifact_name,
            optional=True,
            channel_artifact_resolution=self.channel_artifact_resolution,
            require_channel=self.require_channel,
        )
        if artifact is not None:
            self.template.set_version(artifact.version)

    def process_artifacts(self) -> int:
        """Resolve and rewrite each artifact reference in document order.

        Returns:
            Number of references rewritten.
        """
        processed = 0
        for parent, element in self.template.artifacts():
            reference = ArtifactReference(
                parent,
                element,
                self.version_table,
                self.installer.resolver,
                channel_artifact_resolution=self.channel_artifact_resolution,
                require_channel=self.require_channel,
                module_name=self.template.name,
            )
            if not reference.has_artifact():
                continue
            artifact = reference.artifact
            self.process_artifact(reference)
            self.schema_processor.process_schemas(artifact.group_id, artifact.path)
            processed += 1
        return processed

    @abstractmethod
    def process_artifact(self, reference: ArtifactReference) -> None:
        """Rewrite one resolved reference for the packaging mode."""


class FatTemplateProcessor(TemplateProcessor):
    """Embeds artifacts as ``resource-root`` files beside the descriptor."""

    installer: FatArtifactInstaller

    def process_artifact(self, reference: ArtifactReference) -> None:
        if reference.is_jandex:
            logger.debug("%s is an annotation-indexed variant", reference.coords)
        file_name = self.installer.install(reference.artifact, self.target_dir)
        reference.update_fat_artifact(file_name)


class ThinTemplateProcessor(TemplateProcessor):
    """Keeps artifacts external and records their resolved coordinate."""

    installer: ThinArtifactInstaller

    def process_artifact(self, reference: ArtifactReference) -> None:
        reference.update_thin_artifact(self.installer.install(reference.artifact))

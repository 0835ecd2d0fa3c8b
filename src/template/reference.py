"""A single resolvable ``<artifact name="..."/>`` reference of a module template."""

import logging
import xml.etree.ElementTree as ET
from typing import Mapping, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from coords.errors import ArtifactResolutionError, TemplateProcessingError
from coords.models import MavenArtifact, ResolutionResult
from coords.parser import parse_coords, parse_placeholder, to_artifact_coords
from resolver.base import ArtifactResolver

from .model import local_name, qualify

logger = logging.getLogger(__name__)


class ArtifactReference:
    """Wraps one artifact element and resolves it at most once.

    The ``name`` attribute is either a placeholder looked up in the version
    table or a literal coordinate. A placeholder whose key is not in the
    table yields no coordinate and the reference resolves as absent. A
    coordinate without a version takes it from the table entry for its
    ``groupId:artifactId``.
    """

    def __init__(
        self,
        parent: ET.Element,
        element: ET.Element,
        version_table: Mapping[str, str],
        resolver: ArtifactResolver,
        channel_artifact_resolution: bool = False,
        require_channel: bool = False,
        module_name: Optional[str] = None,
    ):
        if local_name(element.tag) != Constants.ARTIFACT_ELEMENT:
            raise TemplateProcessingError(f"Not an artifact element: {element.tag}")
        self.parent = parent
        self.element = element
        self.resolver = resolver
        self.channel_artifact_resolution = channel_artifact_resolution
        self.require_channel = require_channel
        self.version_table = version_table
        self.module_name = module_name
        self.expression = parse_placeholder(element.get(Constants.NAME_ATTRIBUTE, ""))
        if self.expression.is_placeholder:
            self.coords: Optional[str] = version_table.get(self.expression.key)
        else:
            self.coords = self.expression.key
        self._result: Optional[ResolutionResult] = None
        self._rewritten = False

    @property
    def is_jandex(self) -> bool:
        return self.expression.jandex

    def resolution(self) -> ResolutionResult:
        """Resolve on first call; later calls return the same result."""
        if self._result is None:
            self._result = self._resolve()
        return self._result

    def _resolve(self) -> ResolutionResult:
        if self.coords is None:
            if is_debug_enabled(logger):
                logger.debug(
                    "Artifact reference skipped",
                    extra=extra_context(
                        event="decision",
                        component="artifact_reference",
                        action="resolve",
                        outcome="absent",
                        target=self.expression.raw,
                        module=self.module_name,
                    )
                )
            return ResolutionResult.absent()
        logger.debug("Resolving %s", self.coords)
        try:
            artifact = self.resolver.resolve(
                self._completed_coords(),
                channel_artifact_resolution=self.channel_artifact_resolution,
                require_channel=self.require_channel,
            )
        except ArtifactResolutionError as exc:
            if exc.coords == self.coords:
                return ResolutionResult.failed(exc)
            error = type(exc)(f"Failed to resolve artifact {self.coords}: {exc}", coords=self.coords)
            error.__cause__ = exc
            return ResolutionResult.failed(error)
        if self.channel_artifact_resolution:
            logger.debug("Resolved %s", artifact)
        return ResolutionResult.resolved(artifact)

    def _completed_coords(self) -> str:
        """Coordinate text for the resolver, with a table-supplied version filled in."""
        unresolved = to_artifact_coords(
            self.version_table,
            self.coords,
            optional=False,
            channel_artifact_resolution=self.channel_artifact_resolution,
            require_channel=self.require_channel,
        )
        if ":" in self.coords and parse_coords(self.coords).has_version:
            return self.coords
        return str(unresolved)

    def has_artifact(self) -> bool:
        """True when resolved; raises the recorded failure instead of answering False."""
        return self.artifact is not None

    @property
    def artifact(self) -> Optional[MavenArtifact]:
        return self.resolution().unwrap()

    def _mark_rewritten(self) -> None:
        if self._rewritten:
            raise TemplateProcessingError(f"Artifact reference {self.expression.raw} already rewritten")
        self._rewritten = True

    def update_fat_artifact(self, final_file_name: str) -> ET.Element:
        """Replace the artifact element with a ``resource-root`` pointing at ``final_file_name``."""
        self._mark_rewritten()
        old = self.element
        attrib = {}
        for key, value in old.attrib.items():
            if key == Constants.NAME_ATTRIBUTE:
                attrib[Constants.PATH_ATTRIBUTE] = final_file_name
            else:
                attrib[key] = value
        new = ET.Element(qualify(old.tag, Constants.RESOURCE_ROOT_ELEMENT), attrib)
        new.text = old.text
        new.tail = old.tail
        new.extend(list(old))
        index = list(self.parent).index(old)
        self.parent[index] = new
        self.element = new
        return new

    def update_thin_artifact(self, coords: str) -> ET.Element:
        """Replace the ``name`` value with a concrete coordinate."""
        self._mark_rewritten()
        self.element.set(Constants.NAME_ATTRIBUTE, coords)
        return self.element

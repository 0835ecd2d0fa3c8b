"""Module descriptor templates backed by ElementTree."""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple

from constants import Constants
from coords.errors import TemplateProcessingError

logger = logging.getLogger(__name__)


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` part of an ElementTree tag."""
    return tag.split("}")[-1] if "}" in tag else tag


def namespace_of(tag: str) -> Optional[str]:
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


def qualify(like_tag: str, name: str) -> str:
    """Build a tag called ``name`` in the same namespace as ``like_tag``."""
    ns = namespace_of(like_tag)
    return f"{{{ns}}}{name}" if ns else name


def _parser() -> ET.XMLParser:
    return ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))


class ModuleTemplate:
    """One descriptor document: root element, optional version and artifact references."""

    def __init__(self, tree: ET.ElementTree, source: Optional[str] = None):
        self.tree = tree
        self.source = source

    @classmethod
    def parse(cls, path: str) -> "ModuleTemplate":
        try:
            tree = ET.parse(path, parser=_parser())
        except ET.ParseError as exc:
            raise TemplateProcessingError(f"Failed to parse template {path}: {exc}") from exc
        return cls(tree, source=path)

    @classmethod
    def from_string(cls, text: str, source: Optional[str] = None) -> "ModuleTemplate":
        try:
            root = ET.fromstring(text, parser=_parser())
        except ET.ParseError as exc:
            raise TemplateProcessingError(f"Failed to parse template {source or '<string>'}: {exc}") from exc
        return cls(ET.ElementTree(root), source=source)

    @property
    def root(self) -> ET.Element:
        return self.tree.getroot()

    @property
    def is_module(self) -> bool:
        return local_name(self.root.tag) == Constants.MODULE_ELEMENT

    @property
    def name(self) -> str:
        name = self.root.get(Constants.NAME_ATTRIBUTE)
        if name:
            return name
        return os.path.basename(os.path.dirname(self.source)) if self.source else "<unnamed>"

    @property
    def version(self) -> Optional[str]:
        return self.root.get(Constants.VERSION_ATTRIBUTE)

    def set_version(self, value: str) -> None:
        self.root.set(Constants.VERSION_ATTRIBUTE, value)

    def artifacts(self) -> List[Tuple[ET.Element, ET.Element]]:
        """``(parent, element)`` for every ``resources/artifact``, in document order."""
        found = []
        for resources in self.root.iter():
            if not isinstance(resources.tag, str) or local_name(resources.tag) != Constants.RESOURCES_ELEMENT:
                continue
            for child in resources:
                if isinstance(child.tag, str) and local_name(child.tag) == Constants.ARTIFACT_ELEMENT:
                    found.append((resources, child))
        return found

    def to_string(self) -> str:
        self._register_default_namespace()
        return ET.tostring(self.root, encoding="unicode")

    def write(self, path: str) -> None:
        self._register_default_namespace()
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.tree.write(path, encoding="UTF-8", xml_declaration=True)
        logger.debug("Wrote template %s", path)

    def _register_default_namespace(self) -> None:
        ns = namespace_of(self.root.tag)
        if ns:
            ET.register_namespace("", ns)

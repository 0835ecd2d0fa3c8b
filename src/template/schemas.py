"""Extraction of XML schemas shipped inside resolved artifacts."""

import logging
import os
import zipfile
from typing import Iterable, Optional, Set

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

SCHEMA_PREFIX = "schema/"
SCHEMA_SUFFIX = ".xsd"


class SchemaProcessor:
    """Receives one notification per resolved artifact reference; ignores it."""

    def process_schemas(self, group_id: str, path: Optional[str]) -> None:
        return None


class SchemaExtractor(SchemaProcessor):
    """Copies ``schema/*.xsd`` entries of artifacts from selected groups into ``target_dir``.

    The first artifact providing a schema file name wins; later copies are ignored.
    """

    def __init__(self, target_dir: str, schema_groups: Iterable[str]):
        self.target_dir = target_dir
        self.schema_groups: Set[str] = set(schema_groups)
        self.extracted: Set[str] = set()

    def process_schemas(self, group_id: str, path: Optional[str]) -> None:
        if group_id not in self.schema_groups or not path:
            return
        try:
            with zipfile.ZipFile(path) as archive:
                for entry in archive.namelist():
                    if not entry.startswith(SCHEMA_PREFIX) or not entry.endswith(SCHEMA_SUFFIX):
                        continue
                    file_name = os.path.basename(entry)
                    if not file_name or file_name in self.extracted:
                        continue
                    os.makedirs(self.target_dir, exist_ok=True)
                    with archive.open(entry) as src, open(os.path.join(self.target_dir, file_name), "wb") as dst:
                        dst.write(src.read())
                    self.extracted.add(file_name)
                    if is_debug_enabled(logger):
                        logger.debug(
                            "Schema extracted",
                            extra=extra_context(
                                event="extract",
                                component="schemas",
                                action="process_schemas",
                                target=file_name,
                                group=group_id,
                            )
                        )
        except zipfile.BadZipFile:
            logger.warning("Cannot read schemas from %s: not a zip archive", path)

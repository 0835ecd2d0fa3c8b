"""Walk a template tree, rewrite module descriptors and copy everything else."""
from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from constants import Constants, PackagingMode
from coords.errors import ModweaverError, TemplateProcessingError
from resolver.base import ArtifactResolver

from .installer import FatArtifactInstaller, ThinArtifactInstaller
from .model import ModuleTemplate
from .processor import FatTemplateProcessor, TemplateProcessor, ThinTemplateProcessor
from .schemas import SchemaProcessor

logger = logging.getLogger(__name__)


@dataclass
class ProcessingReport:
    """Counts of what a pipeline run did."""
    processed: List[str] = field(default_factory=list)
    copied: int = 0
    skipped: int = 0


def build_processor(
    mode: PackagingMode,
    template: ModuleTemplate,
    version_table: Mapping[str, str],
    resolver: ArtifactResolver,
    target_path: str,
    schema_processor: Optional[SchemaProcessor] = None,
    channel_artifact_resolution: bool = False,
    require_channel: bool = False,
) -> TemplateProcessor:
    """Bind the processor and installer for one packaging mode."""
    if mode is PackagingMode.FAT:
        cls, installer = FatTemplateProcessor, FatArtifactInstaller(resolver)
    elif mode is PackagingMode.THIN:
        cls, installer = ThinTemplateProcessor, ThinArtifactInstaller(resolver)
    else:
        raise ValueError(f"Unsupported packaging mode: {mode!r}")
    return cls(
        template,
        version_table,
        installer,
        target_path,
        schema_processor=schema_processor,
        channel_artifact_resolution=channel_artifact_resolution,
        require_channel=require_channel,
    )


def process_templates(
    source_dir: str,
    target_dir: str,
    mode: PackagingMode,
    version_table: Mapping[str, str],
    resolver: ArtifactResolver,
    schema_processor: Optional[SchemaProcessor] = None,
    channel_artifact_resolution: bool = False,
    require_channel: bool = False,
) -> ProcessingReport:
    """Mirror ``source_dir`` into ``target_dir``, processing every module.xml.

    Raises:
        TemplateProcessingError: a template failed; the message names it.
    """
    if not os.path.isdir(source_dir):
        raise FileNotFoundError(source_dir)
    report = ProcessingReport()
    for root, dirs, files in os.walk(source_dir):
        dirs.sort()
        rel = os.path.relpath(root, source_dir)
        out_dir = target_dir if rel == os.curdir else os.path.join(target_dir, rel)
        for file_name in sorted(files):
            src = os.path.join(root, file_name)
            dst = os.path.join(out_dir, file_name)
            if file_name != Constants.MODULE_XML_FILE:
                os.makedirs(out_dir, exist_ok=True)
                shutil.copy2(src, dst)
                report.copied += 1
                continue
            template = ModuleTemplate.parse(src)
            if not template.is_module:
                os.makedirs(out_dir, exist_ok=True)
                shutil.copy2(src, dst)
                report.skipped += 1
                continue
            processor = build_processor(
                mode,
                template,
                version_table,
                resolver,
                dst,
                schema_processor=schema_processor,
                channel_artifact_resolution=channel_artifact_resolution,
                require_channel=require_channel,
            )
            try:
                processor.process()
            except TemplateProcessingError:
                raise
            except ModweaverError as exc:
                raise TemplateProcessingError(f"Failed to process {src}: {exc}") from exc
            except OSError as exc:
                raise TemplateProcessingError(f"Failed to install artifacts of {src}: {exc}") from exc
            try:
                template.write(dst)
            except OSError as exc:
                raise TemplateProcessingError(f"Failed to write {dst}: {exc}") from exc
            report.processed.append(template.name)
            logger.info("Processed module %s", template.name)
    return report

"""Module descriptor templates and their fat/thin rewriting."""

from .model import ModuleTemplate
from .pipeline import ProcessingReport, build_processor, process_templates
from .processor import FatTemplateProcessor, TemplateProcessor, ThinTemplateProcessor
from .reference import ArtifactReference
from .schemas import SchemaExtractor, SchemaProcessor

__all__ = [
    "ArtifactReference",
    "FatTemplateProcessor",
    "ModuleTemplate",
    "ProcessingReport",
    "SchemaExtractor",
    "SchemaProcessor",
    "TemplateProcessor",
    "ThinTemplateProcessor",
    "build_processor",
    "process_templates",
]

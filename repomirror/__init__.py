"""Filtered, annotated repository mirroring with a JSON file catalog."""

from .catalog import CatalogWriter, read_catalog, verify_catalog
from .ignore import IgnoreRuleSet, load_ignore_rules
from .languages import classify
from .metadata import MetadataCollector
from .mirror import DirectoryMirror, TraversalContext
from .models import Catalog, FileMetadata
from .pipeline import MirrorPipeline, MirrorResult

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CatalogWriter",
    "DirectoryMirror",
    "FileMetadata",
    "IgnoreRuleSet",
    "MetadataCollector",
    "MirrorPipeline",
    "MirrorResult",
    "TraversalContext",
    "classify",
    "load_ignore_rules",
    "read_catalog",
    "verify_catalog",
]

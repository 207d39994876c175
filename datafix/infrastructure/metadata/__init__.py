"""
Metadata sources - where per-test declarations come from.
"""

from .mapping_source import (
    MappingMetadataSource,
    AttributeMetadataSource,
    annotate,
    normalize_annotations,
)
from .pytest_source import PytestMarkerMetadataSource, MARKERS

__all__ = [
    "MappingMetadataSource",
    "AttributeMetadataSource",
    "annotate",
    "normalize_annotations",
    "PytestMarkerMetadataSource",
    "MARKERS",
]

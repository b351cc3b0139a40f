"""Processing modules for span extraction, normalization, validation and recovery."""

from .extractor import SpanExtractor
from .normalizer import JSONNormalizer
from .validator import validate
from .recoverer import Recoverer
from .pipeline import JSONRepairer, repair_and_load, repair_json, repair_json_string

__all__ = [
    'SpanExtractor',
    'JSONNormalizer',
    'validate',
    'Recoverer',
    'JSONRepairer',
    'repair_json',
    'repair_json_string',
    'repair_and_load',
]

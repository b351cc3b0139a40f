"""Primary source package for the LLM JSON repairer.

This makes the 'src' directory a proper Python package so that test imports
like 'repairer.src.processing.pipeline' succeed. All intra-package imports
should use relative form (e.g. 'from ..config import Config').
"""

from .exceptions import (
    JSONRepairError,
    InputInvalidError,
    InputTooLargeError,
    JSONNotFoundError,
    UnrecoverableJSONError,
)
from .processing import JSONRepairer, repair_and_load, repair_json, repair_json_string

__all__ = [
    "JSONRepairer",
    "repair_json_string",
    "repair_json",
    "repair_and_load",
    "JSONRepairError",
    "InputInvalidError",
    "InputTooLargeError",
    "JSONNotFoundError",
    "UnrecoverableJSONError",
]

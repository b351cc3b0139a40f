"""Extract → normalize → validate → recover.

Public entry points:

- repair_json_string: text in, strict-JSON text out (or a JSONRepairError).
- repair_json: same run, returning a RepairResult with recovery diagnostics.
- repair_and_load: repaired text parsed into Python objects.

Every call is independent; the module keeps no state between calls.
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from ..exceptions import InputInvalidError, JSONNotFoundError
from ..models import RepairResult
from ..utils import TextUtils, safe_loads
from .extractor import SpanExtractor
from .normalizer import JSONNormalizer
from .recoverer import Recoverer
from .validator import validate


class JSONRepairer:
    """Runs the repair stages for one text at a time."""

    def __init__(self, min_length: Optional[int] = None):
        self.recoverer = Recoverer(min_length=min_length)

    @staticmethod
    def _check_input(text: Any) -> str:
        if text is None:
            raise InputInvalidError("Input is missing")
        if not isinstance(text, str):
            raise InputInvalidError(f"Input is not a valid string (got {type(text).__name__})")
        if not text.strip():
            raise InputInvalidError("Input is empty")
        return text

    def repair(self, text: Any) -> RepairResult:
        text = self._check_input(text)
        logger.debug(f"[repair] started with input length {len(text)}: {TextUtils.preview(text)}")

        span = SpanExtractor.extract(text)
        if span is None:
            raise JSONNotFoundError("No JSON object or array found in LLM response")

        normalized = JSONNormalizer.normalize(span.text)
        outcome = validate(normalized)
        if outcome.valid:
            return RepairResult(text=normalized, kind=span.kind)

        recovered, length = self.recoverer.recover(normalized, outcome)
        return RepairResult(
            text=recovered,
            kind=span.kind,
            recovered=True,
            original_error=outcome.message,
            recovered_length=length,
        )

    def repair_string(self, text: Any) -> str:
        return self.repair(text).text

    def repair_and_load(self, text: Any) -> Any:
        return safe_loads(self.repair_string(text))


def repair_json(text: Any, min_length: Optional[int] = None) -> RepairResult:
    return JSONRepairer(min_length=min_length).repair(text)


def repair_json_string(text: Any, min_length: Optional[int] = None) -> str:
    """Return text a strict JSON parser accepts, recovered from raw model output.

    Raises:
        InputInvalidError: input missing, not a string, or blank.
        JSONNotFoundError: no object or array span in the text.
        UnrecoverableJSONError: no prefix down to the recovery floor parses.
    """
    return JSONRepairer(min_length=min_length).repair_string(text)


def repair_and_load(text: Any, min_length: Optional[int] = None) -> Any:
    return JSONRepairer(min_length=min_length).repair_and_load(text)


__all__ = ["JSONRepairer", "repair_json", "repair_json_string", "repair_and_load"]

"""Exception hierarchy for the JSON repairer.

Every failure raised by the engine inherits from JSONRepairError, which is
itself a ValueError so callers that already guard json.loads keep working:

    try:
        text = repair_json_string(completion)
    except JSONNotFoundError:
        ...  # model answered in prose
    except JSONRepairError as e:
        print(f"repair failed: {e}")
"""

from __future__ import annotations

from typing import Optional


class JSONRepairError(ValueError):
    """Base exception for all repair failures."""


class InputInvalidError(JSONRepairError):
    """Raised when the input is missing, not a string, or blank."""


class InputTooLargeError(JSONRepairError):
    """Raised by the caller-side size check when input exceeds the cap."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Input is {size} characters, limit is {limit}")


class JSONNotFoundError(JSONRepairError):
    """Raised when no balanced JSON object or array span exists in the text."""


class UnrecoverableJSONError(JSONRepairError):
    """Raised when neither the normalized text nor any prefix of it parses."""

    def __init__(self, original_error: str, last_length: Optional[int] = None):
        self.original_error = original_error
        self.last_length = last_length
        super().__init__(
            f"Unable to recover valid JSON from input. Last error: {original_error}"
        )

"""Salvage truncated JSON by keeping the longest prefix that parses.

Completions cut off by a token limit usually stop inside a nested trailing
structure. Walking candidate lengths from the full text downwards, each prefix
is closed with the delimiters still open at that point and strict-parsed; the
first one that parses is the longest, and is returned.

Truncation policy: open objects and arrays are always completed, never dropped.
A trailing member that cannot be completed by closing delimiters alone (a
dangling key, colon or comma, or a half-written string) is dropped, because
only prefixes that end before it can parse.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from loguru import logger

from ..config import Config
from ..exceptions import UnrecoverableJSONError
from ..models import ParseOutcome
from ..utils import strict_parse

_CLOSER_FOR = {"{": "}", "[": "]"}


def closing_sequences(text: str) -> List[Optional[str]]:
    """Map each prefix length to the closers that balance text[:length].

    Entry `i` is None when text[:i] ends inside a string literal, since no
    amount of closing delimiters can make such a prefix parse.
    """
    states: List[Optional[str]] = [""]
    stack: List[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _CLOSER_FOR:
            stack.append(_CLOSER_FOR[ch])
        elif ch in "}]" and stack:
            stack.pop()
        states.append(None if in_string else "".join(reversed(stack)))
    return states


class Recoverer:
    """Longest-valid-prefix search with delimiter completion."""

    def __init__(self, min_length: Optional[int] = None):
        self.min_length = Config.REPAIR_MIN_LENGTH if min_length is None else min_length

    def recover(self, text: str, failure: ParseOutcome) -> Tuple[str, int]:
        """Return (recovered_text, prefix_length) or raise UnrecoverableJSONError."""
        logger.warning(
            f"[recover] parse failed at pos={failure.position} ({failure.message}); "
            f"trying prefixes of {len(text)} chars down to {self.min_length}"
        )
        states = closing_sequences(text)
        last_length: Optional[int] = None

        for length in range(len(text), max(self.min_length, 1) - 1, -1):
            last_length = length
            closers = states[length]
            if closers is None:
                continue
            candidate = text[:length] + closers
            if strict_parse(candidate).valid:
                logger.info(
                    f"[recover] found valid JSON at length {len(candidate)} "
                    f"(kept {length}/{len(text)} chars, appended {len(closers)} closers)"
                )
                return candidate, length

        raise UnrecoverableJSONError(failure.message, last_length)


__all__ = ["Recoverer", "closing_sequences"]

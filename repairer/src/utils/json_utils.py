"""Strict JSON parsing helpers backed by orjson.

- safe_loads: parse str or bytes with orjson.
- strict_parse: parse without raising, returning a ParseOutcome with the
  parser's error position and message.
- dumps_pretty: re-serialize parsed JSON with indentation.

orjson follows RFC 8259 strictly (no NaN/Infinity, no comments, no trailing
commas), which is exactly the acceptance test the repairer needs. It also
rejects lone surrogate escapes; see strict_parse.
"""

from __future__ import annotations

import re
from typing import Any, Optional

import orjson

from ..models import ParseOutcome

_POS_RE = re.compile(r"char (\d+)")


def safe_loads(data: str | bytes) -> Any:
    """Parse JSON with orjson."""
    return orjson.loads(data)


def _error_position(exc: orjson.JSONDecodeError) -> Optional[int]:
    pos = getattr(exc, "pos", None)
    if isinstance(pos, int):
        return pos
    # Older orjson builds only report the offset inside the message.
    if match := _POS_RE.search(str(exc)):
        return int(match.group(1))
    return None


def strict_parse(text: str) -> ParseOutcome:
    """Parse without raising.

    Acceptance is slightly stricter than RFC 8259: orjson rejects strings that
    decode to a lone UTF-16 surrogate (e.g. "\\ud800"), which the grammar allows.
    Such text is reported invalid and goes through recovery like any other
    parse failure.
    """
    try:
        return ParseOutcome.ok(orjson.loads(text))
    except orjson.JSONDecodeError as e:
        return ParseOutcome.failed(str(e), _error_position(e))


def dumps_pretty(value: Any) -> str:
    return orjson.dumps(value, option=orjson.OPT_INDENT_2).decode("utf-8")


__all__ = ["safe_loads", "strict_parse", "dumps_pretty"]

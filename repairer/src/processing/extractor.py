"""Locate the JSON payload inside free-form model output.

Each delimiter type is scanned separately with its own depth counter. A span is
emitted whenever the depth returns to zero, and the longest span wins: the main
payload is normally the largest balanced region, while short spans tend to be
inline examples in the surrounding prose.

Inside a span, string literals (double, single or typographic quotes) and
// or /* */ comments are skipped, so delimiters they contain are not counted.

When the text ends while a region is still open, the opener is checked: if the
next token can start a JSON member or value, the region is a completion cut off
by the token limit and may replace the best balanced span it encloses. If it is
followed by a prose word, the opener is treated as stray and the scan restarts
right after it. An unclosed region is only used regardless when the text has no
balanced span at all.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from loguru import logger

from ..models import Span
from ..utils import TextUtils
from .normalizer import SINGLE_QUOTES, SMART_DOUBLE_QUOTES

DELIMITERS: Tuple[Tuple[str, str, str], ...] = (
    ("{", "}", "object"),
    ("[", "]", "array"),
)

# Opening quote -> the characters that may close it, as the normalizer reads them.
_STRING_CLOSERS: Dict[str, FrozenSet[str]] = {'"': frozenset('"')}
_STRING_CLOSERS.update({q: SMART_DOUBLE_QUOTES for q in SMART_DOUBLE_QUOTES})
_STRING_CLOSERS.update({q: SINGLE_QUOTES for q in SINGLE_QUOTES})

_VALUE_START = frozenset("-0123456789{}[]") | frozenset(_STRING_CLOSERS)
_LITERAL_RE = re.compile(r"(?:true|false|null)\b")


def _skip_comment(text: str, i: int) -> int:
    """Index after the comment starting at i, or i when none starts there."""
    if text.startswith("//", i):
        end = text.find("\n", i)
        return len(text) if end == -1 else end
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        return len(text) if end == -1 else end + 2
    return i


class SpanExtractor:
    """Balanced-span scanning for objects and arrays."""

    @staticmethod
    def _opens_json(text: str, pos: int) -> bool:
        """True when the opener at pos is followed by a JSON member or value."""
        i, n = pos + 1, len(text)
        while i < n:
            if text[i].isspace():
                i += 1
                continue
            skipped = _skip_comment(text, i)
            if skipped == i:
                break
            i = skipped
        if i >= n:
            return False
        return text[i] in _VALUE_START or _LITERAL_RE.match(text, i) is not None

    @staticmethod
    def _scan_from(
        text: str, opener: str, closer: str, kind: str, begin: int
    ) -> Tuple[List[Span], Optional[int]]:
        """Scan text[begin:] for one delimiter pair.

        Returns the balanced spans and the start of the region still open at
        the end of the text, if any. A closer at depth zero is ignored.
        """
        spans: List[Span] = []
        depth = 0
        start = begin
        closers: Optional[FrozenSet[str]] = None
        i, n = begin, len(text)

        while i < n:
            char = text[i]
            if closers is not None:
                if char == "\\":
                    i += 2
                    continue
                if char in closers:
                    closers = None
            elif depth > 0 and char in _STRING_CLOSERS:
                closers = _STRING_CLOSERS[char]
            elif depth > 0 and (skipped := _skip_comment(text, i)) != i:
                i = skipped
                continue
            elif char == opener:
                if depth == 0:
                    start = i
                depth += 1
            elif char == closer and depth > 0:
                depth -= 1
                if depth == 0:
                    spans.append(Span(start=start, end=i + 1, kind=kind, text=text[start : i + 1]))
            i += 1

        return spans, (start if depth > 0 else None)

    @classmethod
    def _scan(cls, text: str, opener: str, closer: str, kind: str) -> Tuple[List[Span], List[Span]]:
        """Return the balanced spans for one delimiter pair plus the unclosed regions.

        Each unclosed region whose opener is followed by prose is dropped and
        the scan resumes after it, so a stray brace cannot hide the payload.
        """
        spans: List[Span] = []
        tails: List[Span] = []
        begin = 0
        while True:
            found, open_at = cls._scan_from(text, opener, closer, kind, begin)
            spans.extend(found)
            if open_at is None:
                break
            tails.append(Span(start=open_at, end=len(text), kind=kind, text=text[open_at:], complete=False))
            if cls._opens_json(text, open_at):
                break
            begin = open_at + 1
        return spans, tails

    @classmethod
    def iter_balanced_spans(cls, text: str) -> Iterator[Span]:
        """Yield every balanced object span, then every balanced array span."""
        for opener, closer, kind in DELIMITERS:
            spans, _ = cls._scan(text, opener, closer, kind)
            yield from spans

    @classmethod
    def extract(cls, text: str) -> Optional[Span]:
        """Return the longest candidate span, or None when the text holds no JSON."""
        best: Optional[Span] = None
        json_tails: List[Span] = []
        first_tails: List[Span] = []
        for opener, closer, kind in DELIMITERS:
            spans, tails = cls._scan(text, opener, closer, kind)
            for span in spans:
                if best is None or len(span) > len(best):
                    best = span
            json_tails.extend(t for t in tails if cls._opens_json(text, t.start))
            if tails:
                first_tails.append(tails[0])

        if best is None:
            for tail in json_tails or first_tails:
                if best is None or len(tail) > len(best):
                    best = tail
        else:
            # A truncated region only wins when it encloses the best balanced span.
            for tail in json_tails:
                if tail.start <= best.start and len(tail) > len(best):
                    best = tail

        if best is None:
            logger.debug(f"[extract] no JSON span in: {TextUtils.preview(text)}")
        else:
            logger.debug(
                f"[extract] {best.kind} span [{best.start}:{best.end}] complete={best.complete}"
            )
        return best


__all__ = ["SpanExtractor", "DELIMITERS"]

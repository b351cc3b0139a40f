"""Lexical rewrites that move model output towards strict JSON.

The rewrites run as a single left-to-right scan that always knows whether it is
inside a string literal. Structural rules (comment removal, key quoting, comma
fixes, markup stripping) only fire outside strings, so string values keep their
exact character content. Already-valid JSON passes through unchanged.

Handled deviations:
  1. Markdown code fences (```json).
  2. Typographic quotes used as string delimiters. A string opened by one
     only closes on another typographic quote; ASCII " inside it is escaped.
  3. /* block */ and // line comments.
  4. Single-quoted strings.
  5. Bare identifier keys.
  6. Trailing commas before } or ].
  7. Missing commas between adjacent }/] and {/[.
  8. HTML-like tags and markdown emphasis (** and ~~).
  9. Raw control characters inside strings.
"""

from __future__ import annotations

import re
import string
from typing import FrozenSet, List, Optional

from loguru import logger

from ..utils import TextUtils

_IDENT_START = frozenset(string.ascii_letters + "_$")
_IDENT_CHARS = _IDENT_START | frozenset(string.digits)
_FENCE_TAG_CHARS = frozenset(string.ascii_letters + string.digits + "_+-")

SMART_DOUBLE_QUOTES = frozenset("“”„″")
SINGLE_QUOTES = frozenset("'‘’")

_TAG_RE = re.compile(r"</?[A-Za-z][^<>\"]*>")
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b", "\f": "\\f"}


class JSONNormalizer:
    """Single-pass normalizer; one instance per text."""

    def __init__(self, text: str):
        self.text = text
        self.out: List[str] = []
        self.pos = 0

    @classmethod
    def normalize(cls, text: str) -> str:
        result = cls(text).run()
        if result != text:
            logger.debug(f"[normalize] rewritten: {TextUtils.preview(result)}")
        return result

    def run(self) -> str:
        text, n = self.text, len(self.text)
        while self.pos < n:
            ch = text[self.pos]
            if ch == '"':
                self._copy_string(frozenset('"'), escape_quotes=False)
            elif ch in SMART_DOUBLE_QUOTES:
                self._copy_string(SMART_DOUBLE_QUOTES, escape_quotes=True)
            elif ch in SINGLE_QUOTES:
                self._copy_string(SINGLE_QUOTES, escape_quotes=True)
            elif text.startswith("```", self.pos):
                self._skip_fence()
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = n if end == -1 else end
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                self.pos = n if end == -1 else end + 2
            elif text.startswith("**", self.pos) or text.startswith("~~", self.pos):
                self.pos += 2
            elif ch == "<" and (match := _TAG_RE.match(text, self.pos)):
                self.pos = match.end()
            elif ch in _IDENT_START:
                self._copy_word()
            elif ch in "}]":
                self._drop_trailing_comma()
                self.out.append(ch)
                self.pos += 1
            elif ch in "{[":
                self._insert_missing_comma()
                self.out.append(ch)
                self.pos += 1
            else:
                self.out.append(ch)
                self.pos += 1
        return "".join(self.out)

    def _last_significant(self) -> Optional[int]:
        """Index in the output of the last non-whitespace character."""
        for i in range(len(self.out) - 1, -1, -1):
            if not self.out[i].isspace():
                return i
        return None

    def _drop_trailing_comma(self):
        idx = self._last_significant()
        if idx is not None and self.out[idx] == ",":
            del self.out[idx]

    def _insert_missing_comma(self):
        idx = self._last_significant()
        if idx is not None and self.out[idx] in "}]":
            self.out.insert(idx + 1, ",")

    def _skip_fence(self):
        self.pos += 3
        while self.pos < len(self.text) and self.text[self.pos] in _FENCE_TAG_CHARS:
            self.pos += 1

    def _copy_word(self):
        """Copy an identifier, quoting it when it sits in key position."""
        text, n = self.text, len(self.text)
        end = self.pos
        while end < n and text[end] in _IDENT_CHARS:
            end += 1
        word = text[self.pos : end]

        after = end
        while after < n and text[after].isspace():
            after += 1
        idx = self._last_significant()
        is_key = after < n and text[after] == ":" and (idx is None or self.out[idx] in "{,")

        self.out.extend(f'"{word}"' if is_key else word)
        self.pos = end

    def _copy_string(self, closers: FrozenSet[str], escape_quotes: bool):
        """Copy a string literal starting at the opening quote, emitting it double-quoted.

        An unterminated string is copied to the end of the text and left open.
        """
        text, n = self.text, len(self.text)
        out = self.out
        out.append('"')
        i = self.pos + 1
        while i < n:
            ch = text[i]
            if ch == "\\" and i + 1 < n:
                nxt = text[i + 1]
                if nxt == "'":
                    out.append("'")
                else:
                    out.append(ch)
                    out.append(nxt)
                i += 2
                continue
            if ch in closers:
                out.append('"')
                self.pos = i + 1
                return
            if escape_quotes and ch == '"':
                out.append('\\"')
            elif ch < " ":
                out.append(_CONTROL_ESCAPES.get(ch, f"\\u{ord(ch):04x}"))
            else:
                out.append(ch)
            i += 1
        self.pos = n


def normalize(text: str) -> str:
    return JSONNormalizer.normalize(text)


__all__ = ["JSONNormalizer", "normalize"]

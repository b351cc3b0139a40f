from typing import Any

import orjson

from ..config import Config
from ..exceptions import InputTooLargeError


class TextUtils:
    """Utility class for text processing operations."""

    @staticmethod
    def truncate_text(text: Any, limit: int) -> str:
        """Truncate text to specified limit with indicator."""
        try:
            s = text if isinstance(text, str) else orjson.dumps(text).decode("utf-8")
        except TypeError:
            s = str(text)
        if limit <= 0 or len(s) <= limit:
            return s
        tail = len(s) - limit
        return f"{s[:limit]}... [truncated {tail} chars]"

    @staticmethod
    def preview(text: Any) -> str:
        """Single-line log preview bounded by LOG_PREVIEW_MAX."""
        return TextUtils.truncate_text(text, Config.LOG_PREVIEW_MAX).replace("\n", "\\n")

    @staticmethod
    def enforce_size_limit(text: str, limit: int | None = None) -> str:
        """Reject text longer than the caller's cap; a limit of 0 disables the check."""
        if limit is None:
            limit = Config.MAX_INPUT_CHARS
        if limit > 0 and len(text) > limit:
            raise InputTooLargeError(len(text), limit)
        return text

"""Utility modules for strict JSON parsing and text handling."""

from .json_utils import dumps_pretty, safe_loads, strict_parse
from .text_utils import TextUtils

__all__ = ["TextUtils", "safe_loads", "strict_parse", "dumps_pretty"]

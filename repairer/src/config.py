import os
from typing import Optional


class Config:
    """Centralized configuration management for the JSON repairer."""

    # Recovery Configuration
    REPAIR_MIN_LENGTH: int = int(os.getenv("REPAIR_MIN_LENGTH", "10"))

    # Caller-side size cap (0 disables the check)
    MAX_INPUT_CHARS: int = int(os.getenv("MAX_INPUT_CHARS", "0"))

    # Logging Controls
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None
    LOG_PREVIEW_MAX: int = int(os.getenv("LOG_PREVIEW_MAX", "200"))

from loguru import logger

from ..models import ParseOutcome
from ..utils import strict_parse


def validate(text: str) -> ParseOutcome:
    """Strict-parse the normalized text. No repair happens here."""
    outcome = strict_parse(text)
    if outcome.valid:
        logger.debug("[validate] strict parse succeeded")
    else:
        logger.debug(f"[validate] strict parse failed at pos={outcome.position}: {outcome.message}")
    return outcome


__all__ = ["validate"]

"""
Request-boundary validation helpers.

The analyzers are total over any string and never validate business input
themselves. Callers that accept answers from outside (request handlers,
batch importers) use these helpers to reject malformed records before any
scoring happens.
"""

import logging
import math
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


def require_text(value, field_name: str) -> str:
    """
    Return value if it is a non-blank string.

    Raises:
        ValueError: If value is missing, not a string, or whitespace only
    """
    if not isinstance(value, str) or not value.strip():
        logger.warning(f"Rejected record: '{field_name}' is missing or blank")
        raise ValueError(f"'{field_name}' must be a non-empty string")
    return value


def ensure_text_argument(value, field_name: str) -> str:
    """Raise TypeError when an analyzer receives something other than str."""
    if not isinstance(value, str):
        raise TypeError(
            f"'{field_name}' must be str, got {type(value).__name__}"
        )
    return value


def ensure_finite(value: Optional[float], field_name: str) -> Optional[float]:
    """
    Pass through None and finite numbers.

    NaN or infinite values mean an upstream producer is broken, so they are
    reported as ValueError instead of being silently scored.
    """
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"'{field_name}' must be a finite number, got {value}")
    return value


def require_unique(values: Iterable[str], field_name: str) -> None:
    """
    Raise ValueError if any value occurs more than once.

    Results are keyed by identity fields, so a repeated id would silently
    replace an earlier entry.
    """
    seen = set()
    for value in values:
        if value in seen:
            logger.warning(f"Rejected records: duplicate '{field_name}' {value!r}")
            raise ValueError(f"'{field_name}' must be unique, got {value!r} more than once")
        seen.add(value)

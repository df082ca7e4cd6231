"""Small helpers shared across the engine."""

import math
import re
import unicodedata
from typing import Union

Number = Union[int, float]


def slugify(text: str, max_length: int = 80) -> str:
    """
    Convert text to URL-safe slug.

    Args:
        text: Text to convert
        max_length: Maximum slug length

    Returns:
        URL-safe slug, or an empty string when nothing survives
    """
    if not text:
        return ""

    normalized = unicodedata.normalize('NFKD', text)
    ascii_only = normalized.encode('ascii', 'ignore').decode('ascii')

    slug = re.sub(r'[^a-z0-9]+', '-', ascii_only.lower()).strip('-')

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip('-')

    return slug


def clamp(value: Number, low: Number = 0, high: Number = 100) -> Number:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up.

    Python's ``round`` uses banker's rounding, which would turn 52.5 into 52;
    scores here round halves toward positive infinity.
    """
    return int(math.floor(value + 0.5))

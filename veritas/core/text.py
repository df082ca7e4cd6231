"""Tokenization utilities shared by the TF-IDF builder and keyword extraction."""

import re
from typing import List, Optional

# Function words plus headline filler that carries no story identity.
STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
    "has", "have", "had", "will", "would", "could", "should", "may", "might",
    "can", "this", "that", "these", "those", "it", "its", "as", "not", "no",
    "new", "says", "said", "report", "reports", "over", "than", "more",
    "after", "before", "about", "up", "out", "into", "his", "her", "their",
    "they", "he", "she", "we", "us", "amid", "just", "now", "then", "when",
})

MIN_TOKEN_LENGTH = 3

_NON_ALNUM = re.compile(r'[^a-z0-9]')


def tokenize(text: Optional[str]) -> List[str]:
    """
    Tokenize text into lowercase alphanumeric terms.

    Every character outside ``[a-z0-9]`` (after lowercasing) acts as a
    separator. Tokens shorter than three characters and stop words are dropped.

    Args:
        text: Input text to tokenize

    Returns:
        List of terms in document order
    """
    if not text:
        return []

    text = _NON_ALNUM.sub(' ', text.lower())

    return [
        token for token in text.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def prepare_content_text(title: Optional[str], summary: Optional[str] = None) -> str:
    """Text used to represent an article: title followed by summary."""
    return f"{title or ''} {summary or ''}".strip()

"""Veritas: story clustering and trust scoring for news articles."""

__version__ = "0.1.0"

"""Exception hierarchy for the Veritas engine."""
from typing import Optional


class VeritasError(Exception):
    """Base class for all engine errors."""


class ArticleValidationError(VeritasError):
    """Raised when an article is missing a field the engine cannot fabricate.

    Carries the offending article id (when known) and field name so the
    ingestion side can report exactly which record was rejected.
    """

    def __init__(self, field: str, article_id: Optional[str] = None, message: Optional[str] = None):
        self.field = field
        self.article_id = article_id
        if message is None:
            message = f"Article {article_id or '<unknown>'} is missing required field '{field}'"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"field": self.field, "article_id": self.article_id, "message": str(self)}


class OverrideConfigError(VeritasError):
    """Raised when a trust override file or entry is malformed."""


class FactCheckError(VeritasError):
    """Raised for unrecoverable fact-check transport errors."""

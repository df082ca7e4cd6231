"""Domain models shared by the clustering and scoring engine.

Articles and sources are produced by the ingestion side; clusters and scoring
results are derived fresh on every run and never mutated afterwards.
"""
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from veritas.core.time import parse_timestamp, to_iso


class Bias(str, Enum):
    """Ordinal political-leaning categories of an outlet."""
    LEFT = "LEFT"
    LEFT_CENTER = "LEFT_CENTER"
    CENTER = "CENTER"
    RIGHT_CENTER = "RIGHT_CENTER"
    RIGHT = "RIGHT"


class FactCheckRating(str, Enum):
    """Normalized verdict scale used by fact-checking organizations."""
    TRUE = "TRUE"
    MOSTLY_TRUE = "MOSTLY_TRUE"
    MIXED = "MIXED"
    MOSTLY_FALSE = "MOSTLY_FALSE"
    FALSE = "FALSE"


@dataclass(frozen=True)
class Source:
    """A reporting outlet. ``domain`` is its identity."""
    id: str
    name: str
    domain: str
    bias: Bias = Bias.CENTER
    factual_rating: float = 50

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'domain': self.domain,
            'bias': self.bias.value,
            'factual_rating': self.factual_rating,
        }


@dataclass(frozen=True)
class FactCheckResult:
    """One verdict returned by a fact-check lookup."""
    claim: str
    rating: FactCheckRating
    source: str = "Unknown"
    url: str = ""


@dataclass(frozen=True)
class BreakdownItem:
    """One weighted component of a validity score."""
    label: str
    score: float
    weight: float


@dataclass(frozen=True)
class ScoringResult:
    """Validity score of one article with its labeled breakdown."""
    overall: int
    corroboration: float
    source_reliability: float
    fact_check: float
    consistency: float
    breakdown: Tuple[BreakdownItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overall': self.overall,
            'corroboration': self.corroboration,
            'source_reliability': self.source_reliability,
            'fact_check': self.fact_check,
            'consistency': self.consistency,
            'breakdown': [asdict(item) for item in self.breakdown],
        }


@dataclass(frozen=True)
class Article:
    """A normalized news article.

    ``sentiment``, ``validity_score`` and ``corroboration_count`` stay at zero
    until the engine scores the article; scored copies also carry ``scoring``.
    """
    id: str
    title: str
    url: str
    source: Source
    published_at: Union[datetime, str]
    summary: str = ""
    sentiment: float = 0.0
    validity_score: int = 0
    corroboration_count: int = 0
    scoring: Optional[ScoringResult] = None

    @property
    def published(self) -> Optional[datetime]:
        """Parsed publication time, or None when unreadable."""
        return parse_timestamp(self.published_at)

    def to_dict(self) -> Dict[str, Any]:
        published = self.published
        return {
            'id': self.id,
            'title': self.title,
            'url': self.url,
            'source': self.source.to_dict(),
            'published_at': to_iso(published) if published else str(self.published_at),
            'summary': self.summary,
            'sentiment': self.sentiment,
            'validity_score': self.validity_score,
            'corroboration_count': self.corroboration_count,
            'scoring': self.scoring.to_dict() if self.scoring else None,
        }


@dataclass(frozen=True)
class ArticleCluster:
    """A group of articles covering the same story, with its scores."""
    id: str
    topic: str
    articles: Tuple[Article, ...]
    sources: Tuple[Source, ...]
    freshness: int
    velocity: int
    source_diversity: int
    trust_aggregate: int
    score: int
    first_seen: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @property
    def article_count(self) -> int:
        return len(self.articles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'topic': self.topic,
            'article_count': self.article_count,
            'articles': [article.to_dict() for article in self.articles],
            'sources': [source.to_dict() for source in self.sources],
            'freshness': self.freshness,
            'velocity': self.velocity,
            'source_diversity': self.source_diversity,
            'trust_aggregate': self.trust_aggregate,
            'score': self.score,
            'first_seen': to_iso(self.first_seen),
            'last_updated': to_iso(self.last_updated),
        }


def unique_sources(articles: List[Article]) -> List[Source]:
    """Sources of ``articles`` deduplicated by domain, in first-seen order."""
    seen = {}
    for article in articles:
        seen.setdefault(article.source.domain, article.source)
    return list(seen.values())

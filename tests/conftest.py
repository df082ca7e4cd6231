"""Shared builders for articles and sources."""
from datetime import datetime, timedelta, timezone

import pytest

from veritas.core.models import Article, Bias, Source

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_source(domain: str, rating: float = 50, name: str = None) -> Source:
    return Source(id=domain, name=name or domain, domain=domain, bias=Bias.CENTER, factual_rating=rating)


def make_article(article_id: str, title: str, domain: str = "example.com", rating: float = 50,
                 hours_ago: float = 0.5, summary: str = "", sentiment: float = 0.0,
                 **kwargs) -> Article:
    return Article(
        id=article_id,
        title=title,
        url=f"https://{domain}/{article_id}",
        source=make_source(domain, rating),
        published_at=NOW - timedelta(hours=hours_ago),
        summary=summary,
        sentiment=sentiment,
        **kwargs,
    )


@pytest.fixture
def now():
    return NOW

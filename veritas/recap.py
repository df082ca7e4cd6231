"""Recap of the most important stories from an already-scored batch."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from veritas.core.models import ArticleCluster
from veritas.core.time import normalize_timezone, to_iso
from veritas.core.utils import round_half_up

RECAP_WINDOW_HOURS = 24
RECAP_MAX_ITEMS = 6
NO_STORIES_TOPIC = "No stories loaded"
MULTIPLE_SOURCES = "Multiple Sources"


@dataclass(frozen=True)
class RecapItem:
    cluster_id: str
    topic: str
    article_count: int
    trust_score: int
    top_headline: str
    source_name: str


@dataclass(frozen=True)
class RecapSummary:
    items: List[RecapItem] = field(default_factory=list)
    total_articles: int = 0
    avg_trust: int = 0
    top_topic: str = NO_STORIES_TOPIC
    generated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [
                {
                    'cluster_id': item.cluster_id,
                    'topic': item.topic,
                    'article_count': item.article_count,
                    'trust_score': item.trust_score,
                    'top_headline': item.top_headline,
                    'source_name': item.source_name,
                }
                for item in self.items
            ],
            'total_articles': self.total_articles,
            'avg_trust': self.avg_trust,
            'top_topic': self.top_topic,
            'generated_at': to_iso(self.generated_at),
        }


def _is_recent(cluster: ArticleCluster, cutoff: datetime) -> bool:
    # Clusters without timestamps are kept
    last_active = cluster.last_updated or cluster.first_seen
    return last_active is None or normalize_timezone(last_active) > cutoff


def _recap_item(cluster: ArticleCluster) -> RecapItem:
    top = cluster.articles[0] if cluster.articles else None
    return RecapItem(
        cluster_id=cluster.id,
        topic=cluster.topic,
        article_count=cluster.article_count,
        trust_score=cluster.trust_aggregate,
        top_headline=top.title if top else cluster.topic,
        source_name=top.source.name if top else MULTIPLE_SOURCES,
    )


def build_recap(clusters: Sequence[ArticleCluster],
                now: datetime,
                window_hours: float = RECAP_WINDOW_HOURS,
                max_items: int = RECAP_MAX_ITEMS) -> RecapSummary:
    """
    Build a recap of the top stories active within the window.

    Args:
        clusters: Scored clusters, in any order
        now: Reference time for the window and ``generated_at``
        window_hours: How far back a cluster's last update may be
        max_items: Maximum number of stories in the recap

    Returns:
        RecapSummary; totals and average trust cover every cluster given
    """
    cutoff = normalize_timezone(now) - timedelta(hours=window_hours)

    recent = [c for c in clusters if _is_recent(c, cutoff)]
    top = sorted(recent, key=lambda c: c.score, reverse=True)[:max_items]
    items = [_recap_item(c) for c in top]

    total_articles = sum(c.article_count for c in clusters)
    avg_trust = (
        round_half_up(sum(c.trust_aggregate for c in clusters) / len(clusters))
        if clusters else 0
    )

    return RecapSummary(
        items=items,
        total_articles=total_articles,
        avg_trust=avg_trust,
        top_topic=items[0].topic if items else NO_STORIES_TOPIC,
        generated_at=now,
    )

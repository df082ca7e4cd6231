"""Cluster-level scores: freshness, velocity, source diversity and trust.

All time-dependent scores take an explicit ``now`` so that a batch scored
twice with the same clock produces the same ranking.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from veritas.core.logging import get_logger
from veritas.core.models import Article, ArticleCluster
from veritas.core.time import age_hours, hours_between, parse_or_epoch
from veritas.core.utils import clamp, round_half_up

logger = get_logger(__name__)

# Scoring weights
FRESHNESS_WEIGHT = 0.25
VELOCITY_WEIGHT = 0.25
DIVERSITY_WEIGHT = 0.30
TRUST_WEIGHT = 0.20

# Freshness loses this many points per hour of age of the newest member
FRESHNESS_DECAY_PER_HOUR = 4
# Articles per hour of coverage span, scaled
VELOCITY_SCALE = 10
MIN_VELOCITY_SPAN_HOURS = 1
POINTS_PER_DOMAIN = 20
NEUTRAL_TRUST = 50


@dataclass(frozen=True)
class ClusterScores:
    """Scores of one cluster, all integers in [0, 100]."""
    freshness: int
    velocity: int
    source_diversity: int
    trust_aggregate: int
    score: int
    first_seen: Optional[datetime] = None
    last_updated: Optional[datetime] = None


def _published_times(articles: Sequence[Article]) -> List[datetime]:
    return [parse_or_epoch(a.published_at) for a in articles]


def freshness_score(articles: Sequence[Article], now: datetime) -> int:
    """100 for a story updated just now, losing 4 points per hour."""
    if not articles:
        return 0
    newest = max(_published_times(articles))
    hours = age_hours(newest, now)
    return clamp(max(0, round_half_up(100 - hours * FRESHNESS_DECAY_PER_HOUR)))


def velocity_score(articles: Sequence[Article]) -> int:
    """Coverage rate over the span from the oldest to the newest member.

    A cluster with no readable timestamp has no measurable rate and scores 0.
    """
    if not articles or all(a.published is None for a in articles):
        return 0
    times = _published_times(articles)
    span = hours_between(min(times), max(times))
    rate = len(articles) / max(MIN_VELOCITY_SPAN_HOURS, span)
    return min(100, round_half_up(rate * VELOCITY_SCALE))


def diversity_score(articles: Sequence[Article]) -> int:
    """20 points per distinct outlet, capped at 100."""
    domains = {a.source.domain for a in articles}
    return min(100, len(domains) * POINTS_PER_DOMAIN)


def trust_score(articles: Sequence[Article]) -> int:
    """Mean validity of scored members; unscored (zero) members are skipped."""
    scores = [a.validity_score for a in articles if a.validity_score > 0]
    if not scores:
        return NEUTRAL_TRUST
    return round_half_up(sum(scores) / len(scores))


def score_cluster(articles: Sequence[Article], now: datetime) -> ClusterScores:
    """
    Compute every cluster-level score for one group of scored articles.

    Args:
        articles: Cluster members, with validity scores already attached
        now: Reference time for freshness

    Returns:
        ClusterScores including first_seen / last_updated of readable timestamps
    """
    freshness = freshness_score(articles, now)
    velocity = velocity_score(articles)
    diversity = diversity_score(articles)
    trust = trust_score(articles)

    score = round_half_up(
        freshness * FRESHNESS_WEIGHT
        + velocity * VELOCITY_WEIGHT
        + diversity * DIVERSITY_WEIGHT
        + trust * TRUST_WEIGHT
    )

    readable = [dt for dt in (a.published for a in articles) if dt is not None]
    if len(readable) < len(articles):
        logger.warning(
            f"{len(articles) - len(readable)} of {len(articles)} cluster members "
            f"have unreadable timestamps; treating them as epoch"
        )

    return ClusterScores(
        freshness=freshness,
        velocity=velocity,
        source_diversity=diversity,
        trust_aggregate=trust,
        score=clamp(score),
        first_seen=min(readable) if readable else None,
        last_updated=max(readable) if readable else None,
    )


def rank_clusters(clusters: Sequence[ArticleCluster]) -> List[ArticleCluster]:
    """Highest score first; equal scores keep discovery order."""
    return sorted(clusters, key=lambda c: c.score, reverse=True)

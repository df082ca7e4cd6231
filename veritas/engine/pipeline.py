"""Batch orchestrator for story clustering and trust scoring.

Runs the full transform over one batch of articles:
1. Validation: Rejects articles the engine cannot work with
2. Clustering: Groups articles covering the same story
3. Scoring: Scores every article against its cluster siblings
4. Aggregation: Labels and scores each cluster
5. Ranking: Orders clusters by score, discovery order breaking ties
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Set

from veritas.core.errors import ArticleValidationError
from veritas.core.logging import get_logger
from veritas.core.models import Article, ArticleCluster, FactCheckResult, unique_sources
from veritas.core.time import utc_now
from veritas.core.utils import slugify
from veritas.engine.cluster import SIMILARITY_THRESHOLD, StoryClusterer
from veritas.engine.keywords import DEFAULT_TOP_N, extract_top_keywords, topic_label
from veritas.scoring.aggregate import rank_clusters, score_cluster
from veritas.scoring.validity import ValidityScorer

logger = get_logger(__name__)

# claim text -> verdicts for that claim
FactCheckLookup = Callable[[str], Sequence[FactCheckResult]]

REQUIRED_FIELDS = ('id', 'title', 'source', 'published_at')


def validate_articles(articles: Sequence[Article]) -> None:
    """
    Check that every article carries the fields the engine relies on.

    Raises:
        ArticleValidationError: On a missing field or a repeated article id
    """
    seen_ids: Set[str] = set()
    for article in articles:
        for field_name in REQUIRED_FIELDS:
            if not getattr(article, field_name, None):
                raise ArticleValidationError(field_name, article_id=getattr(article, 'id', None) or None)
        # Domain is the outlet identity for corroboration and diversity
        if not article.source.domain:
            raise ArticleValidationError('source.domain', article_id=article.id)
        if article.id in seen_ids:
            raise ArticleValidationError(
                'id', article_id=article.id, message=f"Duplicate article id '{article.id}' in batch"
            )
        seen_ids.add(article.id)


class StoryPipeline:
    """Clusters a batch of articles and scores the resulting stories."""

    def __init__(self,
                 threshold: float = SIMILARITY_THRESHOLD,
                 topic_keywords: int = DEFAULT_TOP_N,
                 scorer: Optional[ValidityScorer] = None,
                 fact_checks: Optional[FactCheckLookup] = None,
                 workers: int = 1):
        self.clusterer = StoryClusterer(threshold=threshold)
        self.topic_keywords = topic_keywords
        self.scorer = scorer or ValidityScorer()
        self.fact_checks = fact_checks
        self.workers = max(1, workers)

    def score_articles(self, group: Sequence[Article]) -> List[Article]:
        """Scored copies of a cluster's members; the inputs are left untouched."""
        scored = []
        for i, article in enumerate(group):
            siblings = [other for j, other in enumerate(group) if j != i]
            verdicts = self.fact_checks(article.title) if self.fact_checks else ()
            result = self.scorer.score(article, siblings, verdicts)
            scored.append(replace(
                article,
                validity_score=result.overall,
                corroboration_count=len(siblings) + 1,
                scoring=result,
            ))
        return scored

    def _build_cluster(self, index: int, group: Sequence[Article], now: datetime) -> ArticleCluster:
        topic = topic_label(extract_top_keywords(group, self.topic_keywords), index)
        members = self.score_articles(group)
        scores = score_cluster(members, now)

        return ArticleCluster(
            id=f"cluster-{slugify(topic)}-{index}",
            topic=topic,
            articles=tuple(members),
            sources=tuple(unique_sources(members)),
            freshness=scores.freshness,
            velocity=scores.velocity,
            source_diversity=scores.source_diversity,
            trust_aggregate=scores.trust_aggregate,
            score=scores.score,
            first_seen=scores.first_seen,
            last_updated=scores.last_updated,
        )

    def run(self, articles: Sequence[Article], now: Optional[datetime] = None) -> List[ArticleCluster]:
        """
        Cluster, score and rank one batch.

        Args:
            articles: Batch of articles; order affects which articles seed clusters
            now: Reference time; read from the clock once when omitted

        Returns:
            Clusters sorted by score, highest first
        """
        if not articles:
            return []

        start_time = time.time()
        validate_articles(articles)
        if now is None:
            now = utc_now()

        groups = [g for g in self.clusterer.cluster(articles) if g]

        if self.workers > 1 and len(groups) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                clusters = list(executor.map(
                    lambda item: self._build_cluster(item[0], item[1], now), enumerate(groups)
                ))
        else:
            clusters = [self._build_cluster(i, g, now) for i, g in enumerate(groups)]

        ranked = rank_clusters(clusters)

        runtime = time.time() - start_time
        logger.info(f"Pipeline scored {len(articles)} articles into {len(ranked)} clusters in {runtime:.3f}s")
        return ranked


def build_clusters(articles: Sequence[Article], now: Optional[datetime] = None, **kwargs) -> List[ArticleCluster]:
    """Run a one-off ``StoryPipeline``; keyword arguments go to its constructor."""
    return StoryPipeline(**kwargs).run(articles, now=now)

"""Seed-based greedy clustering of articles covering the same story.

Documents are visited in batch order. Each one not yet assigned becomes the
seed of a new cluster, and every later unassigned document whose similarity
to that seed reaches the threshold joins it. Membership is decided against
the seed only, so two members of one cluster need not be similar to each
other and the result depends on batch order.
"""

from typing import List, Sequence, Set

import numpy as np

from veritas.core.logging import get_logger
from veritas.core.models import Article
from veritas.core.text import prepare_content_text
from veritas.engine.similarity import similarity_matrix
from veritas.engine.tfidf import TfidfCorpus, build_corpus

logger = get_logger(__name__)

# Configuration
SIMILARITY_THRESHOLD = 0.15


def greedy_partition(similarities: np.ndarray,
                     threshold: float = SIMILARITY_THRESHOLD) -> List[List[int]]:
    """
    Partition document indices by similarity to cluster seeds.

    Args:
        similarities: Square matrix, ``similarities[i][j]`` for documents i, j
        threshold: Minimum similarity to the seed for joining its cluster;
            a zero similarity never joins, even at threshold 0

    Returns:
        Index groups in seed-encounter order, members in batch order
    """
    n_docs = len(similarities)
    processed: Set[int] = set()
    groups: List[List[int]] = []

    for seed in range(n_docs):
        if seed in processed:
            continue

        group = [seed]
        processed.add(seed)

        for other in range(seed + 1, n_docs):
            if other in processed:
                continue
            score = similarities[seed][other]
            if score > 0 and score >= threshold:
                group.append(other)
                processed.add(other)

        groups.append(group)

    return groups


class StoryClusterer:
    """Groups a batch of articles into stories using TF-IDF similarity."""

    def __init__(self, threshold: float = SIMILARITY_THRESHOLD):
        self.threshold = threshold

    @staticmethod
    def prepare_content_text(article: Article) -> str:
        """Text of an article used for similarity."""
        return prepare_content_text(article.title, article.summary)

    def vectorize(self, articles: Sequence[Article]) -> TfidfCorpus:
        """Build the TF-IDF corpus for this batch."""
        return build_corpus([(a.id, self.prepare_content_text(a)) for a in articles])

    def cluster(self, articles: Sequence[Article]) -> List[List[Article]]:
        """Cluster articles, returning groups in seed-encounter order."""
        if not articles:
            return []

        corpus = self.vectorize(articles)
        similarities = similarity_matrix(corpus.matrix)
        groups = greedy_partition(similarities, self.threshold)

        logger.info(
            f"Clustered {len(articles)} articles into {len(groups)} groups "
            f"(threshold {self.threshold})"
        )
        return [[articles[i] for i in group] for group in groups]


def cluster_articles(articles: Sequence[Article],
                     threshold: float = SIMILARITY_THRESHOLD) -> List[List[Article]]:
    """Cluster articles with a one-off ``StoryClusterer``."""
    return StoryClusterer(threshold=threshold).cluster(articles)

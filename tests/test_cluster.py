"""Tests for seed-based clustering and topic keywords."""

import numpy as np

from conftest import make_article
from veritas.engine.cluster import SIMILARITY_THRESHOLD, StoryClusterer, cluster_articles, greedy_partition
from veritas.engine.keywords import extract_top_keywords, topic_label

FED_TITLES = [
    "Federal Reserve raises interest rates to fight inflation",
    "Federal Reserve raises interest rates again",
    "Federal Reserve interest rates decision lifts markets",
]
WILDFIRE_TITLE = "Wildfire forces evacuations across northern California"


class TestGreedyPartition:
    """Tests for greedy_partition."""

    def test_membership_is_decided_against_seed_only(self):
        # 1 and 2 are very similar, but 2 is not similar enough to seed 0
        sims = np.array([
            [1.0, 0.2, 0.1],
            [0.2, 1.0, 0.9],
            [0.1, 0.9, 1.0],
        ])
        assert greedy_partition(sims, 0.15) == [[0, 1], [2]]

    def test_threshold_is_inclusive(self):
        sims = np.array([[1.0, 0.15], [0.15, 1.0]])
        assert greedy_partition(sims, 0.15) == [[0, 1]]

    def test_below_threshold_is_singleton(self):
        sims = np.array([[1.0, 0.149], [0.149, 1.0]])
        assert greedy_partition(sims, 0.15) == [[0], [1]]

    def test_every_index_assigned_once(self):
        rng = np.random.default_rng(7)
        raw = rng.random((12, 12))
        sims = (raw + raw.T) / 2
        groups = greedy_partition(sims, 0.5)

        flat = [i for group in groups for i in group]
        assert sorted(flat) == list(range(12))

    def test_zero_similarity_never_joins(self):
        sims = np.array([
            [1.0, 0.0, 0.4],
            [0.0, 0.0, 0.0],
            [0.4, 0.0, 1.0],
        ])
        assert greedy_partition(sims, 0.0) == [[0, 2], [1]]

    def test_empty(self):
        assert greedy_partition(np.zeros((0, 0))) == []

    def test_default_threshold(self):
        assert SIMILARITY_THRESHOLD == 0.15


class TestStoryClusterer:
    """Tests for clustering articles."""

    def test_groups_same_story(self):
        articles = [
            make_article("fed-1", FED_TITLES[0], "reuters.com"),
            make_article("fire-1", WILDFIRE_TITLE, "apnews.com"),
            make_article("fed-2", FED_TITLES[1], "npr.org"),
            make_article("fed-3", FED_TITLES[2], "foxnews.com"),
        ]
        groups = cluster_articles(articles)

        assert [[a.id for a in g] for g in groups] == [["fed-1", "fed-2", "fed-3"], ["fire-1"]]

    def test_article_without_terms_is_alone(self):
        articles = [
            make_article("a", "The and of", "reuters.com"),
            make_article("b", "The and of", "npr.org"),
        ]
        groups = StoryClusterer().cluster(articles)
        assert len(groups) == 2

    def test_zero_threshold_keeps_unrelated_articles_apart(self):
        articles = [
            make_article("fire", WILDFIRE_TITLE, "apnews.com"),
            make_article("empty", "The and of", "npr.org"),
            make_article("fed", FED_TITLES[0], "reuters.com"),
        ]
        groups = StoryClusterer(threshold=0.0).cluster(articles)
        assert [[a.id for a in g] for g in groups] == [["fire"], ["empty"], ["fed"]]

    def test_empty_batch(self):
        assert StoryClusterer().cluster([]) == []

    def test_summary_contributes_to_similarity(self):
        articles = [
            make_article("a", "Breaking update", "reuters.com", summary="Volcano eruption Iceland village"),
            make_article("b", "Live coverage", "npr.org", summary="Volcano eruption Iceland village"),
        ]
        groups = StoryClusterer().cluster(articles)
        assert len(groups) == 1

    def test_high_threshold_splits(self):
        articles = [
            make_article("fed-1", FED_TITLES[0], "reuters.com"),
            make_article("fed-3", FED_TITLES[2], "foxnews.com"),
        ]
        assert len(StoryClusterer(threshold=0.99).cluster(articles)) == 2


class TestKeywords:
    """Tests for topic keyword extraction."""

    def test_top_keywords_by_summed_weight(self):
        articles = [make_article(f"fed-{i}", title) for i, title in enumerate(FED_TITLES)]
        # Four terms tie on weight; first-seen order breaks the tie
        assert extract_top_keywords(articles) == ["FEDERAL", "RESERVE", "INTEREST"]

    def test_top_n(self):
        articles = [make_article(f"fed-{i}", title) for i, title in enumerate(FED_TITLES)]
        assert len(extract_top_keywords(articles, top_n=5)) == 5

    def test_no_terms(self):
        assert extract_top_keywords([make_article("a", "the of and")]) == []

    def test_topic_label(self):
        assert topic_label(["FEDERAL", "RESERVE"], 0) == "FEDERAL · RESERVE"
        assert topic_label([], 2) == "STORY 3"

"""Tests for the recap builder."""

from datetime import timedelta

from conftest import NOW, make_article
from veritas.core.models import ArticleCluster
from veritas.recap import NO_STORIES_TOPIC, build_recap


def _cluster(cluster_id, score, trust=60, hours_ago=1.0, articles=None):
    articles = articles if articles is not None else (make_article(f"{cluster_id}-a", f"Headline {cluster_id}"),)
    last_updated = NOW - timedelta(hours=hours_ago) if hours_ago is not None else None
    return ArticleCluster(
        id=cluster_id, topic=f"TOPIC {cluster_id}", articles=tuple(articles),
        sources=tuple(a.source for a in articles),
        freshness=0, velocity=0, source_diversity=0, trust_aggregate=trust, score=score,
        first_seen=last_updated, last_updated=last_updated,
    )


class TestBuildRecap:
    """Tests for build_recap."""

    def test_top_items_by_score(self):
        clusters = [_cluster(str(i), score=i * 10) for i in range(8)]
        recap = build_recap(clusters, NOW)

        assert [item.cluster_id for item in recap.items] == ["7", "6", "5", "4", "3", "2"]
        assert recap.top_topic == "TOPIC 7"
        assert recap.generated_at == NOW

    def test_window_excludes_stale(self):
        clusters = [_cluster("fresh", 40), _cluster("stale", 90, hours_ago=30)]
        recap = build_recap(clusters, NOW)

        assert [item.cluster_id for item in recap.items] == ["fresh"]
        # Totals cover every cluster
        assert recap.total_articles == 2

    def test_clusters_without_timestamps_are_kept(self):
        recap = build_recap([_cluster("demo", 10, hours_ago=None)], NOW)
        assert recap.items[0].cluster_id == "demo"

    def test_average_trust(self):
        recap = build_recap([_cluster("a", 10, trust=60), _cluster("b", 20, trust=81)], NOW)
        assert recap.avg_trust == 71

    def test_item_fields(self):
        article = make_article("x", "Top headline", "reuters.com")
        item = build_recap([_cluster("c", 10, articles=[article])], NOW).items[0]

        assert item.top_headline == "Top headline"
        assert item.source_name == "reuters.com"
        assert item.article_count == 1

    def test_empty_cluster_uses_topic(self):
        item = build_recap([_cluster("e", 10, articles=[])], NOW).items[0]
        assert item.top_headline == "TOPIC e"
        assert item.source_name == "Multiple Sources"

    def test_empty(self):
        recap = build_recap([], NOW)

        assert recap.items == []
        assert recap.avg_trust == 0
        assert recap.top_topic == NO_STORIES_TOPIC

    def test_window_and_limit(self):
        clusters = [_cluster("a", 30, hours_ago=5), _cluster("b", 20, hours_ago=1), _cluster("c", 10, hours_ago=1)]
        recap = build_recap(clusters, NOW, window_hours=2, max_items=1)
        assert [item.cluster_id for item in recap.items] == ["b"]

    def test_to_dict(self):
        data = build_recap([_cluster("a", 30)], NOW).to_dict()
        assert data["generated_at"] == "2024-06-01T12:00:00+00:00"
        assert data["items"][0]["cluster_id"] == "a"

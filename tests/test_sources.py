"""Tests for the source registry and trust baselines."""

from conftest import make_source
from veritas.core.models import ArticleCluster, Bias
from veritas.sources import (
    apply_corroboration_bonus,
    compute_trust_baseline,
    extract_domain,
    get_source_rating,
    get_sources_by_reliability,
    multi_source_appearances,
    normalize_domain,
    resolve_source,
    resolve_source_for_url,
)


class TestRatings:
    """Tests for the source registry."""

    def test_normalize_domain(self):
        assert normalize_domain("www.Reuters.com") == "reuters.com"
        assert normalize_domain("  NPR.org ") == "npr.org"

    def test_lookup_strips_www(self):
        source = get_source_rating("www.reuters.com")
        assert source.factual_rating == 95
        assert source.bias == Bias.CENTER

    def test_unknown_domain(self):
        assert get_source_rating("unknown.example") is None

        source = resolve_source("Unknown.Example")
        assert source.factual_rating == 50
        assert source.bias == Bias.CENTER
        assert source.domain == "unknown.example"
        assert source.id == "unrated-unknown.example"

    def test_extract_domain(self):
        assert extract_domain("https://www.bbc.co.uk/news/world-123") == "bbc.co.uk"
        assert extract_domain("not a url") == ""

    def test_resolve_from_url(self):
        assert resolve_source_for_url("https://www.npr.org/2024/story").name == "NPR"
        assert resolve_source_for_url("https://cdn.example/x", "apnews.com").id == "ap"

    def test_sorted_by_reliability(self):
        sources = get_sources_by_reliability()
        ratings = [s.factual_rating for s in sources]

        assert sources[0].domain == "apnews.com"
        assert ratings == sorted(ratings, reverse=True)


class TestTrustBaseline:
    """Tests for trust baselines."""

    HEADLINES = [
        "Shocking twist in city council vote",
        "Stunning upset at the final",
        "University study finds coffee benefits",
        "Mayor opens bridge downtown",
    ]

    def test_penalty_and_bonus(self):
        baseline = compute_trust_baseline(make_source("tabloid.test", 80), self.HEADLINES)

        assert baseline.sensationality_penalty == 20
        assert baseline.evidence_bonus == 5
        assert baseline.composite_score == 65
        assert len(baseline.signals) == 3

    def test_no_headlines(self):
        baseline = compute_trust_baseline(make_source("quiet.test", 70))

        assert baseline.sensationality_penalty == 0
        assert baseline.evidence_bonus == 0
        assert baseline.composite_score == 70

    def test_corroboration_bonus(self):
        baseline = compute_trust_baseline(make_source("wire.test", 90))
        boosted = apply_corroboration_bonus(baseline, 2, 3)

        assert boosted.corroboration_bonus == 10
        assert boosted.composite_score == 100
        assert baseline.corroboration_bonus == 0

    def test_corroboration_bonus_scaled(self):
        baseline = compute_trust_baseline(make_source("wire.test", 50))
        assert apply_corroboration_bonus(baseline, 1, 4).corroboration_bonus == 4
        assert apply_corroboration_bonus(baseline, 0, 0).corroboration_bonus == 0

    def test_multi_source_appearances(self):
        a, b, c = make_source("a.test"), make_source("b.test"), make_source("c.test")

        def cluster(cluster_id, sources):
            return ArticleCluster(
                id=cluster_id, topic=cluster_id, articles=(), sources=tuple(sources),
                freshness=0, velocity=0, source_diversity=0, trust_aggregate=0, score=0,
            )

        counts = multi_source_appearances([cluster("1", [a, b]), cluster("2", [a, c]), cluster("3", [b])])
        assert counts == {"a.test": 2, "b.test": 1, "c.test": 1}

    def test_to_dict(self):
        data = compute_trust_baseline(make_source("x.test", 60), self.HEADLINES).to_dict()
        assert data["breakdown"]["base"] == 60
        assert data["signals"][0]["positive"] is True

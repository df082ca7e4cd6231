"""Trust baseline for a source from free, local signals.

Starts from the outlet's factual rating and adjusts it with:
- a penalty for sensational language in its recent headlines
- a bonus for evidence-based language
- a bonus for appearing in multi-source clusters (applied after clustering)
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Sequence

from veritas.core.models import ArticleCluster, Source
from veritas.core.utils import clamp, round_half_up

# Words that inflate importance or provoke emotion without adding information
SENSATIONAL_MARKERS = (
    "bombshell", "shocking", "explosive", "stunning", "unbelievable",
    "you won't believe", "won't believe", "destroys", "obliterates", "annihilates",
    "slams", "blasts", "rips", "shreds", "torches", "nukes",
    "exposed", "exposes", "secret", "they don't want you to know",
    "mainstream media won't", "cover-up", "coverup", "scandal",
    "outrage", "outraged", "fury", "furious", "meltdown",
    "!!!", "must watch", "must read", "wake up",
)

# Signals that the story is grounded in verifiable evidence
EVIDENCE_MARKERS = (
    "study", "studies", "research", "researchers", "analysis",
    "report", "reports", "data", "statistics", "figures",
    "according to", "officials said", "officials say", "confirmed by",
    "peer-reviewed", "published in", "journal", "university", "institute",
    "survey", "poll", "documents show", "records show",
)

SENSATIONAL_RATE_FACTOR = 40
MAX_SENSATIONAL_PENALTY = 20
EVIDENCE_RATE_FACTOR = 20
MAX_EVIDENCE_BONUS = 10
CORROBORATION_RATE_FACTOR = 15
MAX_CORROBORATION_BONUS = 10


@dataclass(frozen=True)
class TrustSignal:
    """One human-readable adjustment to a source's trust."""
    label: str
    delta: float
    positive: bool


@dataclass(frozen=True)
class TrustBaseline:
    """Composite trust for a source plus the signals that produced it."""
    source: Source
    base: float
    sensationality_penalty: int = 0
    evidence_bonus: int = 0
    corroboration_bonus: int = 0
    signals: List[TrustSignal] = field(default_factory=list)

    @property
    def composite_score(self) -> float:
        return clamp(
            self.base
            - self.sensationality_penalty
            + self.corroboration_bonus
            + self.evidence_bonus
        )

    def to_dict(self) -> dict:
        return {
            'source': self.source.to_dict(),
            'composite_score': self.composite_score,
            'breakdown': {
                'base': self.base,
                'sensationality_penalty': self.sensationality_penalty,
                'corroboration_bonus': self.corroboration_bonus,
                'evidence_bonus': self.evidence_bonus,
            },
            'signals': [
                {'label': s.label, 'delta': s.delta, 'positive': s.positive}
                for s in self.signals
            ],
        }


def _count_hits(headlines: Sequence[str], markers: Sequence[str]) -> int:
    return sum(1 for h in headlines if any(m in h for m in markers))


def compute_trust_baseline(source: Source, recent_headlines: Sequence[str] = ()) -> TrustBaseline:
    """
    Compute a trust baseline for a source.

    Args:
        source: The source to evaluate
        recent_headlines: Sample of recent headlines from this source

    Returns:
        TrustBaseline with a zero corroboration bonus; see
        ``apply_corroboration_bonus`` for the cluster-derived part.
    """
    headlines = [h.lower() for h in recent_headlines]
    total = len(headlines)

    sensational_hits = _count_hits(headlines, SENSATIONAL_MARKERS)
    sensational_rate = sensational_hits / total if total else 0.0
    penalty = round_half_up(min(MAX_SENSATIONAL_PENALTY, sensational_rate * SENSATIONAL_RATE_FACTOR))

    evidence_hits = _count_hits(headlines, EVIDENCE_MARKERS)
    evidence_rate = evidence_hits / total if total else 0.0
    bonus = round_half_up(min(MAX_EVIDENCE_BONUS, evidence_rate * EVIDENCE_RATE_FACTOR))

    signals = [TrustSignal(f"Base factual rating ({source.name})", source.factual_rating, True)]
    if penalty > 0:
        signals.append(TrustSignal(
            f"Sensational language in {sensational_hits} of {total} headlines", -penalty, False
        ))
    if bonus > 0:
        signals.append(TrustSignal(
            f"Evidence-based language in {evidence_hits} of {total} headlines", bonus, True
        ))

    return TrustBaseline(
        source=source,
        base=source.factual_rating,
        sensationality_penalty=penalty,
        evidence_bonus=bonus,
        signals=signals,
    )


def apply_corroboration_bonus(baseline: TrustBaseline,
                              cluster_appearances: int,
                              total_clusters: int) -> TrustBaseline:
    """
    Return a copy of ``baseline`` with the cluster-derived corroboration bonus.

    Args:
        baseline: Existing baseline result
        cluster_appearances: Multi-source clusters this source appears in
        total_clusters: Total clusters to normalise against
    """
    rate = cluster_appearances / total_clusters if total_clusters > 0 else 0.0
    bonus = round_half_up(min(MAX_CORROBORATION_BONUS, rate * CORROBORATION_RATE_FACTOR))

    signals = list(baseline.signals)
    if bonus > 0:
        signals.append(TrustSignal(
            f"Corroborated in {cluster_appearances} of {total_clusters} multi-source clusters",
            bonus,
            True,
        ))

    return replace(baseline, corroboration_bonus=bonus, signals=signals)


def multi_source_appearances(clusters: Iterable[ArticleCluster]) -> Dict[str, int]:
    """Number of clusters with two or more outlets that each domain appears in."""
    appearances: Dict[str, int] = {}
    for cluster in clusters:
        if len(cluster.sources) < 2:
            continue
        for source in cluster.sources:
            appearances[source.domain] = appearances.get(source.domain, 0) + 1
    return appearances

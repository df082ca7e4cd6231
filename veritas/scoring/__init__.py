"""Article validity and cluster scoring."""

from veritas.scoring.aggregate import ClusterScores, rank_clusters, score_cluster
from veritas.scoring.overrides import (
    OverrideMode,
    OverrideTable,
    SourceOverride,
    load_overrides,
)
from veritas.scoring.validity import TrustOverride, ValidityScorer, calculate_validity

__all__ = [
    "ClusterScores",
    "OverrideMode",
    "OverrideTable",
    "SourceOverride",
    "TrustOverride",
    "ValidityScorer",
    "calculate_validity",
    "load_overrides",
    "rank_clusters",
    "score_cluster",
]

"""Validity scoring for a single article.

Combines four signals into a 0-100 trust estimate:
- Corroboration: how many independent outlets report the same story
- Source reliability: pre-rated factual reporting of the publishing outlet
- Fact check: verdicts from fact-checking organizations, if any
- Consistency: agreement in tone across the outlets covering the story
"""

from typing import Callable, Iterable, Optional, Sequence, Union

import numpy as np

from veritas.core.logging import get_logger
from veritas.core.models import (
    Article,
    BreakdownItem,
    FactCheckRating,
    FactCheckResult,
    ScoringResult,
    Source,
)
from veritas.core.utils import clamp, round_half_up

logger = get_logger(__name__)

# Scoring configuration; corroboration is the strongest signal
CORROBORATION_WEIGHT = 0.40
SOURCE_RELIABILITY_WEIGHT = 0.30
FACT_CHECK_WEIGHT = 0.20
CONSISTENCY_WEIGHT = 0.10

# (max unique sibling domains, score); anything above the last step scores MAX
CORROBORATION_STEPS = (
    (0, 5),
    (1, 15),
    (2, 30),
    (4, 50),
    (7, 70),
    (11, 85),
)
MAX_CORROBORATION = 95

FACT_CHECK_VALUES = {
    FactCheckRating.TRUE: 100,
    FactCheckRating.MOSTLY_TRUE: 80,
    FactCheckRating.MIXED: 50,
    FactCheckRating.MOSTLY_FALSE: 20,
    FactCheckRating.FALSE: 0,
}
NEUTRAL_FACT_CHECK = 50

NEUTRAL_CONSISTENCY = 50
MIN_SIBLINGS_FOR_CONSISTENCY = 2
VARIANCE_PENALTY = 80
MIN_CONSISTENCY = 20

# (base factual rating, domain) -> effective factual rating
TrustOverride = Callable[[float, str], float]

Verdict = Union[FactCheckResult, FactCheckRating, str]


def corroboration_score(unique_domains: int) -> int:
    """Step function of the number of independent outlets."""
    for max_domains, score in CORROBORATION_STEPS:
        if unique_domains <= max_domains:
            return score
    return MAX_CORROBORATION


def _verdict_value(verdict: Verdict) -> int:
    rating = verdict.rating if isinstance(verdict, FactCheckResult) else verdict
    try:
        return FACT_CHECK_VALUES[FactCheckRating(rating)]
    except ValueError:
        logger.debug(f"Unknown fact-check verdict {rating!r}, treating as neutral")
        return NEUTRAL_FACT_CHECK


def fact_check_score(verdicts: Sequence[Verdict]) -> int:
    """Mean mapped verdict; no verdicts is neutral, not a penalty."""
    if not verdicts:
        return NEUTRAL_FACT_CHECK
    total = sum(_verdict_value(v) for v in verdicts)
    return round_half_up(total / len(verdicts))


def consistency_score(sentiments: Sequence[float]) -> int:
    """
    Agreement in tone across siblings.

    Low sentiment variance means the outlets agree; the penalty saturates at
    ``MIN_CONSISTENCY``. Fewer than two values give no signal.
    """
    if len(sentiments) < MIN_SIBLINGS_FOR_CONSISTENCY:
        return NEUTRAL_CONSISTENCY
    variance = float(np.var(np.asarray(sentiments, dtype=float)))
    return max(MIN_CONSISTENCY, round_half_up(100 - variance * VARIANCE_PENALTY))


class ValidityScorer:
    """Scores articles against their cluster siblings.

    An optional ``trust_override`` adjusts each source's factual rating before
    it is used; the scorer itself never modifies sources.
    """

    def __init__(self, trust_override: Optional[TrustOverride] = None):
        self.trust_override = trust_override
        self.weights = {
            'corroboration': CORROBORATION_WEIGHT,
            'source_reliability': SOURCE_RELIABILITY_WEIGHT,
            'fact_check': FACT_CHECK_WEIGHT,
            'consistency': CONSISTENCY_WEIGHT,
        }

    def calculate_corroboration(self, article: Article, siblings: Iterable[Article]) -> int:
        """Score from the distinct sibling domains other than the article's own."""
        domains = {s.source.domain for s in siblings}
        domains.discard(article.source.domain)
        return corroboration_score(len(domains))

    def calculate_source_reliability(self, source: Source) -> float:
        """Effective factual rating of the publishing outlet."""
        rating = source.factual_rating
        if self.trust_override is not None:
            rating = self.trust_override(rating, source.domain)
        return clamp(rating)

    def calculate_fact_check(self, verdicts: Sequence[Verdict]) -> int:
        return fact_check_score(verdicts)

    def calculate_consistency(self, siblings: Sequence[Article]) -> int:
        return consistency_score([s.sentiment for s in siblings])

    def score(self, article: Article, siblings: Sequence[Article],
              fact_checks: Sequence[Verdict] = ()) -> ScoringResult:
        """
        Calculate the validity score of one article.

        Args:
            article: Article to score
            siblings: Other members of the article's cluster
            fact_checks: Fact-check verdicts for the article's claim, may be empty

        Returns:
            ScoringResult with the weighted breakdown
        """
        corroboration = self.calculate_corroboration(article, siblings)
        source_reliability = self.calculate_source_reliability(article.source)
        fact_check = self.calculate_fact_check(fact_checks)
        consistency = self.calculate_consistency(siblings)

        overall = round_half_up(
            corroboration * self.weights['corroboration']
            + source_reliability * self.weights['source_reliability']
            + fact_check * self.weights['fact_check']
            + consistency * self.weights['consistency']
        )

        return ScoringResult(
            overall=clamp(overall),
            corroboration=corroboration,
            source_reliability=source_reliability,
            fact_check=fact_check,
            consistency=consistency,
            breakdown=(
                BreakdownItem("Corroboration", corroboration, self.weights['corroboration']),
                BreakdownItem("Source Reliability", source_reliability, self.weights['source_reliability']),
                BreakdownItem("Fact Check", fact_check, self.weights['fact_check']),
                BreakdownItem("Consistency", consistency, self.weights['consistency']),
            ),
        )


def calculate_validity(article: Article, siblings: Sequence[Article],
                       fact_checks: Sequence[Verdict] = (),
                       trust_override: Optional[TrustOverride] = None) -> ScoringResult:
    """Score one article with a one-off ``ValidityScorer``."""
    return ValidityScorer(trust_override=trust_override).score(article, siblings, fact_checks)

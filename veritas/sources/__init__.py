"""Source reliability registry and trust baselines."""

from .ratings import (
    SOURCE_DATABASE,
    extract_domain,
    get_source_rating,
    get_sources_by_reliability,
    neutral_source,
    normalize_domain,
    resolve_source,
    resolve_source_for_url,
)
from .baseline import (
    TrustBaseline,
    apply_corroboration_bonus,
    compute_trust_baseline,
    multi_source_appearances,
)

__all__ = [
    'SOURCE_DATABASE',
    'extract_domain',
    'get_source_rating',
    'get_sources_by_reliability',
    'neutral_source',
    'normalize_domain',
    'resolve_source',
    'resolve_source_for_url',
    'TrustBaseline',
    'apply_corroboration_bonus',
    'compute_trust_baseline',
    'multi_source_appearances',
]

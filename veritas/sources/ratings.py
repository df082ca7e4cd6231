"""Pre-seeded source reliability registry.

Ratings follow publicly available media reliability assessments (Media
Bias/Fact Check, AllSides, Ad Fontes Media).

- factual_rating: 0-100 factual reporting score
- bias: political leaning classification
"""

from typing import Dict, List, Optional
from urllib.parse import urlparse

from veritas.core.logging import get_logger
from veritas.core.models import Bias, Source

logger = get_logger(__name__)

NEUTRAL_FACTUAL_RATING = 50

# (id, name, bias, factual_rating) keyed by canonical domain
_RATINGS = {
    "apnews.com": ("ap", "Associated Press", Bias.CENTER, 96),
    "reuters.com": ("reuters", "Reuters", Bias.CENTER, 95),
    "bbc.com": ("bbc", "BBC News", Bias.LEFT_CENTER, 90),
    # BBC links resolve to either host
    "bbc.co.uk": ("bbc", "BBC News", Bias.LEFT_CENTER, 90),
    "aljazeera.com": ("aljazeera", "Al Jazeera", Bias.LEFT_CENTER, 75),
    "npr.org": ("npr", "NPR", Bias.LEFT_CENTER, 88),
    "wsj.com": ("wsj", "Wall Street Journal", Bias.RIGHT_CENTER, 85),
    "nytimes.com": ("nyt", "New York Times", Bias.LEFT_CENTER, 82),
    "washingtonpost.com": ("wapo", "Washington Post", Bias.LEFT_CENTER, 80),
    "theguardian.com": ("guardian", "The Guardian", Bias.LEFT_CENTER, 78),
    "politico.com": ("politico", "Politico", Bias.LEFT_CENTER, 77),
    "abcnews.go.com": ("abc", "ABC News", Bias.LEFT_CENTER, 80),
    "cbsnews.com": ("cbs", "CBS News", Bias.LEFT_CENTER, 78),
    "news.sky.com": ("skynews", "Sky News", Bias.CENTER, 82),
    "dw.com": ("dw", "Deutsche Welle", Bias.CENTER, 88),
    "france24.com": ("france24", "France 24", Bias.CENTER, 85),
    "nypost.com": ("nypost", "New York Post", Bias.RIGHT_CENTER, 62),
    "telegraph.co.uk": ("telegraph", "The Telegraph", Bias.RIGHT_CENTER, 78),
    "timesofindia.indiatimes.com": ("toi", "Times of India", Bias.CENTER, 74),
    "scmp.com": ("scmp", "South China Morning Post", Bias.CENTER, 74),
    "cnn.com": ("cnn", "CNN", Bias.LEFT, 65),
    "msnbc.com": ("msnbc", "MSNBC", Bias.LEFT, 58),
    "foxnews.com": ("fox", "Fox News", Bias.RIGHT, 55),
    "huffpost.com": ("huffpost", "HuffPost", Bias.LEFT, 50),
    "dailywire.com": ("dailywire", "Daily Wire", Bias.RIGHT, 45),
    "breitbart.com": ("breitbart", "Breitbart", Bias.RIGHT, 30),
}

SOURCE_DATABASE: Dict[str, Source] = {
    domain: Source(id=source_id, name=name, domain=domain, bias=bias, factual_rating=rating)
    for domain, (source_id, name, bias, rating) in _RATINGS.items()
}


def normalize_domain(domain: str) -> str:
    """Canonical lowercase host with any leading ``www.`` removed."""
    domain = (domain or "").strip().lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def extract_domain(url: str) -> str:
    """Canonical domain of ``url``; empty string when it has no host."""
    try:
        host = urlparse(url or "").hostname or ""
    except ValueError:
        return ""
    return normalize_domain(host)


def get_source_rating(domain: str) -> Optional[Source]:
    """Look up a rated source by domain, or None when it is not registered."""
    return SOURCE_DATABASE.get(normalize_domain(domain))


def neutral_source(domain: str) -> Source:
    """Synthetic source used for outlets missing from the registry."""
    normalized = normalize_domain(domain)
    return Source(
        id=f"unrated-{normalized or 'unknown'}",
        name=normalized or "Unknown",
        domain=normalized,
        bias=Bias.CENTER,
        factual_rating=NEUTRAL_FACTUAL_RATING,
    )


def resolve_source(domain: str) -> Source:
    """Rated source for ``domain``, falling back to a neutral one."""
    source = get_source_rating(domain)
    if source is None:
        logger.debug(f"No rating for domain '{domain}', using neutral source")
        return neutral_source(domain)
    return source


def resolve_source_for_url(url: str, fallback_domain: str = "") -> Source:
    """Resolve the source of an article link, trying its own host first."""
    source = get_source_rating(extract_domain(url))
    if source is None and fallback_domain:
        source = get_source_rating(fallback_domain)
    return source or neutral_source(fallback_domain or extract_domain(url))


def get_sources_by_reliability() -> List[Source]:
    """All registered sources, highest factual rating first."""
    return sorted(SOURCE_DATABASE.values(), key=lambda s: s.factual_rating, reverse=True)

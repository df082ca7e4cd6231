"""Topic labels from the TF-IDF mass of a cluster's members."""

from typing import Dict, List, Sequence

from veritas.core.models import Article
from veritas.core.text import prepare_content_text
from veritas.engine.tfidf import build_corpus

DEFAULT_TOP_N = 3
TOPIC_SEPARATOR = " · "


def extract_top_keywords(articles: Sequence[Article], top_n: int = DEFAULT_TOP_N) -> List[str]:
    """
    Top terms of a cluster by TF-IDF weight summed across its members.

    IDF is computed over the cluster's own members. Ties keep the order in
    which terms were first seen.

    Args:
        articles: Members of one cluster
        top_n: Number of keywords to return

    Returns:
        Uppercased keywords, highest weight first
    """
    corpus = build_corpus([(a.id, prepare_content_text(a.title, a.summary)) for a in articles])

    aggregated: Dict[str, float] = {}
    for vector in corpus.vectors:
        for term, weight in vector.weights.items():
            aggregated[term] = aggregated.get(term, 0.0) + weight

    ranked = sorted(aggregated.items(), key=lambda item: item[1], reverse=True)
    return [term.upper() for term, _ in ranked[:top_n]]


def topic_label(keywords: Sequence[str], index: int) -> str:
    """Join keywords into a label, or name the story by its position."""
    if keywords:
        return TOPIC_SEPARATOR.join(keywords)
    return f"STORY {index + 1}"

"""Corpus-relative TF-IDF weighting for a batch of articles.

TF(t, d)  = count(t, d) / |tokens(d)|
IDF(t)    = ln((N + 1) / (DF(t) + 1)) + 1
weight    = TF x IDF

scikit-learn's ``TfidfVectorizer`` with ``smooth_idf=True`` and ``norm=None``
computes exactly this IDF over raw counts; rows are then divided by the
document length. A fresh vectorizer is fitted on every call so IDF always
reflects the current batch only.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from veritas.core.logging import get_logger
from veritas.core.text import tokenize

logger = get_logger(__name__)

Document = Tuple[str, str]  # (id, text)


@dataclass
class DocumentVector:
    """Term frequencies and TF-IDF weights of one document, in token order."""
    id: str
    term_frequencies: Dict[str, float] = field(default_factory=dict)
    weights: Dict[str, float] = field(default_factory=dict)


@dataclass
class TfidfCorpus:
    """Weights for every document of one batch.

    ``matrix`` has one row per document and one column per ``vocabulary``
    term, holding the same values as ``vectors[i].weights``.
    """
    vectors: List[DocumentVector]
    matrix: np.ndarray
    vocabulary: List[str]
    idf: Dict[str, float]


def _pretokenized(tokens: List[str]) -> List[str]:
    return tokens


def build_corpus(documents: Sequence[Document]) -> TfidfCorpus:
    """
    Build TF-IDF vectors for a batch of documents.

    Args:
        documents: (id, text) pairs in batch order

    Returns:
        TfidfCorpus scoped to this batch
    """
    ids = [doc_id for doc_id, _ in documents]
    token_lists = [tokenize(text) for _, text in documents]

    if not any(token_lists):
        if documents:
            logger.debug(f"No terms in {len(documents)} documents, vectors are empty")
        return TfidfCorpus(
            vectors=[DocumentVector(id=doc_id) for doc_id in ids],
            matrix=np.zeros((len(ids), 0)),
            vocabulary=[],
            idf={},
        )

    vectorizer = TfidfVectorizer(
        analyzer=_pretokenized,
        smooth_idf=True,
        sublinear_tf=False,
        norm=None,
    )
    counts_x_idf = vectorizer.fit_transform(token_lists).toarray()

    lengths = np.array([len(tokens) for tokens in token_lists], dtype=float)
    matrix = counts_x_idf / np.maximum(lengths, 1.0)[:, np.newaxis]

    vocabulary = vectorizer.get_feature_names_out().tolist()
    column = vectorizer.vocabulary_
    idf = {term: float(vectorizer.idf_[column[term]]) for term in vocabulary}

    vectors = []
    for row, (doc_id, tokens) in enumerate(zip(ids, token_lists)):
        total = len(tokens)
        counts = Counter(tokens)
        term_frequencies = {term: count / total for term, count in counts.items()}
        weights = {term: float(matrix[row, column[term]]) for term in counts}
        vectors.append(DocumentVector(id=doc_id, term_frequencies=term_frequencies, weights=weights))

    logger.debug(f"Built TF-IDF corpus: {len(ids)} documents, {len(vocabulary)} terms")
    return TfidfCorpus(vectors=vectors, matrix=matrix, vocabulary=vocabulary, idf=idf)


def build_document_vectors(documents: Sequence[Document]) -> List[DocumentVector]:
    """Convenience wrapper returning only the per-document vectors."""
    return build_corpus(documents).vectors

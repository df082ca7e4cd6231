"""Cosine similarity between TF-IDF vectors."""

import math
from typing import Mapping

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as pairwise_cosine


def magnitude(weights: Mapping[str, float]) -> float:
    """Euclidean norm over all terms of a vector."""
    return math.sqrt(sum(value * value for value in weights.values()))


def cosine_similarity(a: Mapping[str, float], b: Mapping[str, float]) -> float:
    """
    Cosine similarity of two sparse term-weight vectors.

    The dot product runs over the shared terms; the norms over each vector's
    full term set. A zero-magnitude vector is similar to nothing: 0.0.
    """
    mag_a = magnitude(a)
    mag_b = magnitude(b)
    if mag_a == 0 or mag_b == 0:
        return 0.0

    if len(b) < len(a):
        a, b = b, a
    dot = sum(value * b[term] for term, value in a.items() if term in b)
    return dot / (mag_a * mag_b)


def similarity_matrix(matrix: np.ndarray) -> np.ndarray:
    """
    Pairwise cosine similarity of every row of a document-term matrix.

    Rows with no weight compare as 0.0 against everything, themselves included.
    """
    matrix = np.asarray(matrix, dtype=float)
    n_docs = matrix.shape[0]
    if n_docs == 0 or matrix.shape[1] == 0:
        return np.zeros((n_docs, n_docs))

    sims = pairwise_cosine(matrix)
    empty = ~matrix.any(axis=1)
    sims[empty, :] = 0.0
    sims[:, empty] = 0.0
    return sims

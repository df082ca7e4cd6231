"""Tests for TF-IDF weighting and cosine similarity."""

import math

import numpy as np
import pytest

from veritas.engine.similarity import cosine_similarity, magnitude, similarity_matrix
from veritas.engine.tfidf import build_corpus, build_document_vectors


class TestTfidf:
    """Tests for build_corpus."""

    def test_idf_is_smoothed(self):
        corpus = build_corpus([("a", "apple banana"), ("b", "apple cherry")])

        assert corpus.idf["apple"] == pytest.approx(1.0)
        assert corpus.idf["banana"] == pytest.approx(math.log(3 / 2) + 1)

    def test_weights_are_tf_times_idf(self):
        vectors = build_document_vectors([("a", "apple apple banana"), ("b", "apple cherry")])
        first = vectors[0]

        assert first.term_frequencies["apple"] == pytest.approx(2 / 3)
        assert first.weights["apple"] == pytest.approx(2 / 3)
        assert first.weights["banana"] == pytest.approx((1 / 3) * (math.log(3 / 2) + 1))

    def test_weights_follow_token_order(self):
        vectors = build_document_vectors([("a", "zebra apple mango")])
        assert list(vectors[0].weights) == ["zebra", "apple", "mango"]

    def test_matrix_matches_vectors(self):
        corpus = build_corpus([("a", "apple banana"), ("b", "apple cherry")])
        column = corpus.vocabulary.index("banana")

        assert corpus.matrix.shape == (2, 3)
        assert corpus.matrix[0, column] == pytest.approx(corpus.vectors[0].weights["banana"])
        assert corpus.matrix[1, column] == 0.0

    def test_empty_batch(self):
        corpus = build_corpus([])
        assert corpus.vectors == []
        assert corpus.matrix.shape[0] == 0

    def test_documents_without_terms(self):
        corpus = build_corpus([("a", "the of and"), ("b", "")])
        assert [v.weights for v in corpus.vectors] == [{}, {}]
        assert corpus.vocabulary == []

    def test_empty_document_among_others(self):
        corpus = build_corpus([("a", "apple banana"), ("b", "")])
        assert corpus.vectors[1].weights == {}
        assert not corpus.matrix[1].any()


class TestCosineSimilarity:
    """Tests for cosine similarity."""

    def test_parallel_vectors(self):
        assert cosine_similarity({"a": 1.0, "b": 2.0}, {"a": 2.0, "b": 4.0}) == pytest.approx(1.0)

    def test_disjoint_vectors(self):
        assert cosine_similarity({"a": 1.0}, {"b": 1.0}) == 0.0

    def test_zero_magnitude(self):
        assert cosine_similarity({}, {"a": 1.0}) == 0.0
        assert cosine_similarity({"a": 0.0}, {"a": 1.0}) == 0.0

    def test_symmetric(self):
        a = {"x": 0.3, "y": 0.7, "z": 0.1}
        b = {"x": 0.5, "w": 0.2}
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_magnitude(self):
        assert magnitude({"a": 3.0, "b": 4.0}) == pytest.approx(5.0)

    def test_matrix_zeroes_empty_rows(self):
        sims = similarity_matrix(np.array([[1.0, 0.0], [0.0, 0.0], [2.0, 0.0]]))

        assert sims[0, 2] == pytest.approx(1.0)
        assert sims[1, 1] == 0.0
        assert sims[0, 1] == 0.0

    def test_matrix_agrees_with_dict_form(self):
        corpus = build_corpus([("a", "apple banana cherry"), ("b", "apple cherry date")])
        sims = similarity_matrix(corpus.matrix)
        expected = cosine_similarity(corpus.vectors[0].weights, corpus.vectors[1].weights)

        assert sims[0, 1] == pytest.approx(expected)

    def test_matrix_without_vocabulary(self):
        sims = similarity_matrix(np.zeros((3, 0)))
        assert sims.shape == (3, 3)
        assert not sims.any()

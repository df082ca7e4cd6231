"""Clustering engine: tokens to TF-IDF vectors to stories."""

from veritas.engine.cluster import SIMILARITY_THRESHOLD, StoryClusterer, cluster_articles, greedy_partition
from veritas.engine.keywords import extract_top_keywords, topic_label
from veritas.engine.pipeline import StoryPipeline, build_clusters, validate_articles
from veritas.engine.similarity import cosine_similarity, similarity_matrix
from veritas.engine.tfidf import DocumentVector, TfidfCorpus, build_corpus, build_document_vectors

__all__ = [
    "SIMILARITY_THRESHOLD",
    "DocumentVector",
    "StoryClusterer",
    "StoryPipeline",
    "TfidfCorpus",
    "build_clusters",
    "build_corpus",
    "build_document_vectors",
    "cluster_articles",
    "cosine_similarity",
    "extract_top_keywords",
    "greedy_partition",
    "similarity_matrix",
    "topic_label",
    "validate_articles",
]

"""
Similar Jobs Package
"""
from .scorer import (
    WEIGHTS,
    ScoredJob,
    SimilarityWeights,
    calculate_similarity,
    rank_similar_jobs,
)

__all__ = [
    "WEIGHTS",
    "ScoredJob",
    "SimilarityWeights",
    "calculate_similarity",
    "rank_similar_jobs",
]

"""
SimilarityScore Value Object
Weighted similarity between two job postings (0-1)
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SimilarityScore:
    """Similarity score with its per-attribute contributions - immutable"""

    value: float
    location: float = 0.0
    title: float = 0.0
    category: float = 0.0
    seniority: float = 0.0

    def __post_init__(self):
        """Validate score range"""
        if not isinstance(self.value, (int, float)):
            raise TypeError("Similarity score must be a number")

        if not 0 <= self.value <= 1:
            raise ValueError("Similarity score must be between 0 and 1")

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return f"{self.value:.2f}"

    def __repr__(self) -> str:
        return f"SimilarityScore({self.value})"

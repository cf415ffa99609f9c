"""
Similar Jobs Scorer
Weighted attribute matching between a reference job and a candidate pool.

The candidate pool is already narrowed by storage (same category or city,
reference job excluded); this module only scores and ranks it.
"""
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from domain.entities import Job
from domain.enums import Seniority
from domain.value_objects import SimilarityScore


@dataclass(frozen=True)
class SimilarityWeights:
    """Relative importance of each attribute; must add up to 1"""
    location: float
    title: float
    category: float
    seniority: float

    def __post_init__(self):
        total = self.location + self.title + self.category + self.seniority
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Similarity weights must sum to 1.0, got {total}")


WEIGHTS = SimilarityWeights(location=0.30, title=0.40, category=0.20, seniority=0.10)

# Same region but different city earns this share of the location weight
REGION_CREDIT = 0.5

DEFAULT_SENIORITY = Seniority.MID.value


@dataclass(frozen=True)
class ScoredJob:
    """Candidate job with its similarity to the reference"""
    job: Job
    score: SimilarityScore

    @property
    def job_id(self):
        return self.job.id


def _value(v: Any) -> Any:
    return v.value if hasattr(v, "value") else v


def _title_words(job: Any) -> List[str]:
    title = getattr(job, "title", None) or ""
    return title.lower().split()


def _location_attr(job: Any, name: str) -> Optional[str]:
    location = getattr(job, "location", None)
    return getattr(location, name, None) if location is not None else None


def location_score(reference: Any, candidate: Any, weights: SimilarityWeights = WEIGHTS) -> float:
    ref_city = _location_attr(reference, "city")
    if ref_city and ref_city == _location_attr(candidate, "city"):
        return weights.location
    ref_region = _location_attr(reference, "region")
    if ref_region and ref_region == _location_attr(candidate, "region"):
        return weights.location * REGION_CREDIT
    return 0.0


def title_score(reference: Any, candidate: Any, weights: SimilarityWeights = WEIGHTS) -> float:
    """
    Keyword overlap between titles.

    A reference word matches when it is contained in some candidate word or
    contains one. Each reference word counts at most once; repeated reference
    words count separately.
    """
    ref_words = _title_words(reference)
    cand_words = _title_words(candidate)
    if not ref_words or not cand_words:
        return 0.0

    matched = sum(
        1 for word in ref_words
        if any(word in other or other in word for other in cand_words)
    )
    return weights.title * matched / max(len(ref_words), len(cand_words))


def category_score(reference: Any, candidate: Any, weights: SimilarityWeights = WEIGHTS) -> float:
    ref_category = _value(getattr(reference, "category", None))
    if ref_category is not None and ref_category == _value(getattr(candidate, "category", None)):
        return weights.category
    return 0.0


def seniority_score(reference: Any, candidate: Any, weights: SimilarityWeights = WEIGHTS) -> float:
    ref_level = _value(getattr(reference, "seniority", None)) or DEFAULT_SENIORITY
    cand_level = _value(getattr(candidate, "seniority", None)) or DEFAULT_SENIORITY
    return weights.seniority if ref_level == cand_level else 0.0


def calculate_similarity(reference: Any, candidate: Any, weights: SimilarityWeights = WEIGHTS) -> SimilarityScore:
    """Similarity of candidate to reference, rounded to 2 decimals and clamped to [0, 1]"""
    loc = location_score(reference, candidate, weights)
    title = title_score(reference, candidate, weights)
    cat = category_score(reference, candidate, weights)
    sen = seniority_score(reference, candidate, weights)

    total = min(1.0, max(0.0, round(loc + title + cat + sen, 2)))
    return SimilarityScore(
        value=total,
        location=round(loc, 2),
        title=round(title, 2),
        category=round(cat, 2),
        seniority=round(sen, 2),
    )


def rank_similar_jobs(
    reference: Any,
    candidates: Sequence[Any],
    limit: int = 4,
    weights: SimilarityWeights = WEIGHTS,
) -> List[ScoredJob]:
    """
    Score every candidate and return the best `limit` of them.

    Sorting is stable: candidates with equal scores keep their input order.
    Neither the reference nor the candidate sequence is modified.
    """
    if limit <= 0 or not candidates:
        return []

    scored = [ScoredJob(job=c, score=calculate_similarity(reference, c, weights)) for c in candidates]
    scored.sort(key=lambda s: s.score.value, reverse=True)
    return scored[:limit]

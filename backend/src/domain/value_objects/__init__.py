"""Value Objects - Immutable objects defined by their attributes"""

from .salary_range import SalaryRange
from .job_status import JobStatus
from .location import JobLocation
from .platform_categories import PlatformCategories
from .pricing import JobPricing, PriceAdjustment
from .similarity_score import SimilarityScore
__all__ = [
    "SalaryRange",
    "JobStatus",
    "JobLocation",
    "PlatformCategories",
    "JobPricing",
    "PriceAdjustment",
    "SimilarityScore",
]

"""
Query Criteria
Storage-agnostic filter objects passed to repositories
"""
from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID


SORT_FIELDS = ("posted_at", "salary", "title", "view_count")


@dataclass(frozen=True)
class JobSearchCriteria:
    """Public job board filters"""
    search: Optional[str] = None
    cities: List[str] = field(default_factory=list)
    job_types: List[str] = field(default_factory=list)
    category: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    company_id: Optional[UUID] = None
    # Platform category flags that must be set on the job
    platform_flags: List[str] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    sort_by: str = "posted_at"
    sort_order: str = "desc"
    # Set when a filter value can never match (e.g. malformed company id)
    match_nothing: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page:
    """Pagination block returned alongside list results"""
    current_page: int
    total_pages: int
    total_items: int
    limit: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Page":
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(current_page=page, total_pages=total_pages, total_items=total, limit=limit)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    def to_dict(self, total_key: str = "total_jobs") -> dict:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            total_key: self.total_items,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
        }

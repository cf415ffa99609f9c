"""
Job Input Parsing Utilities
Slugs and job board query string parsing
"""
import re
import unicodedata
from typing import List, Optional
from uuid import UUID

from application.repositories.criteria import JobSearchCriteria, SORT_FIELDS
from domain.enums import PLATFORM_CATEGORY_FLAGS


def slugify(title: str) -> str:
    """
    Build a URL slug from a job title

    Examples:
    - "Zhvillues Python në Tiranë" -> "zhvillues-python-ne-tirane"
    - "  C++ / .NET Developer " -> "c-net-developer"
    """
    # ë -> e, ç -> c
    text = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r'[^a-z0-9\s-]', '', text)
    text = re.sub(r'[\s-]+', '-', text).strip('-')
    return text or "job"


def parse_csv(value: Optional[str]) -> List[str]:
    """
    Split a comma separated query value

    "Tiranë, Durrës,," -> ["Tiranë", "Durrës"]
    """
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def parse_uuid(value: Optional[str]) -> Optional[UUID]:
    if not value:
        return None
    try:
        return UUID(value)
    except (ValueError, AttributeError):
        return None


def is_true(value: Optional[str]) -> bool:
    """Query flags count only when literally 'true'"""
    return value is not None and value.strip().lower() == "true"


def build_search_criteria(
    search: Optional[str] = None,
    city: Optional[str] = None,
    job_type: Optional[str] = None,
    category: Optional[str] = None,
    min_salary: Optional[float] = None,
    max_salary: Optional[float] = None,
    company: Optional[str] = None,
    flags: Optional[dict] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "posted_at",
    sort_order: str = "desc",
) -> JobSearchCriteria:
    """
    Translate raw job board query parameters into search criteria

    Args:
        flags: platform category flag name -> raw query value

    Returns:
        JobSearchCriteria; match_nothing is set when company is not a valid id
    """
    company_id = parse_uuid(company)
    flags = flags or {}

    return JobSearchCriteria(
        search=search.strip() if search and search.strip() else None,
        cities=parse_csv(city),
        job_types=parse_csv(job_type),
        category=category or None,
        min_salary=min_salary,
        max_salary=max_salary,
        company_id=company_id,
        platform_flags=[f for f in PLATFORM_CATEGORY_FLAGS if is_true(flags.get(f))],
        page=page,
        limit=limit,
        sort_by=sort_by if sort_by in SORT_FIELDS else "posted_at",
        sort_order="asc" if sort_order == "asc" else "desc",
        match_nothing=bool(company) and company_id is None,
    )

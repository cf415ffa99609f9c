"""
Salary Range Value Object
Immutable monthly salary range with validation
"""
from dataclasses import dataclass
from typing import Optional

from ..enums import Currency


@dataclass(frozen=True)
class SalaryRange:
    """Salary offered by a job posting; both bounds are optional"""

    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    currency: Currency = Currency.EUR
    negotiable: bool = True
    show_public: bool = True

    def __post_init__(self):
        """Validate salary range"""
        if self.min_salary is not None and self.min_salary < 0:
            raise ValueError("Minimum salary cannot be negative")

        if self.max_salary is not None:
            if self.max_salary < 0:
                raise ValueError("Maximum salary cannot be negative")
            if self.min_salary is not None and self.max_salary < self.min_salary:
                raise ValueError("Maximum salary cannot be less than minimum salary")

    def contains(self, salary: float) -> bool:
        """Check if salary falls within range"""
        if self.min_salary is not None and salary < self.min_salary:
            return False
        if self.max_salary is not None and salary > self.max_salary:
            return False
        return True

    def __str__(self) -> str:
        code = self.currency.value
        if self.min_salary is None and self.max_salary is None:
            return "Negotiable"
        if self.min_salary == self.max_salary:
            return f"{self.min_salary:,.0f} {code}"
        if self.min_salary is not None and self.max_salary is not None:
            return f"{self.min_salary:,.0f}-{self.max_salary:,.0f} {code}"
        if self.min_salary is not None:
            return f"From {self.min_salary:,.0f} {code}"
        return f"Up to {self.max_salary:,.0f} {code}"

"""
Job Status
Posting lifecycle and the transitions allowed between states
"""
from enum import Enum
from typing import Dict, FrozenSet


class JobStatus(str, Enum):
    """Job posting status"""
    DRAFT = "draft"
    PENDING_PAYMENT = "pending_payment"
    ACTIVE = "active"
    PAUSED = "paused"
    EXPIRED = "expired"
    CLOSED = "closed"

    @property
    def is_terminal(self) -> bool:
        return self is JobStatus.CLOSED

    def can_transition_to(self, target: "JobStatus") -> bool:
        """Check whether moving from this status to target is allowed"""
        return target in _TRANSITIONS[self]


_TRANSITIONS: Dict[JobStatus, FrozenSet[JobStatus]] = {
    JobStatus.DRAFT: frozenset({JobStatus.PENDING_PAYMENT, JobStatus.ACTIVE, JobStatus.CLOSED}),
    JobStatus.PENDING_PAYMENT: frozenset({JobStatus.ACTIVE, JobStatus.CLOSED}),
    JobStatus.ACTIVE: frozenset({JobStatus.PAUSED, JobStatus.EXPIRED, JobStatus.CLOSED}),
    JobStatus.PAUSED: frozenset({JobStatus.ACTIVE, JobStatus.CLOSED}),
    JobStatus.EXPIRED: frozenset({JobStatus.CLOSED}),
    JobStatus.CLOSED: frozenset(),
}

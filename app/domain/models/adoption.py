from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AdoptionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# pending is the only state that can still move; approved and rejected are final.
ALLOWED_TRANSITIONS = {
    AdoptionStatus.PENDING: frozenset({AdoptionStatus.APPROVED, AdoptionStatus.REJECTED}),
    AdoptionStatus.APPROVED: frozenset(),
    AdoptionStatus.REJECTED: frozenset(),
}


@dataclass(slots=True)
class Adoption:
    id: int
    owner: int
    pet: int
    status: AdoptionStatus
    created_at: datetime
    updated_at: datetime

    def can_transition_to(self, status: AdoptionStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]

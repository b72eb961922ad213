"""
SEGMENT PERIOD LIFECYCLE RULES

This module defines the ONLY allowed lifecycle transitions
for segment periods.

    DRAFT ──validate──▶ VALIDATED ──save──▶ SAVED
      ▲                    │
      └──────edit──────────┘

DESIGN PRINCIPLES:
- No database writes
- No side effects
- Single source of truth
"""

from common.exceptions import DomainValidationError
from segments.domain import STATUS_DRAFT, STATUS_SAVED, STATUS_VALIDATED

# ============================================================
# DOMAIN ERRORS
# ============================================================


class InvalidPeriodTransitionError(DomainValidationError):
    pass


# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    STATUS_SAVED,
}

ALLOWED_TRANSITIONS = {
    STATUS_DRAFT: {
        STATUS_VALIDATED,
    },
    STATUS_VALIDATED: {
        STATUS_SAVED,
        STATUS_DRAFT,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, from_status: str, to_status: str):
    if not can_transition(from_status=from_status, to_status=to_status):
        raise InvalidPeriodTransitionError(
            f"Segment period cannot transition from '{from_status}' to '{to_status}'"
        )

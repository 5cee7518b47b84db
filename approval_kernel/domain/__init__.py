"""
Pure domain layer.

This module contains the value objects and predicates of the approval
workflow with NO dependencies on:
- Logging or other output
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from approval_kernel.domain.checks import (
    CheckName,
    CheckSet,
    DecisionCheck,
    always_pass,
)
from approval_kernel.domain.outcome import (
    NO_APPROVER_AVAILABLE,
    DecisionOutcome,
    DecisionStatus,
    RejectionKind,
)
from approval_kernel.domain.request import ExpenseRequest

__all__ = [
    "CheckName",
    "CheckSet",
    "DecisionCheck",
    "always_pass",
    "NO_APPROVER_AVAILABLE",
    "DecisionOutcome",
    "DecisionStatus",
    "RejectionKind",
    "ExpenseRequest",
]

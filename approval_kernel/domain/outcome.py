"""
Decision outcome (``approval_kernel.domain.outcome``).

Responsibility
--------------
The terminal result of pushing one request through an approval chain:
approved by a named approver, or rejected with a reason.

Architecture position
---------------------
**Kernel domain layer** -- pure value object, produced per request and
never persisted.

Invariants enforced
-------------------
* An approved outcome always names its approver.
* A rejected outcome always carries a ``RejectionKind``; a check-failure
  rejection also names the failed check and the approver that ran it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import UUID

from approval_kernel.domain.checks import CheckName
from approval_kernel.domain.request import ExpenseRequest

NO_APPROVER_AVAILABLE = "no approver available"


class DecisionStatus(str, Enum):
    """Final status of a request."""

    APPROVED = "approved"
    REJECTED = "rejected"


class RejectionKind(str, Enum):
    """Why a request was rejected."""

    CHECK_FAILED = "check_failed"
    NO_APPROVER_AVAILABLE = "no_approver_available"


@dataclass(frozen=True)
class DecisionOutcome:
    """Result of processing a request. Immutable."""

    status: DecisionStatus
    request_id: UUID
    approver: str | None = None
    failed_check: CheckName | None = None
    rejection: RejectionKind | None = None
    reason: str = ""

    @classmethod
    def approved(cls, request: ExpenseRequest, approver: str) -> DecisionOutcome:
        return cls(
            status=DecisionStatus.APPROVED,
            request_id=request.request_id,
            approver=approver,
            reason=f"Approved by {approver}",
        )

    @classmethod
    def rejected_by_check(
        cls,
        request: ExpenseRequest,
        approver: str,
        check: CheckName,
    ) -> DecisionOutcome:
        return cls(
            status=DecisionStatus.REJECTED,
            request_id=request.request_id,
            approver=approver,
            failed_check=check,
            rejection=RejectionKind.CHECK_FAILED,
            reason=f"{check.value} check failed",
        )

    @classmethod
    def no_approver_available(cls, request: ExpenseRequest) -> DecisionOutcome:
        return cls(
            status=DecisionStatus.REJECTED,
            request_id=request.request_id,
            rejection=RejectionKind.NO_APPROVER_AVAILABLE,
            reason=NO_APPROVER_AVAILABLE,
        )

    @property
    def is_approved(self) -> bool:
        return self.status == DecisionStatus.APPROVED

    @property
    def is_rejected(self) -> bool:
        return self.status == DecisionStatus.REJECTED

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "status": self.status.value,
            "request_id": str(self.request_id),
            "approver": self.approver,
            "failed_check": self.failed_check.value if self.failed_check else None,
            "rejection": self.rejection.value if self.rejection else None,
            "reason": self.reason,
        }

"""
Decision checks (``approval_kernel.domain.checks``).

Responsibility
--------------
The five named predicates an approver must satisfy before approving:
receipt validity, budget availability, policy compliance, strategic
alignment and board approval.

Architecture position
---------------------
**Kernel domain layer** -- pure.  The default predicates are stubs that
always pass; real implementations (a budgeting service, a compliance
engine) are injected by replacing entries of a ``CheckSet``.

Invariants enforced
-------------------
* Each check is independently substitutable -- replacing one never
  touches approver logic or the other four.
* ``CheckSet.run`` always returns a ``bool``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from approval_kernel.domain.request import ExpenseRequest


class CheckName(str, Enum):
    """Identifiers of the decision checks, in ascending order of authority."""

    RECEIPT = "receipt"
    BUDGET = "budget"
    POLICY = "policy"
    STRATEGIC_ALIGNMENT = "strategic_alignment"
    BOARD_APPROVAL = "board_approval"


class DecisionCheck(Protocol):
    """A predicate over an expense request."""

    def __call__(self, request: ExpenseRequest) -> bool:
        ...


def always_pass(request: ExpenseRequest) -> bool:
    """Stub check: accepts every request."""
    return True


@dataclass(frozen=True)
class CheckSet:
    """
    The injectable capability set consulted by approvers.

    Budget availability reads ``request.department`` and ``request.amount``;
    the other checks may use any field of the request.
    """

    receipt: DecisionCheck = always_pass
    budget: DecisionCheck = always_pass
    policy: DecisionCheck = always_pass
    strategic_alignment: DecisionCheck = always_pass
    board_approval: DecisionCheck = always_pass

    def get(self, name: CheckName) -> DecisionCheck:
        return getattr(self, CheckName(name).value)

    def run(self, name: CheckName, request: ExpenseRequest) -> bool:
        return bool(self.get(name)(request))

    def replace(self, **overrides: DecisionCheck) -> CheckSet:
        """Return a copy with the named checks substituted."""
        return dataclasses.replace(self, **overrides)

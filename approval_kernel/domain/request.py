"""
Expense request (``approval_kernel.domain.request``).

Responsibility
--------------
The immutable value an approval chain decides on: who is claiming, how
much, for what, and which department's budget it draws on.

Architecture position
---------------------
**Kernel domain layer** -- pure value object.  ZERO I/O.

Invariants enforced
-------------------
* Immutable once constructed (frozen dataclass).
* ``amount`` is always a finite, non-negative ``Decimal`` (never float).
* ``requester``, ``purpose`` and ``department`` are non-blank.

Failure modes
-------------
* ``InvalidRequestError`` at construction -- invalid requests never reach
  an approver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from uuid import UUID, uuid4

from approval_kernel.exceptions import InvalidRequestError

_TEXT_FIELDS = ("requester", "purpose", "department")


def _coerce_amount(value: object) -> Decimal:
    """Convert ``value`` to a finite, non-negative Decimal or raise."""
    # bool is an int subclass; float would carry binary rounding error
    if isinstance(value, (bool, float)) or value is None:
        raise InvalidRequestError("amount", value, "must be a Decimal, int or numeric string")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation:
            raise InvalidRequestError("amount", value, "not a decimal number") from None
    else:
        raise InvalidRequestError("amount", value, "must be a Decimal, int or numeric string")

    if not amount.is_finite():
        raise InvalidRequestError("amount", value, "must be finite")
    if amount < 0:
        raise InvalidRequestError("amount", value, "must not be negative")
    return amount


@dataclass(frozen=True)
class ExpenseRequest:
    """
    One expense claim submitted for approval.

    Approvers only read it; the same instance is handed unchanged from
    approver to approver along the chain.
    """

    requester: str
    amount: Decimal
    purpose: str
    department: str
    request_id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        for name in _TEXT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidRequestError(name, value, "is required")
        # Override frozen to store the normalized amount
        object.__setattr__(self, "amount", _coerce_amount(self.amount))

"""
approval_engines.approvers -- Approvers and the standard authority tiers.

Responsibility:
    Decide a request when its amount is within the approver's limit,
    otherwise hand the unchanged request to the next approver.

Architecture position:
    Engines -- pure decision layer, zero I/O.
    May only import approval_kernel types.  Progress is announced through
    an injected ``ApprovalReporter``; decisions never depend on it.

Invariants enforced:
    - Inclusive limits: an approver with limit L decides every amount <= L.
      ``limit=None`` is an unlimited (terminal) authority.
    - Short-circuit: required checks run in tier order and stop at the
      first failure, which is reported as a rejection, never escalated.
    - Single decision: exactly one approver (or the exhausted-chain rule)
      produces the outcome for a request.
    - Check-set monotonicity: each standard tier requires every check of
      the tier below it, in the same order, plus more.
    - Links are set once: ``try_set_successor`` refuses to relink, to link
      an approver whose links lead back to itself, or to link at all once
      the approver has been sealed into a built chain.

Failure modes:
    - None at decision time.  Check failures and exhausted chains are
      ``DecisionOutcome`` rejections.  Topology errors are raised by
      ``approval_engines.chain`` at build time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable

from approval_kernel.domain.checks import CheckName, CheckSet
from approval_kernel.domain.outcome import DecisionOutcome
from approval_kernel.domain.request import ExpenseRequest
from approval_kernel.exceptions import ChainCycleError
from approval_kernel.logging_config import LogContext
from approval_kernel.reporting import ApprovalReporter, LoggingReporter


@runtime_checkable
class Approver(Protocol):
    """A unit of the chain that either decides a request or delegates it."""

    @property
    def name(self) -> str:
        ...

    @property
    def successor(self) -> Approver | None:
        ...

    @property
    def is_sealed(self) -> bool:
        ...

    def decide(self, request: ExpenseRequest) -> DecisionOutcome:
        ...

    def try_set_successor(self, approver: Approver) -> bool:
        ...

    def seal(self) -> None:
        ...


# =========================================================================
# Shared helpers
# =========================================================================


def chain_members(head: Approver) -> tuple[Approver, ...]:
    """Walk the successor links from ``head``.

    Raises:
        ChainCycleError: if an approver is reached twice.
    """
    members: list[Approver] = []
    seen: set[int] = set()
    node: Approver | None = head
    while node is not None:
        if id(node) in seen:
            raise ChainCycleError([m.name for m in members] + [node.name])
        seen.add(id(node))
        members.append(node)
        node = node.successor
    return tuple(members)


def can_link(owner: Approver, successor: Approver) -> bool:
    """True if ``owner`` may take ``successor`` as its next approver.

    Refused when ``owner`` is sealed or already linked, and when the
    successor's links reach ``owner`` (or already loop on their own).
    """
    if owner.is_sealed or owner.successor is not None:
        return False
    try:
        downstream = chain_members(successor)
    except ChainCycleError:
        return False
    return all(member is not owner for member in downstream)


def delegate(
    approver_name: str,
    successor: Approver | None,
    request: ExpenseRequest,
    reporter: ApprovalReporter,
) -> DecisionOutcome:
    """Forward ``request`` to ``successor``; reject if the chain ends here."""
    reporter.delegated(approver_name, successor.name if successor else None, request)
    if successor is None:
        return DecisionOutcome.no_approver_available(request)
    return successor.decide(request)


def run_required_checks(
    approver_name: str,
    required: tuple[CheckName, ...],
    checks: CheckSet,
    request: ExpenseRequest,
    reporter: ApprovalReporter,
) -> CheckName | None:
    """Run ``required`` checks in order; return the first that fails, else None."""
    for check in required:
        passed = checks.run(check, request)
        reporter.check_evaluated(approver_name, check, passed)
        if not passed:
            return check
    return None


# =========================================================================
# Concrete approver
# =========================================================================


class LimitApprover:
    """
    Approver authorized up to a monetary limit.

    Contract:
        If ``request.amount <= limit`` (or the limit is unlimited) the
        approver runs its required checks and decides.  Otherwise it
        delegates to its successor.  It holds a non-owning link to the
        successor; the chain builder decides who that is.
    """

    def __init__(
        self,
        name: str,
        limit: Decimal | None,
        required_checks: tuple[CheckName, ...],
        *,
        checks: CheckSet | None = None,
        reporter: ApprovalReporter | None = None,
    ):
        if not name or not name.strip():
            raise ValueError("Approver name is required")
        if limit is not None:
            limit = Decimal(limit)
            if limit < 0:
                raise ValueError(f"Approver limit must not be negative: {limit}")
        self._name = name
        self._limit = limit
        self._required_checks = tuple(CheckName(c) for c in required_checks)
        self._checks = checks or CheckSet()
        self._reporter = reporter or LoggingReporter()
        self._successor: Approver | None = None
        self._sealed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def limit(self) -> Decimal | None:
        return self._limit

    @property
    def required_checks(self) -> tuple[CheckName, ...]:
        return self._required_checks

    @property
    def successor(self) -> Approver | None:
        return self._successor

    def can_decide(self, request: ExpenseRequest) -> bool:
        return self._limit is None or request.amount <= self._limit

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def try_set_successor(self, approver: Approver) -> bool:
        if not can_link(self, approver):
            return False
        self._successor = approver
        return True

    def decide(self, request: ExpenseRequest) -> DecisionOutcome:
        if not self.can_decide(request):
            with LogContext.bind(approver=self._name):
                return delegate(self._name, self._successor, request, self._reporter)

        with LogContext.bind(approver=self._name):
            self._reporter.evaluating(self._name, request)
            failed = run_required_checks(
                self._name, self._required_checks, self._checks, request, self._reporter
            )
        if failed is not None:
            return DecisionOutcome.rejected_by_check(request, self._name, failed)
        return DecisionOutcome.approved(request, self._name)

    def __repr__(self) -> str:
        limit = "unlimited" if self._limit is None else str(self._limit)
        return f"LimitApprover({self._name!r}, limit={limit})"


# =========================================================================
# Standard tiers
# =========================================================================


@dataclass(frozen=True)
class TierDefinition:
    """Name, limit and ordered required checks of one authority tier."""

    name: str
    limit: Decimal | None
    required_checks: tuple[CheckName, ...]


SUPERVISOR = TierDefinition(
    name="Supervisor",
    limit=Decimal("100"),
    required_checks=(CheckName.RECEIPT, CheckName.BUDGET),
)
MANAGER = TierDefinition(
    name="Manager",
    limit=Decimal("500"),
    required_checks=SUPERVISOR.required_checks + (CheckName.POLICY,),
)
DIRECTOR = TierDefinition(
    name="Director",
    limit=Decimal("5000"),
    required_checks=MANAGER.required_checks + (CheckName.STRATEGIC_ALIGNMENT,),
)
CHIEF_EXECUTIVE = TierDefinition(
    name="CEO",
    limit=None,
    required_checks=DIRECTOR.required_checks + (CheckName.BOARD_APPROVAL,),
)

STANDARD_TIERS: tuple[TierDefinition, ...] = (
    SUPERVISOR,
    MANAGER,
    DIRECTOR,
    CHIEF_EXECUTIVE,
)


def approver_from_tier(
    tier: TierDefinition,
    *,
    checks: CheckSet | None = None,
    reporter: ApprovalReporter | None = None,
) -> LimitApprover:
    return LimitApprover(
        tier.name,
        tier.limit,
        tier.required_checks,
        checks=checks,
        reporter=reporter,
    )


def supervisor(
    *, checks: CheckSet | None = None, reporter: ApprovalReporter | None = None
) -> LimitApprover:
    return approver_from_tier(SUPERVISOR, checks=checks, reporter=reporter)


def manager(
    *, checks: CheckSet | None = None, reporter: ApprovalReporter | None = None
) -> LimitApprover:
    return approver_from_tier(MANAGER, checks=checks, reporter=reporter)


def director(
    *, checks: CheckSet | None = None, reporter: ApprovalReporter | None = None
) -> LimitApprover:
    return approver_from_tier(DIRECTOR, checks=checks, reporter=reporter)


def chief_executive(
    *, checks: CheckSet | None = None, reporter: ApprovalReporter | None = None
) -> LimitApprover:
    return approver_from_tier(CHIEF_EXECUTIVE, checks=checks, reporter=reporter)

"""
Module: approval_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the approval
    decision layer: approvers, the chain builder and the workflow entry
    point.

Architecture position:
    Engines -- pure decision layer, zero I/O apart from the injected
    reporter and structured log records.
    May only import approval_kernel (and sibling engine modules).
    MUST NOT import approval_config.

Usage:
    from approval_engines import build_standard_chain, process
    from approval_kernel.domain import ExpenseRequest

    head = build_standard_chain()
    outcome = process(head, ExpenseRequest("Ana", Decimal("350.00"), "Training", "HR"))
"""

from approval_engines.approvers import (
    CHIEF_EXECUTIVE,
    DIRECTOR,
    MANAGER,
    STANDARD_TIERS,
    SUPERVISOR,
    Approver,
    LimitApprover,
    TierDefinition,
    approver_from_tier,
    can_link,
    chief_executive,
    delegate,
    director,
    manager,
    run_required_checks,
    supervisor,
)
from approval_engines.chain import ChainBuilder, build_standard_chain, chain_members
from approval_engines.workflow import process, process_many

__all__ = [
    "CHIEF_EXECUTIVE",
    "DIRECTOR",
    "MANAGER",
    "STANDARD_TIERS",
    "SUPERVISOR",
    "Approver",
    "LimitApprover",
    "TierDefinition",
    "approver_from_tier",
    "can_link",
    "chief_executive",
    "delegate",
    "director",
    "manager",
    "run_required_checks",
    "supervisor",
    "ChainBuilder",
    "build_standard_chain",
    "chain_members",
    "process",
    "process_many",
]

"""
approval_engines.chain -- Approval chain construction.

Responsibility:
    Assemble approvers into an ordered, acyclic chain before any request
    is processed, and seal it so the links are read-only afterwards.

Architecture position:
    Engines -- construction step for the decision layer.  Emits one log
    record per link and one when the chain is built.

Invariants enforced:
    - Append-only: approvers are only ever linked at the tail.
    - Acyclic: an approver already in the chain, already linked to a
      successor, or whose links lead back into the chain is refused.
    - Sealed after build: ``build`` seals every member.  ``append`` after
      ``build`` raises, a sealed approver cannot join another builder, and
      its own ``try_set_successor`` refuses from then on.

Failure modes:
    - DuplicateApproverError: the approver is already a chain member.
    - ChainCycleError: the link would loop or the approver is pre-linked.
    - EmptyChainError: ``build`` on an empty builder.
    - ChainSealedError: ``append`` after ``build``, or of an approver that
      already belongs to a built chain.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from approval_engines.approvers import (
    STANDARD_TIERS,
    Approver,
    TierDefinition,
    approver_from_tier,
    chain_members,
)
from approval_kernel.domain.checks import CheckSet
from approval_kernel.exceptions import (
    ChainCycleError,
    ChainSealedError,
    DuplicateApproverError,
    EmptyChainError,
)
from approval_kernel.logging_config import get_logger
from approval_kernel.reporting import ApprovalReporter

__all__ = ["ChainBuilder", "build_standard_chain", "chain_members"]

logger = get_logger("engines.chain")


class ChainBuilder:
    """
    Builds an approval chain one approver at a time.

    Usage::

        head = (
            ChainBuilder()
            .append(supervisor())
            .append(manager())
            .append(chief_executive())
            .build()
        )
    """

    def __init__(self, approvers: Iterable[Approver] = ()):
        self._approvers: list[Approver] = []
        self._member_ids: set[int] = set()
        self._sealed = False
        for approver in approvers:
            self.append(approver)

    def append(self, approver: Approver) -> ChainBuilder:
        if self._sealed or approver.is_sealed:
            raise ChainSealedError(approver.name)
        if id(approver) in self._member_ids:
            raise DuplicateApproverError(approver.name)
        if approver.successor is not None:
            # Pre-linked approvers could lead back into this chain
            path = [approver.name] + [m.name for m in chain_members(approver.successor)]
            raise ChainCycleError(path)

        if self._approvers:
            tail = self._approvers[-1]
            if not tail.try_set_successor(approver):
                raise ChainCycleError([tail.name, approver.name])

        self._approvers.append(approver)
        self._member_ids.add(id(approver))
        logger.debug(
            "approval_chain_linked",
            extra={"approver": approver.name, "position": len(self._approvers)},
        )
        return self

    def build(self) -> Approver:
        """Seal the chain and return its head."""
        if not self._approvers:
            raise EmptyChainError()
        self._sealed = True
        for approver in self._approvers:
            approver.seal()
        logger.info(
            "approval_chain_built",
            extra={"approvers": [a.name for a in self._approvers]},
        )
        return self._approvers[0]

    @property
    def head(self) -> Approver | None:
        return self._approvers[0] if self._approvers else None

    @property
    def approvers(self) -> tuple[Approver, ...]:
        return tuple(self._approvers)

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        return len(self._approvers)

    def __iter__(self) -> Iterator[Approver]:
        return iter(tuple(self._approvers))


def build_standard_chain(
    *,
    checks: CheckSet | None = None,
    reporter: ApprovalReporter | None = None,
    tiers: tuple[TierDefinition, ...] = STANDARD_TIERS,
) -> Approver:
    """Build the Supervisor -> Manager -> Director -> CEO chain."""
    builder = ChainBuilder()
    for tier in tiers:
        builder.append(approver_from_tier(tier, checks=checks, reporter=reporter))
    return builder.build()

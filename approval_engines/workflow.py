"""
approval_engines.workflow -- Workflow entry point.

Responsibility:
    Hand a request to the head of an approval chain and return the single
    outcome the chain produces.

Architecture position:
    Engines -- outermost call of the decision layer.  Binds the request id
    into ``LogContext`` so every record emitted during the traversal is
    correlated with the request.

Invariants enforced:
    - One synchronous pass per request: no retry, no partial state, exactly
      one ``DecisionOutcome``.
    - Looping chains are refused before the request is reported.
    - Requests are independent: the chain is read-only during processing,
      so ``process_many`` runs requests in parallel without locking.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from approval_engines.approvers import Approver, chain_members
from approval_engines.tracer import traced_engine
from approval_kernel.domain.outcome import DecisionOutcome
from approval_kernel.domain.request import ExpenseRequest
from approval_kernel.logging_config import LogContext
from approval_kernel.reporting import ApprovalReporter, LoggingReporter


@traced_engine("workflow", "1.0", fingerprint_fields=("request",))
def process(
    chain_head: Approver,
    request: ExpenseRequest,
    *,
    reporter: ApprovalReporter | None = None,
) -> DecisionOutcome:
    """Run ``request`` through the chain starting at ``chain_head``.

    Args:
        chain_head: First approver of a built chain.
        request: The expense claim to decide.
        reporter: Receives the request-received and decided events.
            Defaults to ``LoggingReporter``.

    Returns:
        The outcome rendered by the deciding approver, or a
        "no approver available" rejection if the chain was exhausted.

    Raises:
        ChainCycleError: if the successor links of ``chain_head`` loop.
            Nothing is reported for the request.
    """
    chain_members(chain_head)
    reporter = reporter or LoggingReporter()
    with LogContext.bind(request_id=str(request.request_id)):
        reporter.request_received(request)
        outcome = chain_head.decide(request)
        reporter.decided(outcome)
    return outcome


def process_many(
    chain_head: Approver,
    requests: Iterable[ExpenseRequest],
    *,
    max_workers: int | None = None,
    reporter: ApprovalReporter | None = None,
) -> list[DecisionOutcome]:
    """Process independent requests concurrently; results keep input order."""
    requests = list(requests)
    if not requests:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(
            pool.map(lambda r: process(chain_head, r, reporter=reporter), requests)
        )

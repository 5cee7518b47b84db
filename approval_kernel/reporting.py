"""
Approval progress reporting (``approval_kernel.reporting``).

Responsibility
--------------
The reporting port through which approvers and the workflow announce
what they are doing: which request arrived, who is evaluating it, which
checks ran, where it was delegated and how it was decided.

Architecture position
---------------------
**Kernel layer** -- output boundary.  Approvers receive a reporter by
constructor injection and never write to a console or logger directly,
so the medium (structured log, in-memory capture, nothing) is swappable.

Invariants enforced
-------------------
* Reporting never influences a decision: every reporter method returns
  ``None`` and approvers ignore anything it does.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Protocol

from approval_kernel.domain.checks import CheckName
from approval_kernel.domain.outcome import DecisionOutcome
from approval_kernel.domain.request import ExpenseRequest
from approval_kernel.logging_config import get_logger


class ApprovalReporter(Protocol):
    """Receives human-readable progress and decision events."""

    def request_received(self, request: ExpenseRequest) -> None:
        ...

    def evaluating(self, approver_name: str, request: ExpenseRequest) -> None:
        ...

    def check_evaluated(
        self, approver_name: str, check: CheckName, passed: bool
    ) -> None:
        ...

    def delegated(
        self,
        approver_name: str,
        successor_name: str | None,
        request: ExpenseRequest,
    ) -> None:
        ...

    def decided(self, outcome: DecisionOutcome) -> None:
        """Final outcome; an approval here is also the registration by its approver."""
        ...


class LoggingReporter:
    """Reports every event as a structured log record."""

    def __init__(self, logger_name: str = "reporting"):
        self._logger = get_logger(logger_name)

    def request_received(self, request: ExpenseRequest) -> None:
        self._logger.info(
            "approval_request_received",
            extra={
                "request_id": str(request.request_id),
                "requester": request.requester,
                "amount": str(request.amount),
                "purpose": request.purpose,
                "department": request.department,
            },
        )

    def evaluating(self, approver_name: str, request: ExpenseRequest) -> None:
        self._logger.info(
            "approval_evaluating",
            extra={"approver": approver_name, "amount": str(request.amount)},
        )

    def check_evaluated(
        self, approver_name: str, check: CheckName, passed: bool
    ) -> None:
        self._logger.debug(
            "approval_check_evaluated",
            extra={"approver": approver_name, "check": check.value, "passed": passed},
        )

    def delegated(
        self,
        approver_name: str,
        successor_name: str | None,
        request: ExpenseRequest,
    ) -> None:
        self._logger.info(
            "approval_delegated",
            extra={
                "approver": approver_name,
                "successor": successor_name,
                "amount": str(request.amount),
            },
        )

    def decided(self, outcome: DecisionOutcome) -> None:
        level_method = self._logger.info if outcome.is_approved else self._logger.warning
        level_method("approval_decided", extra=outcome.to_dict())


class NullReporter:
    """Discards every event."""

    def request_received(self, request: ExpenseRequest) -> None:
        pass

    def evaluating(self, approver_name: str, request: ExpenseRequest) -> None:
        pass

    def check_evaluated(
        self, approver_name: str, check: CheckName, passed: bool
    ) -> None:
        pass

    def delegated(
        self,
        approver_name: str,
        successor_name: str | None,
        request: ExpenseRequest,
    ) -> None:
        pass

    def decided(self, outcome: DecisionOutcome) -> None:
        pass


@dataclass(frozen=True)
class ReportedEvent:
    """One event captured by ``RecordingReporter``."""

    kind: str
    approver: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


class RecordingReporter:
    """Keeps every event in memory, in the order reported."""

    def __init__(self) -> None:
        self._events: list[ReportedEvent] = []
        self._lock = threading.Lock()

    @property
    def events(self) -> list[ReportedEvent]:
        with self._lock:
            return list(self._events)

    def kinds(self) -> list[str]:
        return [e.kind for e in self.events]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def _record(self, event: ReportedEvent) -> None:
        with self._lock:
            self._events.append(event)

    def request_received(self, request: ExpenseRequest) -> None:
        self._record(ReportedEvent("request_received", data={"request": request}))

    def evaluating(self, approver_name: str, request: ExpenseRequest) -> None:
        self._record(ReportedEvent("evaluating", approver_name, {"request": request}))

    def check_evaluated(
        self, approver_name: str, check: CheckName, passed: bool
    ) -> None:
        self._record(
            ReportedEvent("check_evaluated", approver_name, {"check": check, "passed": passed})
        )

    def delegated(
        self,
        approver_name: str,
        successor_name: str | None,
        request: ExpenseRequest,
    ) -> None:
        self._record(
            ReportedEvent("delegated", approver_name, {"successor": successor_name})
        )

    def decided(self, outcome: DecisionOutcome) -> None:
        self._record(ReportedEvent("decided", outcome.approver, {"outcome": outcome}))

"""
Pytest fixtures for the approval chain test suite.

Provides:
- Structured logging configuration and log capture
- Expense request factory
- Recording reporter
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from approval_kernel.domain.request import ExpenseRequest
from approval_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from approval_kernel.reporting import RecordingReporter


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture approval_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            process(head, request)
            logs = captured_logs()
            assert any(r["message"] == "approval_decided" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("approval_kernel")
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def make_request():
    """Factory for valid expense requests; override any field by keyword."""

    def _make(
        amount="50.00",
        requester="Joao Silva",
        purpose="Office supplies",
        department="IT",
    ) -> ExpenseRequest:
        return ExpenseRequest(
            requester=requester,
            amount=Decimal(amount) if isinstance(amount, str) else amount,
            purpose=purpose,
            department=department,
        )

    return _make


@pytest.fixture
def recorder() -> RecordingReporter:
    return RecordingReporter()

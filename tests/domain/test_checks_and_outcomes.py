"""
Tests for decision checks and decision outcomes.

Covers:
- CheckSet defaults (all stubs pass), lookup, substitution
- DecisionOutcome constructors, properties and serialization
"""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from approval_kernel.domain.checks import CheckName, CheckSet, always_pass
from approval_kernel.domain.outcome import (
    NO_APPROVER_AVAILABLE,
    DecisionOutcome,
    DecisionStatus,
    RejectionKind,
)
from approval_kernel.domain.request import ExpenseRequest


@pytest.fixture
def request_():
    return ExpenseRequest("Pedro Oliveira", Decimal("2500.00"), "Notebook", "IT")


# =========================================================================
# CheckSet
# =========================================================================


class TestCheckSet:
    """The injectable capability set."""

    def test_five_checks_defined(self):
        assert {c.value for c in CheckName} == {
            "receipt",
            "budget",
            "policy",
            "strategic_alignment",
            "board_approval",
        }

    @pytest.mark.parametrize("name", list(CheckName))
    def test_default_stubs_pass(self, name, request_):
        checks = CheckSet()

        assert checks.get(name) is always_pass
        assert checks.run(name, request_) is True

    def test_lookup_by_string_value(self, request_):
        assert CheckSet().run("policy", request_) is True

    def test_replace_substitutes_only_named_check(self, request_):
        checks = CheckSet().replace(budget=lambda r: r.department == "HR")

        assert checks.run(CheckName.BUDGET, request_) is False
        assert checks.run(CheckName.RECEIPT, request_) is True
        assert checks.run(CheckName.POLICY, request_) is True

    def test_replace_returns_new_set(self):
        original = CheckSet()
        replaced = original.replace(receipt=lambda r: False)

        assert original.receipt is always_pass
        assert replaced is not original

    def test_replace_unknown_check_raises(self):
        with pytest.raises(TypeError):
            CheckSet().replace(audit=lambda r: True)

    def test_budget_check_sees_department_and_amount(self, request_):
        seen = []

        def budget(request):
            seen.append((request.department, request.amount))
            return True

        CheckSet(budget=budget).run(CheckName.BUDGET, request_)

        assert seen == [("IT", Decimal("2500.00"))]

    def test_truthy_result_coerced_to_bool(self, request_):
        checks = CheckSet(policy=lambda r: 1)

        assert checks.run(CheckName.POLICY, request_) is True

    def test_check_set_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            CheckSet().receipt = lambda r: False


# =========================================================================
# DecisionOutcome
# =========================================================================


class TestDecisionOutcome:
    """Approved / rejected results."""

    def test_approved(self, request_):
        outcome = DecisionOutcome.approved(request_, "Director")

        assert outcome.status == DecisionStatus.APPROVED
        assert outcome.is_approved is True
        assert outcome.is_rejected is False
        assert outcome.approver == "Director"
        assert outcome.request_id == request_.request_id
        assert outcome.rejection is None
        assert outcome.failed_check is None

    def test_rejected_by_check(self, request_):
        outcome = DecisionOutcome.rejected_by_check(
            request_, "Director", CheckName.STRATEGIC_ALIGNMENT
        )

        assert outcome.is_rejected is True
        assert outcome.approver == "Director"
        assert outcome.failed_check == CheckName.STRATEGIC_ALIGNMENT
        assert outcome.rejection == RejectionKind.CHECK_FAILED
        assert "strategic_alignment" in outcome.reason

    def test_no_approver_available(self, request_):
        outcome = DecisionOutcome.no_approver_available(request_)

        assert outcome.is_rejected is True
        assert outcome.approver is None
        assert outcome.rejection == RejectionKind.NO_APPROVER_AVAILABLE
        assert outcome.reason == NO_APPROVER_AVAILABLE == "no approver available"

    def test_equal_outcomes_compare_equal(self, request_):
        assert DecisionOutcome.approved(request_, "CEO") == DecisionOutcome.approved(
            request_, "CEO"
        )

    def test_to_dict(self, request_):
        outcome = DecisionOutcome.rejected_by_check(request_, "Manager", CheckName.POLICY)

        assert outcome.to_dict() == {
            "status": "rejected",
            "request_id": str(request_.request_id),
            "approver": "Manager",
            "failed_check": "policy",
            "rejection": "check_failed",
            "reason": "policy check failed",
        }

    def test_outcome_is_frozen(self, request_):
        outcome = DecisionOutcome.approved(request_, "CEO")
        with pytest.raises(FrozenInstanceError):
            outcome.approver = "Supervisor"

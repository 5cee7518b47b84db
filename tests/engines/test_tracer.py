"""Tests for the engine invocation tracer (``approval_engines.tracer``)."""

from decimal import Decimal
from uuid import UUID

from approval_engines.tracer import (
    _canonicalize,
    compute_input_fingerprint,
    traced_engine,
)
from approval_kernel.domain.checks import CheckName
from approval_kernel.domain.request import ExpenseRequest

FIXED_ID = UUID("00000000-0000-0000-0000-000000000001")


def make_request(amount: str = "50.00") -> ExpenseRequest:
    return ExpenseRequest("Joao Silva", Decimal(amount), "Office supplies", "IT", FIXED_ID)


class TestCanonicalize:
    def test_primitives(self):
        assert _canonicalize(None) == "null"
        assert _canonicalize(5) == "5"
        assert _canonicalize("x") == "x"

    def test_enum_uses_value(self):
        assert _canonicalize(CheckName.BUDGET) == "budget"

    def test_dict_keys_sorted(self):
        assert _canonicalize({"b": 1, "a": 2}) == "{a:2,b:1}"

    def test_dataclass_expanded(self):
        text = _canonicalize(make_request())

        assert "amount:50.00" in text
        assert "department:IT" in text


class TestFingerprint:
    def test_deterministic(self):
        args = {"request": make_request()}

        assert compute_input_fingerprint(("request",), args) == compute_input_fingerprint(
            ("request",), {"request": make_request()}
        )

    def test_changes_with_input(self):
        first = compute_input_fingerprint(("request",), {"request": make_request("50.00")})
        second = compute_input_fingerprint(("request",), {"request": make_request("51.00")})

        assert first != second

    def test_missing_field_recorded_as_null(self):
        assert compute_input_fingerprint(("absent",), {}) == compute_input_fingerprint(
            ("absent",), {"absent": None}
        )

    def test_length(self):
        assert len(compute_input_fingerprint(("x",), {"x": 1})) == 16


class TestTracedEngine:
    def test_result_unchanged_and_trace_emitted(self, captured_logs):
        @traced_engine("sample", "2.0", fingerprint_fields=("value",))
        def double(value):
            return value * 2

        assert double(21) == 42

        traces = [r for r in captured_logs() if r["message"] == "APPROVAL_ENGINE_TRACE"]
        assert len(traces) == 1
        assert traces[0]["engine_name"] == "sample"
        assert traces[0]["engine_version"] == "2.0"
        assert traces[0]["outcome_status"] == "null"
        assert traces[0]["function"].endswith("double")

    def test_positional_and_keyword_fingerprints_match(self, captured_logs):
        @traced_engine("sample", "1.0", fingerprint_fields=("value",))
        def identity(value):
            return value

        identity(7)
        identity(value=7)

        traces = [r for r in captured_logs() if r["message"] == "APPROVAL_ENGINE_TRACE"]
        assert traces[0]["input_fingerprint"] == traces[1]["input_fingerprint"]

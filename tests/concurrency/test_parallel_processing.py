"""
Parallel processing over a shared, read-only chain.

Requests are independent: many worker threads may walk the same built
chain at once without locking, and each gets the outcome it would get
alone.
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from threading import Barrier

from approval_engines.chain import build_standard_chain, chain_members
from approval_engines.workflow import process, process_many
from approval_kernel.domain.request import ExpenseRequest
from approval_kernel.logging_config import LogContext
from approval_kernel.reporting import NullReporter, RecordingReporter

EXPECTED = {
    Decimal("50.00"): "Supervisor",
    Decimal("350.00"): "Manager",
    Decimal("2500.00"): "Director",
    Decimal("15000.00"): "CEO",
}


def make_requests(copies: int) -> list[ExpenseRequest]:
    return [
        ExpenseRequest(f"Employee {i}", amount, "Travel", "Sales")
        for i in range(copies)
        for amount in EXPECTED
    ]


class TestProcessMany:
    def test_results_keep_input_order(self):
        head = build_standard_chain(reporter=NullReporter())
        requests = make_requests(25)

        outcomes = process_many(head, requests, max_workers=8, reporter=NullReporter())

        assert [o.request_id for o in outcomes] == [r.request_id for r in requests]
        assert [o.approver for o in outcomes] == [EXPECTED[r.amount] for r in requests]

    def test_matches_sequential_processing(self):
        head = build_standard_chain(reporter=NullReporter())
        requests = make_requests(10)

        parallel = process_many(head, requests, max_workers=4, reporter=NullReporter())
        sequential = [process(head, r, reporter=NullReporter()) for r in requests]

        assert parallel == sequential

    def test_empty_input(self):
        assert process_many(build_standard_chain(), []) == []

    def test_chain_unchanged_after_processing(self):
        head = build_standard_chain(reporter=NullReporter())
        before = chain_members(head)

        process_many(head, make_requests(10), max_workers=4, reporter=NullReporter())

        assert chain_members(head) == before

    def test_shared_recorder_sees_every_decision(self):
        recorder = RecordingReporter()
        head = build_standard_chain(reporter=recorder)
        requests = make_requests(20)

        process_many(head, requests, max_workers=8, reporter=recorder)

        assert recorder.kinds().count("decided") == len(requests)
        assert recorder.kinds().count("request_received") == len(requests)


class TestTrueConcurrency:
    def test_simultaneous_start(self):
        """All workers hit the chain at the same instant."""
        head = build_standard_chain(reporter=NullReporter())
        requests = make_requests(4)
        barrier = Barrier(len(requests))

        def worker(request):
            barrier.wait()
            return process(head, request, reporter=NullReporter())

        with ThreadPoolExecutor(max_workers=len(requests)) as pool:
            outcomes = list(pool.map(worker, requests))

        assert [o.approver for o in outcomes] == [EXPECTED[r.amount] for r in requests]

    def test_log_context_does_not_leak_between_threads(self, captured_logs):
        head = build_standard_chain()
        requests = make_requests(5)

        process_many(head, requests, max_workers=5)

        evaluating = [r for r in captured_logs() if r["message"] == "approval_evaluating"]
        # approval_evaluating carries no request_id of its own; it comes from LogContext
        assert sorted(r["request_id"] for r in evaluating) == sorted(
            str(r.request_id) for r in requests
        )
        assert LogContext.get_all() == {}

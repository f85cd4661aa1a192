"""Tests for the Aggregator."""

import threading
from collections import Counter

import pytest

from java_census.aggregator import Aggregator, ScanResult, WritePolicy
from java_census.exceptions import FindingsWriteError
from java_census.findings import MemoryFindingsLog
from java_census.patterns import ConstructKind


class FailingSink:
    """Sink whose appends always fail."""

    def __init__(self):
        self.attempts = 0

    def open(self):
        pass

    def append(self, finding):
        self.attempts += 1
        raise FindingsWriteError("findings.txt", "disk full")

    def close(self):
        pass


class TestRecord:
    """Single-threaded record semantics."""

    def test_returns_post_increment_count(self):
        aggregator = Aggregator()
        assert aggregator.record(ConstructKind.METHOD, "a", "A.java") == 1
        assert aggregator.record(ConstructKind.METHOD, "b", "A.java") == 2
        assert aggregator.record(ConstructKind.VARIABLE, "x", "A.java") == 1

    def test_finding_carries_running_count(self):
        sink = MemoryFindingsLog()
        aggregator = Aggregator(sink=sink)
        aggregator.record(ConstructKind.VARIABLE, "x", "A.java")
        aggregator.record(ConstructKind.VARIABLE, "y", "B.java")

        assert [(f.running_count, f.file_id, f.identifier) for f in sink.findings] == [
            (1, "A.java", "x"),
            (2, "B.java", "y"),
        ]

    def test_snapshot(self):
        aggregator = Aggregator()
        aggregator.record(ConstructKind.METHOD, "a", "A.java")
        result = aggregator.snapshot()
        assert result[ConstructKind.METHOD] == 1
        assert result[ConstructKind.VARIABLE] == 0
        assert result.total == 1

    def test_snapshot_is_a_copy(self):
        """Later records do not change an earlier snapshot."""
        aggregator = Aggregator()
        before = aggregator.snapshot()
        aggregator.record(ConstructKind.METHOD, "a", "A.java")
        assert before[ConstructKind.METHOD] == 0

    def test_empty_snapshot(self):
        assert Aggregator().snapshot().as_dict() == {"Methods": 0, "Variables": 0}


class TestConcurrency:
    """Increments from many threads never collide."""

    def test_counts_and_log_agree(self):
        sink = MemoryFindingsLog()
        aggregator = Aggregator(sink=sink)
        threads_n, per_thread = 8, 250
        barrier = threading.Barrier(threads_n)

        def worker(n):
            barrier.wait()
            for i in range(per_thread):
                kind = ConstructKind.METHOD if i % 2 else ConstructKind.VARIABLE
                aggregator.record(kind, f"id{i}", f"F{n}.java")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        result = aggregator.snapshot()
        per_kind = Counter(f.kind for f in sink.findings)
        assert result[ConstructKind.METHOD] == threads_n * per_thread // 2
        assert result[ConstructKind.VARIABLE] == threads_n * per_thread // 2
        assert per_kind[ConstructKind.METHOD] == result[ConstructKind.METHOD]
        assert per_kind[ConstructKind.VARIABLE] == result[ConstructKind.VARIABLE]

        for kind in ConstructKind:
            counts = [f.running_count for f in sink.findings if f.kind is kind]
            # per-kind append order equals increment order
            assert counts == list(range(1, result[kind] + 1))


class TestWritePolicy:
    """Findings log failures."""

    def test_strict_raises_and_leaves_count(self):
        aggregator = Aggregator(sink=FailingSink(), write_policy=WritePolicy.STRICT)
        with pytest.raises(FindingsWriteError):
            aggregator.record(ConstructKind.METHOD, "a", "A.java")
        assert aggregator.snapshot()[ConstructKind.METHOD] == 0

    def test_warn_keeps_counting(self):
        sink = FailingSink()
        aggregator = Aggregator(sink=sink, write_policy="warn")
        assert aggregator.record(ConstructKind.METHOD, "a", "A.java") == 1
        assert aggregator.record(ConstructKind.METHOD, "b", "A.java") == 2
        assert aggregator.write_failures == 2
        assert sink.attempts == 2

    def test_policy_from_string(self):
        assert Aggregator(write_policy="strict").write_policy is WritePolicy.STRICT


class TestScanResult:
    def test_as_dict_order(self):
        result = ScanResult(counts={ConstructKind.VARIABLE: 3, ConstructKind.METHOD: 1})
        assert list(result.as_dict().items()) == [("Methods", 1), ("Variables", 3)]

    def test_missing_kind_is_zero(self):
        assert ScanResult()[ConstructKind.METHOD] == 0

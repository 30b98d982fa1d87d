"""测试一致性检查与质量跟踪"""

import threading

import pytest

from brainmux.aggregator import BrainOutput, BrainPerformanceTracker, ConsistencyChecker
from brainmux.core.config import BrainMuxSettings


@pytest.fixture
def checker() -> ConsistencyChecker:
    return ConsistencyChecker(BrainMuxSettings())


class TestConsistencyChecker:
    """ConsistencyChecker 测试"""

    @pytest.mark.parametrize("outputs", [None, [], [BrainOutput("a", "x", 0.5)]])
    def test_fewer_than_two(self, checker, outputs) -> None:
        """测试少于两个输出时视为完全一致"""
        report = checker.check(outputs)
        assert report.average_similarity == 1.0
        assert report.inconsistencies == []
        assert report.is_consistent

    def test_identical_outputs(self, checker) -> None:
        report = checker.check([
            BrainOutput("a", "same text here", 0.5),
            BrainOutput("b", "same text here", 0.7),
        ])
        assert report.average_similarity == 1.0
        assert report.is_consistent

    def test_divergent_outputs(self, checker) -> None:
        report = checker.check([
            BrainOutput("a", "alpha beta", 0.5),
            BrainOutput("b", "gamma delta", 0.7),
            BrainOutput("c", "alpha beta", 0.7),
        ])
        assert report.average_similarity == pytest.approx(1 / 3)
        assert report.inconsistencies == [
            "Low similarity between a and b (0.00)",
            "Low similarity between b and c (0.00)",
        ]
        assert not report.is_consistent


class TestReevaluation:
    """重新评估判定测试"""

    def test_low_quality_triggers(self, checker) -> None:
        assert checker.should_reevaluate(0.5, 0)
        assert checker.should_reevaluate(0.74, 2)

    def test_good_quality_stops(self, checker) -> None:
        assert not checker.should_reevaluate(0.75, 0)
        assert not checker.should_reevaluate(0.9, 0)

    def test_cycle_limit(self, checker) -> None:
        assert not checker.should_reevaluate(0.1, 3)

    def test_configurable(self) -> None:
        checker = ConsistencyChecker(
            BrainMuxSettings(quality_threshold=0.5, max_reevaluation_cycles=1)
        )
        assert not checker.should_reevaluate(0.6, 0)
        assert checker.should_reevaluate(0.4, 0)
        assert not checker.should_reevaluate(0.4, 1)


class TestPerformanceTracker:
    """BrainPerformanceTracker 测试"""

    def test_record(self) -> None:
        tracker = BrainPerformanceTracker()
        tracker.record_all([
            BrainOutput("a", "x", 0.4),
            BrainOutput("a", "y", 0.8),
            BrainOutput("b", "z", 1.0),
        ])

        stats = tracker.get("a")
        assert stats.execution_count == 2
        assert stats.average_quality == pytest.approx(0.6)
        assert stats.min_quality == pytest.approx(0.4)
        assert stats.max_quality == pytest.approx(0.8)
        assert set(tracker.snapshot()) == {"a", "b"}

    def test_unknown_brain(self) -> None:
        assert BrainPerformanceTracker().get("missing") is None

    def test_get_returns_copy(self) -> None:
        tracker = BrainPerformanceTracker()
        tracker.record(BrainOutput("a", "x", 0.5))
        tracker.get("a").record(1.0)
        assert tracker.get("a").execution_count == 1

    def test_reset(self) -> None:
        tracker = BrainPerformanceTracker()
        tracker.record(BrainOutput("a", "x", 0.5))
        tracker.reset()
        assert tracker.snapshot() == {}

    def test_concurrent_records(self) -> None:
        """测试并发记录不丢失"""
        tracker = BrainPerformanceTracker()

        def worker():
            for _ in range(200):
                tracker.record(BrainOutput("a", "x", 0.5))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert tracker.get("a").execution_count == 1600

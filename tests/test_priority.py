"""
Priority score, recency buckets and level ladder.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.schemas import Item, Stats, level_for_rank_point
from core.scheduling import days_since, max_in_queue, priority_score, recency_weight

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _item(item_id: str = "w", **stats) -> Item:
    return Item(id=item_id, cols={"Dutch": item_id}, stats=Stats(**stats))


class TestDaysSince:
    def test_never_practised(self):
        assert days_since(None, NOW) is None

    def test_counts_calendar_days(self):
        assert days_since(datetime(2024, 6, 14, 23, 0, tzinfo=timezone.utc), NOW) == 1
        assert days_since(datetime(2024, 6, 15, 0, 1, tzinfo=timezone.utc), NOW) == 0

    def test_naive_datetimes_are_utc(self):
        assert days_since(datetime(2024, 6, 10, 8, 0), NOW) == 5

    def test_future_dates_clamp_to_zero(self):
        assert days_since(NOW + timedelta(days=3), NOW) == 0


class TestRecencyWeight:
    @pytest.mark.parametrize("days, weight", [
        (None, 1.0),
        (0, 0.1),
        (1, 0.1),
        (2, 0.5),
        (4, 0.5),
        (5, 0.8),
        (9, 0.8),
        (10, 1.0),
        (400, 1.0),
    ])
    def test_buckets(self, days, weight):
        assert recency_weight(days) == weight


class TestLevels:
    @pytest.mark.parametrize("rank_point, level", [
        (-5, 1), (0, 1), (1, 2), (3, 2), (4, 3), (7, 3),
        (8, 4), (15, 4), (16, 5), (31, 5), (32, 6), (500, 6),
    ])
    def test_ladder(self, rank_point, level):
        assert level_for_rank_point(rank_point) == level

    def test_derived_stats(self):
        stats = Stats(passed1=3, passed2=2, failed=1)
        assert stats.total_attempt == 6
        assert stats.rank_point == 4
        assert stats.level == 3
        assert stats.failure_rate == pytest.approx(1 / 6)
        assert stats.success_rate == pytest.approx(5 / 6)

    def test_rates_without_attempts(self):
        stats = Stats()
        assert stats.failure_rate == 0.0
        assert stats.success_rate == 1.0


class TestPriorityScore:
    def test_new_item(self):
        # rank 0.2 + level 0.1/2 + never practised 0.2
        assert priority_score(_item(), 0, NOW) == pytest.approx(0.45)

    def test_stays_in_unit_interval(self):
        worst = _item(failed=9, quit_queue=True, in_queue=5)
        best = _item(passed1=40, passed2=40, last_practice_date=NOW, in_queue=0)
        pool_max = max_in_queue([worst, best])
        assert 0.0 <= priority_score(best, pool_max, NOW) <= priority_score(worst, pool_max, NOW) <= 1.0
        # level term tops out at 0.1 / 2
        assert priority_score(worst, pool_max, NOW) == pytest.approx(0.95)

    def test_struggling_item_outranks_known_item(self):
        struggling = _item("a", failed=3, passed1=1, last_practice_date=NOW - timedelta(days=12))
        known = _item("b", passed1=5, passed2=5, last_practice_date=NOW)
        assert priority_score(struggling, 0, NOW) > priority_score(known, 0, NOW)

    def test_quit_queue_adds_weight(self):
        base = priority_score(_item(), 0, NOW)
        assert priority_score(_item(quit_queue=True), 0, NOW) == pytest.approx(base + 0.2)

    def test_in_queue_is_relative_to_pool(self):
        half = priority_score(_item(in_queue=2), 4, NOW)
        full = priority_score(_item(in_queue=4), 4, NOW)
        assert full - half == pytest.approx(0.05)

    def test_zero_pool_max_is_safe(self):
        assert priority_score(_item(in_queue=0), 0, NOW) == pytest.approx(0.45)

    def test_deterministic_for_fixed_now(self):
        item = _item(passed1=2, failed=1, last_practice_date=NOW - timedelta(days=3))
        assert priority_score(item, 3, NOW) == priority_score(item, 3, NOW)

    def test_max_in_queue(self):
        assert max_in_queue([]) == 0
        assert max_in_queue([_item(in_queue=2), _item(in_queue=7)]) == 7

    @pytest.mark.parametrize("passed1", [0, 2, 6])
    def test_more_failures_never_lower_the_score(self, passed1):
        last = NOW - timedelta(days=3)
        scores = [
            priority_score(_item(passed1=passed1, failed=failed, last_practice_date=last, in_queue=1), 2, NOW)
            for failed in range(12)
        ]
        assert scores == sorted(scores)

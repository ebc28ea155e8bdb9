from datetime import datetime, timedelta, timezone

import pytest

from learnsense.core.engine.ordering import RecentFirst, require_recent_first, timestamp_sort_key


def test_index_zero_is_most_recent():
    scores = RecentFirst.from_oldest_first([1, 2, 3])
    assert scores[0] == 3
    assert list(scores) == [3, 2, 1]


def test_slicing_keeps_the_wrapper():
    scores = RecentFirst([5, 4, 3, 2, 1])
    assert scores[:2] == RecentFirst([5, 4])
    assert isinstance(scores[1:], RecentFirst)


def test_sorted_by_puts_newest_first_and_missing_last():
    now = datetime.now(timezone.utc)
    rows = [
        {"id": "old", "at": now - timedelta(days=2)},
        {"id": "none", "at": None},
        {"id": "new", "at": now},
        {"id": "naive", "at": (now - timedelta(days=1)).replace(tzinfo=None)},
    ]

    ordered = RecentFirst.sorted_by(rows, lambda r: r["at"]).map(lambda r: r["id"])
    assert list(ordered) == ["new", "naive", "old", "none"]


def test_filter_and_map_preserve_order():
    scores = RecentFirst([0, 80, 0, 60]).filter(lambda s: s > 0).map(lambda s: s / 10)
    assert list(scores) == [8, 6]


def test_timestamp_sort_key_treats_naive_as_utc():
    naive = datetime(2024, 1, 1, 12, 0)
    assert timestamp_sort_key(naive) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_require_recent_first():
    require_recent_first(RecentFirst([1]), "scores")
    with pytest.raises(TypeError, match="scores must be a RecentFirst"):
        require_recent_first([1], "scores")

"""
Tests for the trailing release window.
"""

import pytest
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from newmusic.services.window_filter import select, to_day, window_for


class TestWindowFor:
    """Tests for window_for."""

    def test_window_spans_seven_days_inclusive(self, today):
        window = window_for(today)

        assert window.end == today
        assert window.start == today - timedelta(days=6)

    def test_datetime_is_normalized_to_midnight(self):
        window = window_for(datetime(2026, 10, 16, 23, 59, 59))

        assert window.end == date(2026, 10, 16)
        assert window.start == date(2026, 10, 10)

    def test_to_day_passes_dates_through(self, today):
        assert to_day(today) is today


class TestSelect:
    """Tests for select."""

    @pytest.mark.parametrize("days_ago,expected", [
        (0, True),
        (3, True),
        (6, True),
        (7, False),
        (10, False),
        (-1, False),
    ])
    def test_window_boundaries(self, make_release, today, days_ago, expected):
        release = make_release(release_date=today - timedelta(days=days_ago))

        assert (select([release], today) == [release]) is expected

    def test_select_preserves_input_order(self, make_release, today):
        releases = [
            make_release(name="Today", release_date=today),
            make_release(name="Three days", release_date=today - timedelta(days=3)),
            make_release(name="Ten days", release_date=today - timedelta(days=10)),
            make_release(name="Yesterday", release_date=today - timedelta(days=1)),
        ]

        selected = select(releases, today)

        assert [r.name for r in selected] == ["Today", "Three days", "Yesterday"]

    def test_select_does_not_mutate_input(self, make_release, today):
        releases = [make_release(release_date=today - timedelta(days=10))]

        assert select(releases, today) == []
        assert len(releases) == 1

    def test_select_with_datetime_today(self, make_release):
        release = make_release(release_date=date(2026, 10, 16))

        assert select([release], datetime(2026, 10, 16, 8, 30)) == [release]

    def test_window_crosses_month_boundary(self, make_release):
        release = make_release(release_date=date(2026, 9, 30))

        assert select([release], date(2026, 10, 5)) == [release]
        assert select([release], date(2026, 10, 7)) == []

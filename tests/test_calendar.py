"""Unit tests for the calendar grid projection.

Run with: pytest tests/test_calendar.py -v
"""

from datetime import date, timedelta

import pytest

from bookings.domain import BookingStatus
from bookings.domain.calendar import project, shift_window
from bookings.domain.errors import ValidationError

DAY0 = date(2024, 3, 4)  # a Monday


def day(n: int) -> date:
    return DAY0 + timedelta(days=n)


class TestProject:
    """Tests for project."""

    def test_span_start_and_covered_cells(self, billboard, make_booking):
        """A three-day booking starts a span of width 3; later cells reference it."""
        booking = make_booking(day(2), day(4))
        grid = project([billboard], DAY0, 5, [booking])
        row = grid.row(billboard.id)

        assert len(row) == 5
        assert row[0].booking is None and row[1].booking is None
        assert row[2].booking == booking
        assert row[2].is_span_start and row[2].span_width == 3
        for cell in row[3:]:
            assert cell.booking == booking
            assert not cell.is_span_start

    def test_span_clipped_at_window_edge(self, billboard, make_booking):
        booking = make_booking(day(3), day(30))
        grid = project([billboard], DAY0, 5, [booking])
        start = grid.cell(billboard.id, day(3))
        assert start.is_span_start
        assert start.span_width == 2

    def test_booking_from_before_window_has_no_span_start(self, billboard, make_booking):
        booking = make_booking(day(-3), day(1))
        row = project([billboard], DAY0, 5, [booking]).row(billboard.id)
        assert [c.booking for c in row[:2]] == [booking, booking]
        assert not any(c.is_span_start for c in row)
        assert row[2].is_free

    def test_status_filter_hides_other_statuses(self, billboard, make_booking):
        held = make_booking(day(0), day(1))
        sold = make_booking(day(3), day(4), BookingStatus.SOLD)
        row = project([billboard], DAY0, 5, [held, sold], status_filter=BookingStatus.SOLD).row(
            billboard.id
        )
        assert row[0].is_free and row[1].is_free
        assert row[3].booking == sold

    def test_first_booking_wins_on_overlap(self, billboard, make_booking):
        first = make_booking(day(0), day(2))
        second = make_booking(day(1), day(3))
        row = project([billboard], DAY0, 5, [first, second]).row(billboard.id)
        assert row[1].booking == first
        assert row[3].booking == second

    def test_rows_follow_resource_order(self, billboard, screen, make_booking):
        on_screen = make_booking(day(0), day(0), resource_id="res-2")
        grid = project([screen, billboard], DAY0, 3, [on_screen])
        assert list(grid.rows) == [screen.id, billboard.id]
        assert grid.cell(screen.id, DAY0).span_width == 1
        assert all(c.is_free for c in grid.row(billboard.id))

    def test_bookings_for_unlisted_resources_ignored(self, billboard, make_booking):
        stray = make_booking(day(0), day(1), resource_id="res-9")
        grid = project([billboard], DAY0, 3, [stray])
        assert list(grid.rows) == [billboard.id]
        assert all(c.is_free for c in grid.row(billboard.id))

    def test_columns_mark_weekends_and_today(self, billboard):
        grid = project([billboard], DAY0, 7, [], today=day(1))
        assert [c.is_weekend for c in grid.columns] == [False] * 5 + [True, True]
        assert [c.is_today for c in grid.columns].index(True) == 1

    def test_projection_is_repeatable(self, billboard, screen, make_booking):
        bookings = [make_booking(day(1), day(8)), make_booking(day(0), day(2), resource_id="res-2")]
        first = project([billboard, screen], DAY0, 6, bookings)
        second = project([billboard, screen], DAY0, 6, bookings)
        assert first == second

    def test_empty_window_rejected(self, billboard):
        with pytest.raises(ValidationError) as excinfo:
            project([billboard], DAY0, 0, [])
        assert excinfo.value.field == "days"


def test_shift_window_moves_whole_windows():
    assert shift_window(DAY0, 50, 1) == DAY0 + timedelta(days=50)
    assert shift_window(DAY0, 50, -1) == DAY0 - timedelta(days=50)

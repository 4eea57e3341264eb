import unittest
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from auntrack_common.calendar_grid import (
    DateGridMapper,
    covers_date,
    day_of,
    intersects_range,
    month_days,
)


class TestMonthDays(unittest.TestCase):
    def test_august_has_31_contiguous_days(self) -> None:
        days = month_days(2025, 8)
        self.assertEqual(len(days), 31)
        self.assertEqual(days[0], date(2025, 8, 1))
        self.assertEqual(days[-1], date(2025, 8, 31))
        for earlier, later in zip(days, days[1:]):
            self.assertEqual(later - earlier, timedelta(days=1))

    def test_leap_february(self) -> None:
        self.assertEqual(len(month_days(2024, 2)), 29)
        self.assertEqual(len(month_days(2025, 2)), 28)

    def test_month_out_of_range_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            month_days(2025, 13)
        with self.assertRaises(ValueError):
            month_days(2025, 0)


class TestDateGridMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = DateGridMapper(month_days(2025, 8))

    def test_event_covering_days_5_to_7(self) -> None:
        start = datetime(2025, 8, 5, 9, 0)
        end = datetime(2025, 8, 7, 17, 0)

        covered = [i for i in range(len(self.grid)) if self.grid.on_date(i, start, end)]
        self.assertEqual(covered, [4, 5, 6])
        self.assertTrue(self.grid.is_anchor(4, start))
        self.assertFalse(self.grid.is_anchor(5, start))
        self.assertEqual(self.grid.span_width(4, start, end), 3)

    def test_bar_is_clamped_to_grid_end(self) -> None:
        start = datetime(2025, 8, 30, 9, 0)
        end = datetime(2025, 9, 3, 17, 0)

        self.assertEqual(self.grid.span_width(29, start, end), 2)
        self.assertEqual(self.grid.span_width(30, start, end), 1)

    def test_single_day_and_reversed_interval_span_one(self) -> None:
        day = datetime(2025, 8, 10, 8, 0)
        self.assertEqual(self.grid.span_width(9, day, day), 1)
        self.assertEqual(self.grid.span_width(9, day, day - timedelta(days=2)), 1)

    def test_placements_skip_events_anchored_outside_the_month(self) -> None:
        events = [
            {"id": 1, "start_date": "2025-07-30T09:00:00", "end_date": "2025-08-02T09:00:00"},
            {"id": 2, "start_date": "2025-08-03T09:00:00", "end_date": "2025-08-04T09:00:00"},
            {"id": 3, "start_date": "2025-08-01T00:00:00", "end_date": "2025-08-06T23:59:59"},
        ]
        placements = self.grid.placements(events)

        self.assertEqual([p.event["id"] for p in placements], [3, 2])
        self.assertEqual([(p.column, p.span) for p in placements], [(0, 6), (2, 2)])
        for placement in placements:
            self.assertLessEqual(placement.column + placement.span, len(self.grid))

    def test_display_timezone_moves_the_anchor_day(self) -> None:
        grid = DateGridMapper(month_days(2025, 8), tz=ZoneInfo("America/New_York"))
        start = datetime(2025, 8, 5, 2, 0, tzinfo=timezone.utc)  # 4 Aug, 22:00 in New York

        self.assertEqual(grid.anchor_index(start), 3)
        self.assertEqual(day_of(start, ZoneInfo("America/New_York")), date(2025, 8, 4))


class TestRangeHelpers(unittest.TestCase):
    def test_covers_date_is_inclusive(self) -> None:
        start, end = datetime(2025, 8, 1), datetime(2025, 8, 2, 23, 59, 59)
        self.assertTrue(covers_date(start, end, date(2025, 8, 1)))
        self.assertTrue(covers_date(start, end, date(2025, 8, 2)))
        self.assertFalse(covers_date(start, end, date(2025, 8, 3)))

    def test_intersects_range(self) -> None:
        start, end = datetime(2025, 8, 4), datetime(2025, 8, 6)
        self.assertTrue(intersects_range(start, end, date(2025, 8, 6), date(2025, 8, 10)))
        self.assertTrue(intersects_range(start, end, date(2025, 8, 1), date(2025, 8, 4)))
        self.assertFalse(intersects_range(start, end, date(2025, 8, 7), date(2025, 8, 10)))


if __name__ == "__main__":
    unittest.main(verbosity=2)

# booking/tests/test_time_range.py

from datetime import datetime

from django.test import SimpleTestCase

from booking.services.time_range import TimeRange


def at(hour, minute=0):
    return datetime(2024, 6, 10, hour, minute)


class TimeRangeTests(SimpleTestCase):
    def test_start_must_be_before_end(self):
        with self.assertRaises(ValueError):
            TimeRange(start=at(10), end=at(10))
        with self.assertRaises(ValueError):
            TimeRange(start=at(11), end=at(10))

    def test_from_duration(self):
        r = TimeRange.from_duration(at(10), 45)
        self.assertEqual(r.end, at(10, 45))
        self.assertEqual(r.duration_minutes(), 45)

    def test_adjacent_ranges_do_not_overlap(self):
        a = TimeRange(at(10), at(11))
        b = TimeRange(at(11), at(12))
        self.assertFalse(a.overlaps(b))
        self.assertFalse(b.overlaps(a))

    def test_partial_and_contained_overlap(self):
        busy = TimeRange(at(10), at(11))
        self.assertTrue(busy.overlaps(TimeRange(at(10, 30), at(11, 30))))
        self.assertTrue(busy.overlaps(TimeRange(at(9, 30), at(10, 10))))
        self.assertTrue(busy.overlaps(TimeRange(at(10, 15), at(10, 20))))
        self.assertTrue(busy.overlaps(TimeRange(at(9), at(12))))

    def test_overlap_is_symmetric(self):
        a = TimeRange(at(9), at(10, 30))
        b = TimeRange(at(10), at(11))
        self.assertEqual(a.overlaps(b), b.overlaps(a))

    def test_str(self):
        self.assertEqual(str(TimeRange(at(9), at(9, 40))), "2024-06-10 09:00 - 09:40")

"""
Unit tests for time-of-day overlap.

Definition used here:
- start_a < end_b AND end_a > start_b
- Touching endpoints (end == start) is NOT a conflict.
"""

import unittest
from datetime import time

from schedcheck.utils.conflict import duration_seconds, format_time_12h, overlaps


class TestOverlaps(unittest.TestCase):
    def test_self_overlap(self) -> None:
        s, e = time(9, 0), time(10, 0)
        self.assertTrue(overlaps(s, e, s, e))

    def test_touching_boundary(self) -> None:
        self.assertFalse(overlaps(time(9, 0), time(10, 0), time(10, 0), time(11, 0)))
        self.assertFalse(overlaps(time(10, 0), time(11, 0), time(9, 0), time(10, 0)))

    def test_partial_and_containment(self) -> None:
        self.assertTrue(overlaps(time(9, 0), time(10, 0), time(9, 30), time(10, 30)))
        self.assertTrue(overlaps(time(8, 0), time(12, 0), time(9, 0), time(10, 0)))

    def test_disjoint(self) -> None:
        self.assertFalse(overlaps(time(7, 0), time(8, 30), time(9, 0), time(10, 30)))


class TestTimeHelpers(unittest.TestCase):
    def test_duration(self) -> None:
        self.assertEqual(duration_seconds(time(9, 0), time(10, 30)), 5400)
        self.assertEqual(duration_seconds(time(10, 0), time(9, 0)), -3600)
        self.assertEqual(duration_seconds(time(8, 0), time(16, 0, 59)), 8 * 3600 + 59)

    def test_format_12h(self) -> None:
        self.assertEqual(format_time_12h(time(9, 0)), "9:00 AM")
        self.assertEqual(format_time_12h(time(13, 5)), "1:05 PM")
        self.assertEqual(format_time_12h(time(12, 0)), "12:00 PM")
        self.assertEqual(format_time_12h(None), "?")


if __name__ == "__main__":
    unittest.main()

"""
Time range and room capacity validation.

Both checks return a list of messages and never raise; the caller decides
whether a violation blocks the save or only warns.
"""

import unittest
from datetime import time

from schedcheck.config import Settings
from schedcheck.models.room import Room
from schedcheck.services.conflict_detector import ConflictDetector
from schedcheck.services.schedule_query import InMemoryScheduleQuery

from schedule_fixtures import make_schedule


class TestValidateTimeRange(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = ConflictDetector(InMemoryScheduleQuery())

    def test_one_hour_ok(self) -> None:
        self.assertEqual(self.detector.validate_time_range(make_schedule(1, start="09:00", end="10:00")), [])

    def test_too_short(self) -> None:
        errors = self.detector.validate_time_range(make_schedule(1, start="09:00", end="09:15"))
        self.assertEqual(errors, ["Schedule duration must be at least 30 minutes."])

    def test_too_long(self) -> None:
        errors = self.detector.validate_time_range(make_schedule(1, start="08:00", end="17:00"))
        self.assertEqual(errors, ["Schedule duration cannot exceed 8 hours."])

    def test_boundaries_inclusive(self) -> None:
        self.assertEqual(self.detector.validate_time_range(make_schedule(1, start="09:00", end="09:30")), [])
        self.assertEqual(self.detector.validate_time_range(make_schedule(1, start="08:00", end="16:00")), [])

    def test_limits_count_seconds(self) -> None:
        s = make_schedule(1)
        s.start_time, s.end_time = time(8, 0, 0), time(16, 0, 59)
        self.assertEqual(self.detector.validate_time_range(s), ["Schedule duration cannot exceed 8 hours."])

        s.start_time, s.end_time = time(9, 0, 0), time(9, 29, 59)
        self.assertEqual(self.detector.validate_time_range(s), ["Schedule duration must be at least 30 minutes."])

    def test_reversed_reports_everything(self) -> None:
        errors = self.detector.validate_time_range(make_schedule(1, start="10:00", end="09:00"))
        self.assertEqual(
            errors,
            ["End time must be after start time.", "Schedule duration must be at least 30 minutes."],
        )

    def test_missing_times(self) -> None:
        s = make_schedule(1)
        s.end_time = None
        self.assertEqual(self.detector.validate_time_range(s), ["Start time and end time are required."])

    def test_limits_from_settings(self) -> None:
        detector = ConflictDetector(InMemoryScheduleQuery(), Settings(MIN_MEETING_MINUTES=60, MAX_MEETING_HOURS=3))
        self.assertEqual(
            detector.validate_time_range(make_schedule(1, start="09:00", end="09:45")),
            ["Schedule duration must be at least 60 minutes."],
        )
        self.assertEqual(
            detector.validate_time_range(make_schedule(1, start="09:00", end="13:00")),
            ["Schedule duration cannot exceed 3 hours."],
        )


class TestValidateRoomCapacity(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = ConflictDetector(InMemoryScheduleQuery())

    def test_over_capacity(self) -> None:
        room = Room(id=1, code="R101", capacity=40)
        errors = self.detector.validate_room_capacity(make_schedule(1, room=room, enrolled=45))
        self.assertEqual(errors, ["Enrolled students (45) exceeds room capacity (40)."])

    def test_at_capacity_ok(self) -> None:
        room = Room(id=1, code="R101", capacity=40)
        self.assertEqual(self.detector.validate_room_capacity(make_schedule(1, room=room, enrolled=40)), [])

    def test_unknown_capacity_or_no_room(self) -> None:
        room = Room(id=1, code="R101", capacity=None)
        self.assertEqual(self.detector.validate_room_capacity(make_schedule(1, room=room, enrolled=500)), [])
        self.assertEqual(self.detector.validate_room_capacity(make_schedule(1, room=None, enrolled=500)), [])


if __name__ == "__main__":
    unittest.main()

"""
HTTP endpoints of /admin/conflicts, with get_db pointed at SQLite.
"""

import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient

from schedcheck.database import get_db
from schedcheck.models.schedule import Schedule
from schedcheck.routers import conflicts

from schedule_fixtures import make_schedule, seed_basics, sqlite_session_factory


class TestConflictsRouter(unittest.TestCase):
    def setUp(self) -> None:
        self.Session = sqlite_session_factory()
        with self.Session() as db:
            o = seed_basics(db)
            db.add_all([
                make_schedule(1, room=o["r101"], subject=o["its101"], section="A", faculty=o["smith"], enrolled=45),
                make_schedule(2, room=o["r101"], subject=o["mat101"], section="A", start="09:30", end="10:30"),
                make_schedule(3, room=o["r102"], subject=o["its101"], section="A", faculty=o["smith"],
                              days="TTh", start="13:00", end="13:15"),
            ])
            db.commit()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app = FastAPI()
        app.include_router(conflicts.router)
        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def stored_flag(self, schedule_id: int) -> bool:
        with self.Session() as db:
            return db.query(Schedule).filter(Schedule.id == schedule_id).one().is_conflicted

    def test_scan(self) -> None:
        res = self.client.post("/admin/conflicts/scan")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"total_scanned": 3, "conflicts_found": 2, "schedules_updated": 2})
        self.assertTrue(self.stored_flag(1))
        self.assertFalse(self.stored_flag(3))

    def test_scan_department(self) -> None:
        res = self.client.post("/admin/conflicts/scan", params={"department_id": 2})
        self.assertEqual(res.json(), {"total_scanned": 1, "conflicts_found": 1, "schedules_updated": 1})

    def test_list_conflicted(self) -> None:
        res = self.client.get("/admin/conflicts", params={"academic_year_id": 1, "semester": "1st Semester"})
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertEqual([x["schedule"]["id"] for x in body], [1, 2])
        self.assertEqual(body[0]["conflict_count"], 1)
        self.assertEqual(body[0]["conflicts"][0]["type"], "room_time_conflict")
        self.assertEqual(body[0]["conflicts"][0]["schedule_id"], 2)

    def test_check_schedule(self) -> None:
        res = self.client.get("/admin/conflicts/schedules/1")
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertTrue(body["is_conflicted"])
        self.assertEqual([c["type"] for c in body["conflicts"]], ["room_time_conflict"])
        self.assertEqual([c["schedule_id"] for c in body["duplicates"]], [3])
        self.assertEqual(body["faculty_conflicts"], [])
        self.assertEqual(body["time_errors"], [])
        self.assertEqual(body["capacity_errors"], ["Enrolled students (45) exceeds room capacity (40)."])
        self.assertTrue(body["summary"].startswith("2 conflict(s) detected:"))

    def test_check_schedule_time_errors(self) -> None:
        body = self.client.get("/admin/conflicts/schedules/3").json()
        self.assertFalse(body["is_conflicted"])
        self.assertEqual(body["time_errors"], ["Schedule duration must be at least 30 minutes."])

    def test_check_missing_schedule(self) -> None:
        res = self.client.get("/admin/conflicts/schedules/404")
        self.assertEqual(res.status_code, 404)

    def test_refresh(self) -> None:
        res = self.client.post("/admin/conflicts/schedules/2/refresh")
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertTrue(body["is_conflicted"])
        self.assertEqual([c["schedule_id"] for c in body["conflicts"]], [1])
        self.assertTrue(self.stored_flag(2))
        self.assertFalse(self.stored_flag(1))


if __name__ == "__main__":
    unittest.main()

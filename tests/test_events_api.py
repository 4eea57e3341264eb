import unittest

from auntrack_api.core.database import SessionLocal
from auntrack_api.models import CalendarEvent
from tests.support import ApiTestCase


class TestEventsApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.superadmin_headers()

    def test_create_defaults_color_to_category(self) -> None:
        response = self.create_event(self.admin, description="Monthly Town Hall Meeting")
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertEqual(body["color"], "#fb923c")
        self.assertEqual(body["category_name"], "HR Events")
        self.assertEqual(body["category_color"], "#fb923c")
        self.assertEqual(body["description"], "Monthly Town Hall Meeting")

    def test_explicit_color_is_kept(self) -> None:
        response = self.create_event(self.admin, color="#123456")
        self.assertEqual(response.json()["color"], "#123456")

    def test_offsets_are_normalised_to_utc(self) -> None:
        response = self.create_event(
            self.admin, start_date="2025-08-05T11:00:00+02:00", end_date="2025-08-05T19:00:00+02:00"
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["start_date"], "2025-08-05T09:00:00Z")

        with SessionLocal() as db:
            stored = db.get(CalendarEvent, response.json()["id"])
            self.assertEqual(stored.start_date.hour, 9)
            self.assertIsNone(stored.start_date.tzinfo)

    def test_start_after_end_is_rejected(self) -> None:
        response = self.create_event(
            self.admin, start_date="2025-08-07T09:00:00Z", end_date="2025-08-05T09:00:00Z"
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Start date/time cannot be after end date/time")

    def test_unknown_category_is_rejected(self) -> None:
        response = self.create_event(self.admin, category_id=999)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Category not found")

    def test_list_is_ordered_by_start(self) -> None:
        self.create_event(self.admin, title="Later", start_date="2025-08-09T09:00:00Z", end_date="2025-08-09T10:00:00Z")
        self.create_event(self.admin, title="Sooner", start_date="2025-08-02T09:00:00Z", end_date="2025-08-02T10:00:00Z")

        response = self.client.get("/api/events", headers=self.admin)
        self.assertEqual([event["title"] for event in response.json()], ["Sooner", "Later"])

    def test_get_single_event(self) -> None:
        event_id = self.create_event(self.admin).json()["id"]
        response = self.client.get(f"/api/events/{event_id}", headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "TownHall")

        missing = self.client.get("/api/events/999", headers=self.admin)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["detail"], "Event not found")

    def test_partial_update_keeps_other_fields(self) -> None:
        created = self.create_event(self.admin, description="keep me").json()

        response = self.client.put(
            f"/api/events/{created['id']}",
            json={"start_date": "2025-08-10T09:00:00Z", "end_date": "2025-08-12T17:00:00Z"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["start_date"], "2025-08-10T09:00:00Z")
        self.assertEqual(body["end_date"], "2025-08-12T17:00:00Z")
        self.assertEqual(body["title"], created["title"])
        self.assertEqual(body["description"], "keep me")

    def test_empty_update_returns_event_unchanged(self) -> None:
        created = self.create_event(self.admin).json()
        response = self.client.put(f"/api/events/{created['id']}", json={}, headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), created)

    def test_update_checks_the_merged_interval(self) -> None:
        created = self.create_event(self.admin).json()
        response = self.client.put(
            f"/api/events/{created['id']}", json={"start_date": "2025-08-20T09:00:00Z"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)

    def test_update_unknown_event_is_404(self) -> None:
        response = self.client.put("/api/events/999", json={"title": "x"}, headers=self.admin)
        self.assertEqual(response.status_code, 404)

    def test_delete_event(self) -> None:
        event_id = self.create_event(self.admin).json()["id"]
        response = self.client.delete(f"/api/events/{event_id}", headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(f"/api/events/{event_id}", headers=self.admin).status_code, 404)
        self.assertEqual(self.client.delete(f"/api/events/{event_id}", headers=self.admin).status_code, 404)


class TestEventCapabilities(ApiTestCase):
    def test_user_without_flags_is_read_only(self) -> None:
        admin = self.superadmin_headers()
        event_id = self.create_event(admin).json()["id"]
        viewer = self.make_user("viewer")

        self.assertEqual(self.client.get("/api/events", headers=viewer).status_code, 200)
        self.assertEqual(self.create_event(viewer).status_code, 403)
        self.assertEqual(
            self.client.put(f"/api/events/{event_id}", json={"title": "x"}, headers=viewer).status_code, 403
        )
        self.assertEqual(self.client.delete(f"/api/events/{event_id}", headers=viewer).status_code, 403)

    def test_add_flag_allows_create_only(self) -> None:
        adder = self.make_user("adder", can_add=True)
        created = self.create_event(adder)
        self.assertEqual(created.status_code, 201)
        response = self.client.put(f"/api/events/{created.json()['id']}", json={"title": "x"}, headers=adder)
        self.assertEqual(response.status_code, 403)

    def test_edit_flag_allows_update_and_delete(self) -> None:
        event_id = self.create_event(self.superadmin_headers()).json()["id"]
        editor = self.make_user("editor", can_edit=True)

        self.assertEqual(self.create_event(editor).status_code, 403)
        response = self.client.put(f"/api/events/{event_id}", json={"title": "Renamed"}, headers=editor)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "Renamed")
        self.assertEqual(self.client.delete(f"/api/events/{event_id}", headers=editor).status_code, 200)


if __name__ == "__main__":
    unittest.main(verbosity=2)

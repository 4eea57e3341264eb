import unittest

from auntrack_api.core.database import SessionLocal
from auntrack_api.models import CalendarEvent
from tests.support import ApiTestCase


class TestCategoriesApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.superadmin_headers()

    def test_seeded_categories_listed_by_name(self) -> None:
        response = self.client.get("/api/categories", headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [(c["name"], c["color"]) for c in response.json()],
            [("Automotive", "#facc15"), ("HR Events", "#fb923c")],
        )

    def test_create_category(self) -> None:
        response = self.client.post(
            "/api/categories", json={"name": "Finance", "color": "#22c55e"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["name"], "Finance")

    def test_duplicate_name_is_rejected(self) -> None:
        response = self.client.post(
            "/api/categories", json={"name": "HR Events", "color": "#000000"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Category name already exists")
        self.assertEqual(response.json()["error_code"], "CONFLICT")

    def test_missing_color_is_rejected(self) -> None:
        response = self.client.post("/api/categories", json={"name": "Finance"}, headers=self.admin)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Name and color are required")

    def test_update_needs_a_field(self) -> None:
        category_id = self.category_id("Automotive")
        response = self.client.put(f"/api/categories/{category_id}", json={}, headers=self.admin)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "At least name or color must be provided")

    def test_update_color_only(self) -> None:
        category_id = self.category_id("Automotive")
        response = self.client.put(
            f"/api/categories/{category_id}", json={"color": "#0ea5e9"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Automotive")
        self.assertEqual(response.json()["color"], "#0ea5e9")

    def test_rename_to_existing_name_is_conflict(self) -> None:
        category_id = self.category_id("Automotive")
        response = self.client.put(
            f"/api/categories/{category_id}", json={"name": "HR Events"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error_code"], "CONFLICT")

    def test_unknown_category_is_404(self) -> None:
        response = self.client.put("/api/categories/999", json={"name": "X"}, headers=self.admin)
        self.assertEqual(response.status_code, 404)
        response = self.client.delete("/api/categories/999", headers=self.admin)
        self.assertEqual(response.status_code, 404)

    def test_delete_cascades_to_events(self) -> None:
        hr_id = self.category_id("HR Events")
        self.assertEqual(self.create_event(self.admin).status_code, 201)
        self.assertEqual(self.create_event(self.admin, title="HR Awards").status_code, 201)
        self.assertEqual(
            self.create_event(self.admin, title="Marathon Run", category_id=self.category_id("Automotive")).status_code,
            201,
        )

        response = self.client.delete(f"/api/categories/{hr_id}", headers=self.admin)
        self.assertEqual(response.status_code, 200)

        with SessionLocal() as db:
            self.assertEqual(db.query(CalendarEvent).filter(CalendarEvent.category_id == hr_id).count(), 0)
        titles = [event["title"] for event in self.client.get("/api/events", headers=self.admin).json()]
        self.assertEqual(titles, ["Marathon Run"])

    def test_plain_user_cannot_manage_categories(self) -> None:
        headers = self.make_user("editor", can_add=True, can_edit=True)
        response = self.client.post("/api/categories", json={"name": "Finance", "color": "#22c55e"}, headers=headers)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error_code"], "FORBIDDEN")
        # reading is allowed
        self.assertEqual(self.client.get("/api/categories", headers=headers).status_code, 200)

    def test_admin_can_manage_categories(self) -> None:
        headers = self.make_user("boss", role="admin")
        response = self.client.post("/api/categories", json={"name": "Finance", "color": "#22c55e"}, headers=headers)
        self.assertEqual(response.status_code, 201)


if __name__ == "__main__":
    unittest.main(verbosity=2)

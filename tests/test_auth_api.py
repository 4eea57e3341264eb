import unittest
from datetime import datetime, timedelta, timezone

import jwt

from auntrack_api.core.config import get_settings
from auntrack_api.core.database import SessionLocal
from auntrack_api.db.init_db import seed_categories, seed_sample_events, seed_super_admin
from auntrack_api.models import CalendarEvent, Category, User
from tests.support import (
    ApiTestCase,
    SUPERADMIN_EMAIL,
    SUPERADMIN_PASSWORD,
    SUPERADMIN_USERNAME,
)


class TestLogin(ApiTestCase):
    def test_login_by_username_returns_token_and_user(self) -> None:
        response = self.client.post(
            "/api/auth/login",
            json={"username_or_email": SUPERADMIN_USERNAME, "password": SUPERADMIN_PASSWORD},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["user"]["role"], "super_admin")
        self.assertTrue(body["user"]["can_add"])
        self.assertTrue(body["user"]["can_edit"])
        self.assertNotIn("password_hash", body["user"])

        settings = get_settings()
        claims = jwt.decode(body["token"], settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        self.assertEqual(claims["username"], SUPERADMIN_USERNAME)
        self.assertEqual(claims["role"], "super_admin")
        self.assertIn("exp", claims)

    def test_login_by_email_and_username_alias(self) -> None:
        by_email = self.client.post(
            "/api/auth/login", json={"username": SUPERADMIN_EMAIL, "password": SUPERADMIN_PASSWORD}
        )
        self.assertEqual(by_email.status_code, 200)
        self.assertEqual(by_email.json()["user"]["username"], SUPERADMIN_USERNAME)

    def test_missing_credentials_is_400(self) -> None:
        response = self.client.post("/api/auth/login", json={"username_or_email": SUPERADMIN_USERNAME})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Username/Email and password are required")
        self.assertEqual(response.json()["error_code"], "VALIDATION_ERROR")

    def test_wrong_password_is_401(self) -> None:
        response = self.client.post(
            "/api/auth/login", json={"username_or_email": SUPERADMIN_USERNAME, "password": "nope"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Invalid credentials")

    def test_unknown_user_is_401(self) -> None:
        response = self.client.post(
            "/api/auth/login", json={"username_or_email": "ghost", "password": "whatever"}
        )
        self.assertEqual(response.status_code, 401)


class TestTokenChecks(ApiTestCase):
    def test_me_returns_token_identity(self) -> None:
        response = self.client.get("/api/auth/me", headers=self.superadmin_headers())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["email"], SUPERADMIN_EMAIL)

    def test_missing_token_is_401(self) -> None:
        response = self.client.get("/api/categories")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Not authenticated")

    def test_garbage_token_is_403(self) -> None:
        response = self.client.get("/api/categories", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["detail"], "Invalid or expired token")
        self.assertEqual(response.json()["error_code"], "INVALID_TOKEN")

    def test_expired_token_is_403(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {
                "id": 1, "username": SUPERADMIN_USERNAME, "email": SUPERADMIN_EMAIL,
                "role": "super_admin", "can_edit": True, "can_add": True,
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        response = self.client.get("/api/events", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 403)

    def test_health_needs_no_token(self) -> None:
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")


class TestSeeding(ApiTestCase):
    def test_seeding_twice_adds_nothing(self) -> None:
        with SessionLocal() as db:
            self.assertFalse(seed_super_admin(db, get_settings()))
            self.assertEqual(seed_categories(db), 0)
            self.assertEqual(
                [(c.name, c.color) for c in db.query(Category).order_by(Category.name)],
                [("Automotive", "#facc15"), ("HR Events", "#fb923c")],
            )
            self.assertEqual(db.query(User).count(), 1)

    def test_sample_events_only_into_empty_table(self) -> None:
        with SessionLocal() as db:
            self.assertEqual(seed_sample_events(db), 3)
            db.commit()
            self.assertEqual(seed_sample_events(db), 0)
            self.assertEqual(db.query(CalendarEvent).count(), 3)


if __name__ == "__main__":
    unittest.main(verbosity=2)

import copy
import unittest
from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

from auntrack_api.core.database import engine, SessionLocal
from auntrack_api.core.security import hash_password
from auntrack_api.db.init_db import seed_database
from auntrack_api.main import app
from auntrack_api.models import Base, Category, User
from auntrack_common.permissions import can_perform

SUPERADMIN_USERNAME = "superadmin"
SUPERADMIN_EMAIL = "superadmin@auntrack.com"
SUPERADMIN_PASSWORD = "admin123"


class ApiTestCase(unittest.TestCase):
    """Fresh in-memory database, seeded, for every test."""

    def setUp(self) -> None:
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        with SessionLocal() as db:
            seed_database(db)
            db.commit()
        self.client = TestClient(app)

    def login(self, username_or_email: str, password: str) -> str:
        response = self.client.post(
            "/api/auth/login", json={"username_or_email": username_or_email, "password": password}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["token"]

    def headers_for(self, username_or_email: str, password: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.login(username_or_email, password)}"}

    def superadmin_headers(self) -> Dict[str, str]:
        return self.headers_for(SUPERADMIN_USERNAME, SUPERADMIN_PASSWORD)

    def make_user(
        self,
        username: str,
        role: str = "user",
        can_add: bool = False,
        can_edit: bool = False,
        password: str = "secret123",
    ) -> Dict[str, str]:
        """Insert an account directly and return its auth headers."""
        with SessionLocal() as db:
            db.add(User(
                username=username,
                email=f"{username}@example.com",
                password_hash=hash_password(password),
                role=role,
                name=username.title(),
                can_add=can_add,
                can_edit=can_edit,
            ))
            db.commit()
        return self.headers_for(username, password)

    def category_id(self, name: str) -> int:
        with SessionLocal() as db:
            return db.query(Category).filter(Category.name == name).one().id

    def create_event(self, headers: Dict[str, str], **overrides: Any):
        payload = {
            "title": "TownHall",
            "category_id": self.category_id("HR Events"),
            "start_date": "2025-08-04T09:00:00Z",
            "end_date": "2025-08-04T17:00:00Z",
        }
        payload.update(overrides)
        return self.client.post("/api/events", json=payload, headers=headers)


class FakeAPIClient:
    """
    Stand-in for ``APIClient`` that answers from a route table.

    A route result may be a value (returned as a deep copy), an exception
    (raised) or a callable taking the request body.
    """

    def __init__(self):
        self.routes: Dict[tuple, Any] = {}
        self.calls = []
        self.interceptors = []

    def add_interceptor(self, interceptor) -> None:
        self.interceptors.append(interceptor)

    def on(self, method: str, endpoint: str, result: Any) -> None:
        self.routes[(method, endpoint)] = result

    def calls_to(self, method: str, endpoint: Optional[str] = None):
        return [call for call in self.calls if call[0] == method and (endpoint is None or call[1] == endpoint)]

    def _dispatch(self, method: str, endpoint: str, data: Any = None, params: Any = None) -> Any:
        self.calls.append((method, endpoint, data))
        if (method, endpoint) not in self.routes:
            raise AssertionError(f"Unexpected request {method} {endpoint}")
        result = self.routes[(method, endpoint)]
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(data)
        return copy.deepcopy(result)

    def get(self, endpoint, params=None, **kwargs):
        return self._dispatch("GET", endpoint, params=params)

    def post(self, endpoint, data=None, **kwargs):
        return self._dispatch("POST", endpoint, data=data)

    def put(self, endpoint, data, **kwargs):
        return self._dispatch("PUT", endpoint, data=data)

    def delete(self, endpoint, params=None, **kwargs):
        return self._dispatch("DELETE", endpoint, params=params)


class FakeAuth:
    """Permission source for store tests; records logouts."""

    def __init__(self, role: str = "user", can_add: bool = False, can_edit: bool = False):
        self.user = {"role": role, "can_add": can_add, "can_edit": can_edit}
        self.logged_out = False

    def can(self, action) -> bool:
        return not self.logged_out and can_perform(self.user, action)

    def logout(self) -> None:
        self.logged_out = True

import os
import tempfile
import unittest
from datetime import datetime, timedelta, timezone

import jwt

from auntrack_common.permissions import Action
from auntrack_ui.app_lib.api.errors import AuthenticationError, TransportError
from auntrack_ui.services.auth_service import TOKEN_KEY, USER_KEY, AuthService
from auntrack_ui.services.session_storage import (
    BROWSER_ID_PARAM,
    BrowserSessionStorage,
    InMemoryStorage,
    JsonFileStorage,
    browser_id_from,
    new_browser_id,
)
from tests.support import FakeAPIClient

USER = {
    "id": 2,
    "username": "editor",
    "email": "editor@example.com",
    "name": "Editor",
    "role": "user",
    "can_edit": True,
    "can_add": False,
}


def make_token(expires_in: timedelta) -> str:
    return jwt.encode(
        {**{k: USER[k] for k in ("id", "username", "email", "role", "can_edit", "can_add")},
         "exp": datetime.now(timezone.utc) + expires_in},
        "the-client-never-knows-the-signing-secret",
        algorithm="HS256",
    )


class TestAuthService(unittest.TestCase):
    def setUp(self) -> None:
        self.client = FakeAPIClient()
        self.storage = InMemoryStorage()
        self.auth = AuthService(self.client, self.storage)

    def test_login_stores_token_and_snapshot(self) -> None:
        token = make_token(timedelta(hours=24))
        self.client.on("POST", "/api/auth/login", {"token": token, "user": USER})

        self.assertTrue(self.auth.login("editor", "secret"))
        self.assertTrue(self.auth.is_authenticated)
        self.assertEqual(self.storage.get(TOKEN_KEY), token)
        self.assertEqual(self.storage.get(USER_KEY)["username"], "editor")
        self.assertTrue(self.auth.can(Action.EDIT_EVENT))
        self.assertFalse(self.auth.can(Action.ADD_EVENT))
        self.assertFalse(self.auth.is_super_admin)

    def test_interceptor_adds_bearer_header_only_when_logged_in(self) -> None:
        interceptor = self.client.interceptors[0]
        self.assertNotIn("Authorization", interceptor({"headers": {}})["headers"])

        self.client.on("POST", "/api/auth/login", {"token": "abc", "user": USER})
        self.auth.login("editor", "secret")
        self.assertEqual(interceptor({"headers": {}})["headers"]["Authorization"], "Bearer abc")

    def test_failed_login_stores_nothing(self) -> None:
        self.client.on("POST", "/api/auth/login", AuthenticationError("Invalid credentials", 401))

        self.assertFalse(self.auth.login("editor", "wrong"))
        self.assertEqual(self.auth.last_error, "Invalid credentials")
        self.assertFalse(self.auth.is_authenticated)
        self.assertIsNone(self.storage.get(TOKEN_KEY))

    def test_unreachable_backend_fails_login(self) -> None:
        self.client.on("POST", "/api/auth/login", TransportError("Connection error"))
        self.assertFalse(self.auth.login("editor", "secret"))
        self.assertEqual(self.auth.last_error, "Connection error")

    def test_blank_credentials_never_reach_backend(self) -> None:
        self.assertFalse(self.auth.login("  ", "secret"))
        self.assertFalse(self.auth.login("editor", ""))
        self.assertEqual(self.client.calls, [])
        self.assertEqual(self.auth.last_error, "Username/Email and password are required")

    def test_logout_clears_storage(self) -> None:
        self.client.on("POST", "/api/auth/login", {"token": "abc", "user": USER})
        self.auth.login("editor", "secret")

        self.auth.logout()
        self.assertFalse(self.auth.is_authenticated)
        self.assertIsNone(self.storage.get(TOKEN_KEY))
        self.assertIsNone(self.storage.get(USER_KEY))
        self.assertFalse(self.auth.can(Action.EDIT_EVENT))

    def test_restore_valid_session(self) -> None:
        storage = InMemoryStorage({TOKEN_KEY: make_token(timedelta(hours=1)), USER_KEY: USER})
        auth = AuthService(FakeAPIClient(), storage)

        self.assertTrue(auth.restore())
        self.assertEqual(auth.current_user.username, "editor")

    def test_restore_drops_expired_session(self) -> None:
        storage = InMemoryStorage({TOKEN_KEY: make_token(timedelta(hours=-1)), USER_KEY: USER})
        auth = AuthService(FakeAPIClient(), storage)

        self.assertFalse(auth.restore())
        self.assertIsNone(storage.get(TOKEN_KEY))
        self.assertIsNone(storage.get(USER_KEY))

    def test_restore_without_snapshot(self) -> None:
        storage = InMemoryStorage({TOKEN_KEY: make_token(timedelta(hours=1))})
        self.assertFalse(AuthService(FakeAPIClient(), storage).restore())
        self.assertIsNone(storage.get(TOKEN_KEY))


class TestJsonFileStorage(unittest.TestCase):
    def test_values_survive_a_new_instance(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "session.json")
            JsonFileStorage(path).set(TOKEN_KEY, "abc")

            storage = JsonFileStorage(path)
            self.assertEqual(storage.get(TOKEN_KEY), "abc")
            storage.remove(TOKEN_KEY)
            self.assertIsNone(JsonFileStorage(path).get(TOKEN_KEY))

    def test_corrupt_file_reads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "session.json")
            with open(path, "w", encoding="utf-8") as handle:
                handle.write("{not json")
            with self.assertLogs("SESSION_STORAGE", level="WARNING"):
                self.assertIsNone(JsonFileStorage(path).get(TOKEN_KEY))


class TestBrowserSessions(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def login_in(self, storage) -> AuthService:
        client = FakeAPIClient()
        client.on("POST", "/api/auth/login", {"token": make_token(timedelta(hours=1)), "user": USER})
        auth = AuthService(client, storage)
        self.assertTrue(auth.login("editor", "secret"))
        return auth

    def test_other_browser_does_not_inherit_login(self) -> None:
        self.login_in(BrowserSessionStorage(self.tmp.name, new_browser_id()))

        visitor = AuthService(FakeAPIClient(), BrowserSessionStorage(self.tmp.name, new_browser_id()))
        self.assertFalse(visitor.restore())
        self.assertFalse(visitor.is_authenticated)

    def test_same_browser_restores_after_reload(self) -> None:
        browser_id = new_browser_id()
        self.login_in(BrowserSessionStorage(self.tmp.name, browser_id))

        reloaded = AuthService(FakeAPIClient(), BrowserSessionStorage(self.tmp.name, browser_id))
        self.assertTrue(reloaded.restore())
        self.assertEqual(reloaded.current_user.username, "editor")

    def test_logout_removes_the_browser_file(self) -> None:
        storage = BrowserSessionStorage(self.tmp.name, new_browser_id())
        self.login_in(storage).logout()
        self.assertFalse(storage.path.exists())

    def test_browser_id_is_created_once(self) -> None:
        params = {}
        browser_id = browser_id_from(params)
        self.assertEqual(params[BROWSER_ID_PARAM], browser_id)
        self.assertEqual(browser_id_from(params), browser_id)

    def test_malformed_browser_id_is_replaced(self) -> None:
        params = {BROWSER_ID_PARAM: "../../etc/passwd"}
        with self.assertLogs("SESSION_STORAGE", level="WARNING"):
            browser_id = browser_id_from(params)
        self.assertNotEqual(browser_id, "../../etc/passwd")
        with self.assertRaises(ValueError):
            BrowserSessionStorage(self.tmp.name, "../../etc/passwd")


if __name__ == "__main__":
    unittest.main(verbosity=2)

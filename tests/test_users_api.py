"""HTTP tests for /register, /login and /users using TestClient over an in-memory store."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.database import get_db
from app.core.security import create_access_token
from app.main import app
from app.models import Role
from tests.support import make_session_factory


class ApiTestCase(unittest.TestCase):
    """TestClient whose get_db dependency is bound to a fresh in-memory store."""

    def setUp(self) -> None:
        session_factory = make_session_factory()

        def _get_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def register(self, name: str = "Alice", email: str = "a@x.com", password: str = "pw1"):
        return self.client.post(
            "/register", json={"name": name, "email": email, "password": password}
        )

    def login(self, email: str = "a@x.com", password: str = "pw1"):
        return self.client.post("/login", json={"email": email, "password": password})

    def token_for(self, name: str = "Alice", email: str = "a@x.com", password: str = "pw1") -> str:
        self.assertEqual(self.register(name, email, password).status_code, 200)
        response = self.login(email, password)
        self.assertEqual(response.status_code, 200)
        return response.json()["token"]

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


class TestBlockScenario(ApiTestCase):
    """Register, log in, list, block self, then the pre-block token is refused."""

    def test_block_takes_effect_for_outstanding_token(self) -> None:
        registered = self.register()
        self.assertEqual(registered.status_code, 200)
        alice = registered.json()
        self.assertNotIn("password", alice)
        self.assertNotIn("password_hash", alice)

        token = self.login().json()["token"]

        listed = self.client.get("/users", headers=self.auth(token))
        self.assertEqual(listed.status_code, 200)
        rows = listed.json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["email"], "a@x.com")
        self.assertEqual(rows[0]["status"], "active")
        self.assertIsNotNone(rows[0]["last_login_at"])

        blocked = self.client.patch(f"/users/{alice['id']}/block", headers=self.auth(token))
        self.assertEqual(blocked.status_code, 200)
        self.assertEqual(blocked.json()["status"], "blocked")

        again = self.client.get("/users", headers=self.auth(token))
        self.assertEqual(again.status_code, 403)
        self.assertEqual(again.json()["error"], "AccountBlocked")

        relogin = self.login()
        self.assertEqual(relogin.status_code, 403)
        self.assertEqual(relogin.json()["error"], "AccountBlocked")


class TestRegisterAndLogin(ApiTestCase):
    def test_empty_password(self) -> None:
        response = self.register(password="")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "ValidationError")

    def test_duplicate_email(self) -> None:
        self.register()
        response = self.register(name="Impostor")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Conflict")

    def test_missing_field_is_validation_error(self) -> None:
        response = self.client.post("/register", json={"name": "Alice", "password": "pw1"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "ValidationError")

    def test_invalid_credentials_have_one_shape(self) -> None:
        self.register()
        wrong_password = self.login(password="nope")
        unknown_email = self.login(email="nobody@x.com")
        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(wrong_password.status_code, unknown_email.status_code)
        self.assertEqual(wrong_password.json(), unknown_email.json())
        self.assertEqual(wrong_password.json()["error"], "InvalidCredentials")


class TestAuthGateOverHttp(ApiTestCase):
    def test_no_token(self) -> None:
        response = self.client.get("/users")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Unauthenticated")
        self.assertEqual(response.headers["WWW-Authenticate"], "Bearer")

    def test_malformed_header(self) -> None:
        response = self.client.get("/users", headers={"Authorization": "Token abc"})
        self.assertEqual(response.status_code, 401)

    def test_bad_token(self) -> None:
        response = self.client.get("/users", headers=self.auth("abc.def.ghi"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "TokenInvalid")

    def test_expired_token(self) -> None:
        self.token_for()
        token = create_access_token(sub=1, role=Role.USER, ttl=timedelta(seconds=-1))
        response = self.client.get("/users", headers=self.auth(token))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "TokenExpired")
        self.assertEqual(response.headers["WWW-Authenticate"], "Bearer")

    def test_me(self) -> None:
        token = self.token_for()
        response = self.client.get("/users/me", headers=self.auth(token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Alice")
        self.assertEqual(response.json()["role"], "user")


class TestUserMutations(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.token = self.token_for()
        self.bob = self.register(name="Bob", email="b@x.com", password="pw2").json()

    def test_unblock_and_idempotent_block(self) -> None:
        url = f"/users/{self.bob['id']}"
        self.assertEqual(self.client.patch(f"{url}/block", headers=self.auth(self.token)).json()["status"], "blocked")
        second = self.client.patch(f"{url}/block", headers=self.auth(self.token))
        self.assertEqual(second.status_code, 200)
        self.assertEqual(second.json()["status"], "blocked")
        unblocked = self.client.patch(f"{url}/unblock", headers=self.auth(self.token))
        self.assertEqual(unblocked.json()["status"], "active")

    def test_status_endpoint_validates_value(self) -> None:
        url = f"/users/{self.bob['id']}/status"
        bad = self.client.put(url, json={"status": "frozen"}, headers=self.auth(self.token))
        self.assertEqual(bad.status_code, 400)
        self.assertEqual(bad.json()["error"], "ValidationError")
        good = self.client.put(url, json={"status": "blocked"}, headers=self.auth(self.token))
        self.assertEqual(good.status_code, 200)
        self.assertEqual(good.json()["status"], "blocked")

    def test_unknown_id(self) -> None:
        response = self.client.patch("/users/9999/block", headers=self.auth(self.token))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "NotFound")

    def test_non_integer_id(self) -> None:
        response = self.client.patch("/users/abc/block", headers=self.auth(self.token))
        self.assertEqual(response.status_code, 400)

    def test_out_of_range_id_is_validation_error(self) -> None:
        headers = self.auth(self.token)
        for response in (
            self.client.patch("/users/99999999999999999999/block", headers=headers),
            self.client.patch("/users/0/unblock", headers=headers),
            self.client.delete("/users/-1", headers=headers),
        ):
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["error"], "ValidationError")

    def test_out_of_range_bulk_id_is_validation_error(self) -> None:
        response = self.client.patch(
            "/users/block", json={"ids": [self.bob["id"], 99999999999999999999]}, headers=self.auth(self.token)
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "ValidationError")
        bob = self.client.get(f"/users/{self.bob['id']}", headers=self.auth(self.token)).json()
        self.assertEqual(bob["status"], "active")

    def test_delete_is_terminal(self) -> None:
        url = f"/users/{self.bob['id']}"
        deleted = self.client.delete(url, headers=self.auth(self.token))
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json()["user"], {"id": self.bob["id"], "name": "Bob", "email": "b@x.com"})
        for response in (
            self.client.get(url, headers=self.auth(self.token)),
            self.client.patch(f"{url}/block", headers=self.auth(self.token)),
            self.client.delete(url, headers=self.auth(self.token)),
        ):
            self.assertEqual(response.status_code, 404)

    def test_bulk_block_with_missing_id(self) -> None:
        response = self.client.patch(
            "/users/block", json={"ids": [self.bob["id"], 9999]}, headers=self.auth(self.token)
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["count"], 1)
        self.assertEqual(body["updated"], [self.bob["id"]])
        self.assertEqual(body["not_found"], [9999])
        bob = self.client.get(f"/users/{self.bob['id']}", headers=self.auth(self.token)).json()
        self.assertEqual(bob["status"], "blocked")

        unblocked = self.client.patch(
            "/users/unblock", json={"ids": [self.bob["id"]]}, headers=self.auth(self.token)
        )
        self.assertEqual(unblocked.json()["status"], "active")
        self.assertEqual(unblocked.json()["count"], 1)

    def test_bulk_delete(self) -> None:
        response = self.client.request(
            "DELETE", "/users", json={"ids": [self.bob["id"], 9999]}, headers=self.auth(self.token)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["deleted"], [self.bob["id"]])
        self.assertEqual(response.json()["not_found"], [9999])
        listed = self.client.get("/users", headers=self.auth(self.token)).json()
        self.assertEqual([u["email"] for u in listed], ["a@x.com"])


class TestHealth(ApiTestCase):
    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertEqual(response.json()["database"], "connected")
        self.assertEqual(response.json()["token_ttl_minutes"], 60)
        self.assertFalse(response.json()["admin_only_mutations"])

    def test_health_reports_unreachable_store(self) -> None:
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        app.dependency_overrides[get_db] = lambda: session
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "disconnected")


class TestStoreFailureOverHttp(unittest.TestCase):
    """An unavailable store surfaces as 500 StoreFailure, never a raw error."""

    def setUp(self) -> None:
        session = MagicMock()
        session.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        app.dependency_overrides[get_db] = lambda: session
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_login_store_failure(self) -> None:
        response = self.client.post("/login", json={"email": "a@x.com", "password": "pw1"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "StoreFailure")
        self.assertNotIn("connection refused", response.text)

    def test_auth_gate_store_failure(self) -> None:
        token = create_access_token(sub=1, role=Role.USER)
        response = self.client.get("/users", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "StoreFailure")

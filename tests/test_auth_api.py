"""API tests for /auth: login, logout, verify, register, users, and the auth middleware."""

import time
import unittest
from datetime import UTC, datetime, timedelta

from filmoteca.core.security import TokenService
from tests.support import ADMIN_PASSWORD, ADMIN_USERNAME, ApiTestCase, TEST_SECRET, bearer


class TestLogin(ApiTestCase):
    def test_bootstrap_admin_login_sets_cookie_and_verify_restores_session(self) -> None:
        resp = self.client.post(
            self.api("/auth/login"),
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["username"], ADMIN_USERNAME)
        self.assertEqual(body["user"]["role"], "admin")
        self.assertIsNotNone(body["user"]["lastLogin"])
        self.assertNotIn("passwordHash", body["user"])
        self.assertEqual(resp.cookies.get("token"), body["token"])
        set_cookie = resp.headers["set-cookie"].lower()
        self.assertIn("httponly", set_cookie)
        self.assertIn("samesite=strict", set_cookie)
        self.assertIn("max-age=86400", set_cookie)

        verify = self.client.get(self.api("/auth/verify"))
        self.assertEqual(verify.status_code, 200, verify.text)
        self.assertEqual(verify.json()["user"]["username"], ADMIN_USERNAME)
        self.assertEqual(verify.json()["user"]["role"], "admin")

    def test_login_with_email(self) -> None:
        resp = self.client.post(
            self.api("/auth/login"),
            json={"username": "admin@filmografias.com", "password": ADMIN_PASSWORD},
        )
        self.assertEqual(resp.status_code, 200, resp.text)

    def test_wrong_password_and_unknown_user_share_message(self) -> None:
        wrong = self.client.post(
            self.api("/auth/login"), json={"username": ADMIN_USERNAME, "password": "nope-nope"}
        )
        unknown = self.client.post(
            self.api("/auth/login"), json={"username": "ghost", "password": "nope-nope"}
        )
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())
        self.assertEqual(wrong.json()["message"], "invalid credentials")
        self.assertNotIn("token", wrong.cookies)

    def test_missing_fields(self) -> None:
        resp = self.client.post(self.api("/auth/login"), json={"username": ADMIN_USERNAME})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_inactive_user_cannot_log_in(self) -> None:
        user_id = self.create_user("carol")
        headers = self.admin_headers()
        self.client.patch(self.api(f"/auth/users/{user_id}"), json={"isActive": False}, headers=headers)
        resp = self.client.post(
            self.api("/auth/login"), json={"username": "carol", "password": "secret123"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "invalid credentials")


class TestLogout(ApiTestCase):
    def test_logout_clears_cookie(self) -> None:
        self.client.post(
            self.api("/auth/login"), json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
        )
        resp = self.client.post(self.api("/auth/logout"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "message": "logout successful"})
        self.assertIn("max-age=0", resp.headers["set-cookie"].lower())
        self.client.cookies.clear()
        self.assertEqual(self.client.get(self.api("/auth/verify")).status_code, 401)

    def test_logout_without_session_succeeds(self) -> None:
        self.assertEqual(self.client.post(self.api("/auth/logout")).status_code, 200)


class TestAuthMiddleware(ApiTestCase):
    """Token extraction and rejection paths of get_current_user."""

    def test_no_token(self) -> None:
        resp = self.client.get(self.api("/auth/verify"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"success": False, "message": "access token required"})
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_bearer_header(self) -> None:
        resp = self.client.get(self.api("/auth/verify"), headers=self.admin_headers())
        self.assertEqual(resp.status_code, 200)

    def test_cookie_checked_before_header(self) -> None:
        editor_id = self.create_user("dave")
        admin_token = self.login_token(ADMIN_USERNAME, ADMIN_PASSWORD)
        # Leave dave's login cookie in the client jar.
        self.client.post(self.api("/auth/login"), json={"username": "dave", "password": "secret123"})
        resp = self.client.get(self.api("/auth/verify"), headers=bearer(admin_token))
        self.assertEqual(resp.json()["user"]["id"], editor_id)

    def test_token_signed_with_other_secret(self) -> None:
        admin_id = self.client.get(self.api("/auth/verify"), headers=self.admin_headers()).json()["user"]["id"]
        forged = TokenService("some-other-secret").issue(admin_id)
        resp = self.client.get(self.api("/auth/verify"), headers=bearer(forged))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "invalid token")

    def test_malformed_token(self) -> None:
        resp = self.client.get(self.api("/auth/verify"), headers=bearer("garbage"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "invalid token")

    def test_expired_token(self) -> None:
        admin_id = self.client.get(self.api("/auth/verify"), headers=self.admin_headers()).json()["user"]["id"]
        issued = datetime.now(UTC) - timedelta(hours=24, seconds=1)
        expired = TokenService(TEST_SECRET).issue(admin_id, now=issued)
        resp = self.client.get(self.api("/auth/verify"), headers=bearer(expired))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "token expired")

    def test_token_for_unknown_user(self) -> None:
        token = TokenService(TEST_SECRET).issue("no-such-user")
        resp = self.client.get(self.api("/auth/verify"), headers=bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "invalid or inactive user")

    def test_deactivation_invalidates_existing_token(self) -> None:
        user_id = self.create_user("erin")
        token = self.login_token("erin", "secret123")
        self.assertEqual(self.client.get(self.api("/auth/verify"), headers=bearer(token)).status_code, 200)

        resp = self.client.patch(
            self.api(f"/auth/users/{user_id}"), json={"isActive": False}, headers=self.admin_headers()
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertFalse(resp.json()["user"]["isActive"])

        resp = self.client.get(self.api("/auth/verify"), headers=bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "invalid or inactive user")


class TestRegister(ApiTestCase):
    def test_admin_registers_editor(self) -> None:
        resp = self.client.post(
            self.api("/auth/register"),
            json={"username": "alice", "email": "Alice@Example.com", "password": "secret123"},
            headers=self.admin_headers(),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["user"]["username"], "alice")
        self.assertEqual(body["user"]["email"], "alice@example.com")
        self.assertEqual(body["user"]["role"], "editor")
        self.assertNotIn("passwordHash", body["user"])
        self.assertTrue(self.login_token("alice", "secret123"))

    def test_duplicate_username_rejected(self) -> None:
        headers = self.admin_headers()
        payload = {"username": "alice", "email": "alice@example.com", "password": "secret123"}
        first = self.client.post(self.api("/auth/register"), json=payload, headers=headers)
        second = self.client.post(
            self.api("/auth/register"),
            json={**payload, "email": "alice2@example.com"},
            headers=headers,
        )
        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.json()["message"], "username or email already in use")

    def test_required_fields_and_password_length(self) -> None:
        headers = self.admin_headers()
        missing = self.client.post(self.api("/auth/register"), json={"username": "alice"}, headers=headers)
        self.assertEqual(missing.status_code, 400)
        short = self.client.post(
            self.api("/auth/register"),
            json={"username": "alice", "email": "alice@example.com", "password": "12345"},
            headers=headers,
        )
        self.assertEqual(short.status_code, 400)
        self.assertIn("password", short.json()["errors"])

    def test_password_over_bcrypt_limit(self) -> None:
        resp = self.client.post(
            self.api("/auth/register"),
            json={"username": "alice", "email": "alice@example.com", "password": "p" * 80},
            headers=self.admin_headers(),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("password", resp.json()["errors"])

    def test_field_errors_reported(self) -> None:
        resp = self.client.post(
            self.api("/auth/register"),
            json={"username": "al", "email": "bad", "password": "secret123", "role": "owner"},
            headers=self.admin_headers(),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(set(resp.json()["errors"]), {"username", "email", "role"})

    def test_editor_forbidden(self) -> None:
        self.create_user("frank")
        token = self.login_token("frank", "secret123")
        resp = self.client.post(
            self.api("/auth/register"),
            json={"username": "alice", "email": "alice@example.com", "password": "secret123"},
            headers=bearer(token),
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "insufficient permissions")

    def test_requires_token(self) -> None:
        resp = self.client.post(
            self.api("/auth/register"),
            json={"username": "alice", "email": "alice@example.com", "password": "secret123"},
        )
        self.assertEqual(resp.status_code, 401)


class TestListUsers(ApiTestCase):
    def test_lists_newest_first_without_hashes(self) -> None:
        self.create_user("gina")
        time.sleep(0.01)
        self.create_user("hank")
        resp = self.client.get(self.api("/auth/users"), headers=self.admin_headers())
        self.assertEqual(resp.status_code, 200, resp.text)
        users = resp.json()["users"]
        self.assertEqual([u["username"] for u in users], ["hank", "gina", ADMIN_USERNAME])
        for user in users:
            self.assertNotIn("passwordHash", user)
            self.assertNotIn("password_hash", user)
            self.assertIn("createdAt", user)

    def test_editor_forbidden(self) -> None:
        self.create_user("ivan")
        token = self.login_token("ivan", "secret123")
        resp = self.client.get(self.api("/auth/users"), headers=bearer(token))
        self.assertEqual(resp.status_code, 403)


class TestUpdateUser(ApiTestCase):
    def test_promote_and_change_password(self) -> None:
        user_id = self.create_user("judy")
        resp = self.client.patch(
            self.api(f"/auth/users/{user_id}"),
            json={"role": "admin", "password": "brand-new"},
            headers=self.admin_headers(),
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["user"]["role"], "admin")
        token = self.login_token("judy", "brand-new")
        self.assertEqual(self.client.get(self.api("/auth/users"), headers=bearer(token)).status_code, 200)

    def test_rename_then_login_with_new_name(self) -> None:
        user_id = self.create_user("kyle")
        resp = self.client.patch(
            self.api(f"/auth/users/{user_id}"), json={"username": "kyle2"}, headers=self.admin_headers()
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["user"]["username"], "kyle2")
        self.assertTrue(self.login_token("kyle2", "secret123"))

    def test_unknown_user(self) -> None:
        resp = self.client.patch(
            self.api("/auth/users/missing"), json={"role": "admin"}, headers=self.admin_headers()
        )
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()

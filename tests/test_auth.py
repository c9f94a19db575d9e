import unittest
from unittest import mock

from fastapi.testclient import TestClient

from admin_backend.app import dependencies
from admin_backend.app.dependencies import get_db
from admin_backend.app.main import create_app
from tests.base import ADMIN, NON_ADMIN, ApiTestCase
from tests.fakes import FakeFirestore

PROTECTED = [
    ("GET", "/activities/recent"),
    ("GET", "/activities/user/u1"),
    ("GET", "/test-firestore"),
    ("GET", "/users/learn-progress"),
    ("GET", "/users/progress"),
    ("GET", "/users/auth"),
    ("GET", "/users/combined"),
    ("GET", "/analytics/summary"),
    ("GET", "/leaderboard"),
    ("GET", "/display-name-changes"),
    ("GET", "/feedback"),
    ("GET", "/feedback/recycled"),
    ("POST", "/activity"),
    ("PATCH", "/feedback/f1/status"),
    ("POST", "/feedback/f1/resolve"),
    ("POST", "/feedback/f1/restore"),
]


class AuthTests(ApiTestCase):
    def test_root_is_public_plain_text(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "Admin Dashboard Backend Running")

    def test_missing_token_is_unauthenticated_without_db_access(self):
        for method, path in PROTECTED:
            response = self.client.request(method, path, json={})
            self.assertEqual(response.status_code, 401, path)
            self.assertEqual(response.json()["code"], "unauthenticated")
        self.assertEqual(self.db.calls, [])

    def test_non_bearer_header_is_unauthenticated(self):
        response = self.get("/leaderboard", headers={"Authorization": "Basic abc"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "unauthenticated")

    def test_rejected_token_is_invalid_credential(self):
        response = self.get("/leaderboard", headers={"Authorization": "Bearer expired"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "invalid_credential")
        self.assertEqual(response.headers["www-authenticate"], "Bearer")
        self.assertEqual(self.db.calls, [])

    def test_non_admin_is_forbidden(self):
        for method, path in PROTECTED:
            response = self.client.request(method, path, json={"status": "read"}, headers=NON_ADMIN)
            self.assertEqual(response.status_code, 403, path)
            self.assertEqual(response.json()["error"], "Forbidden: admin access only")
        self.assertEqual(set(self.db.calls), {"admins"})

    def test_admin_flag_must_be_literal_true(self):
        self.db.seed("admins", "user1", {"isAdmin": "true"})
        self.assertEqual(self.get("/leaderboard", headers=NON_ADMIN).status_code, 403)

        self.db.seed("admins", "user1", {"isAdmin": True})
        self.assertEqual(self.get("/leaderboard", headers=NON_ADMIN).status_code, 200)

    def test_revocation_applies_on_next_request(self):
        self.assertEqual(self.get("/leaderboard").status_code, 200)
        self.db.seed("admins", "admin1", {"isAdmin": False})
        self.assertEqual(self.get("/leaderboard").status_code, 403)

    def test_admin_lookup_failure_is_internal_error(self):
        self.db.fail_on.add("admins")
        response = self.get("/leaderboard", headers=ADMIN)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Admin check failed", "code": "internal"})

    def test_feedback_submission_needs_no_token(self):
        response = self.client.post("/feedback", json={"userId": "u1", "message": "hi"})
        self.assertEqual(response.status_code, 201)
        self.assertNotIn("admins", self.db.calls)

    def test_test_firestore_lists_collections(self):
        self.db.seed("progress", "u1", {"level": 1})
        response = self.get("/test-firestore")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(sorted(response.json()["collections"]), ["admins", "progress"])


class UnconfiguredFirebaseTests(unittest.TestCase):
    """Real identity adapter, Firebase impossible to initialize."""

    def setUp(self):
        self.db = FakeFirestore()
        dependencies._identity = None
        app = create_app()
        app.dependency_overrides[get_db] = lambda: self.db
        self.client = TestClient(app)

        patcher = mock.patch(
            "admin_backend.app.services.identity.get_firebase_app",
            side_effect=ValueError("Could not load service account file"),
        )
        self.get_firebase_app = patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(setattr, dependencies, "_identity", None)

    def test_missing_token_is_still_unauthenticated(self):
        response = self.client.get("/leaderboard")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "unauthenticated")
        self.get_firebase_app.assert_not_called()
        self.assertEqual(self.db.calls, [])

    def test_token_that_cannot_be_verified_is_invalid_credential(self):
        response = self.client.get("/leaderboard", headers={"Authorization": "Bearer some-token"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "invalid_credential")
        self.assertEqual(self.db.calls, [])

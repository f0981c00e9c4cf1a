"""API tests for /api/access and the access gate (bearer verification, role and permission checks)."""

from datetime import UTC, datetime, timedelta

import jwt

from app.core.permissions import (
    DELETE_PRODUCTS,
    EDIT_PRODUCTS,
    PERMISSION_CATALOG,
    VIEW_REPORTS,
)
from app.core.security import create_restricted_token, sign_token
from tests.support import ApiTestCase, add_product, add_user, auth_headers, bearer

ACCESS = "/api/access"


class AccessApiTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.ivan = add_user(self.db, "ivan", role="vendedor")

    def _generate(self, permissions: list[str], duration: object = "1h") -> dict:
        response = self.client.post(
            f"{ACCESS}/generate",
            json={"userId": self.ivan.id, "permissions": permissions, "duration": duration},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()


class TestGenerateAndVerify(AccessApiTestCase):
    def test_generate_then_verify(self) -> None:
        issued = self._generate(["edit_products"])
        self.assertEqual(issued["permissions"], ["edit_products"])
        self.assertIn("expiresAt", issued)

        response = self.client.post(f"{ACCESS}/verify", json={"token": issued["token"]})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["message"], "Token valid")
        self.assertEqual(data["permissions"], ["edit_products"])
        self.assertEqual(data["user"]["id"], self.ivan.id)
        self.assertEqual(data["user"]["role"], "vendedor")

    def test_verify_is_public_and_requires_token(self) -> None:
        response = self.client.post(f"{ACCESS}/verify", json={})
        self.assertEqual(response.status_code, 400)

        response = self.client.post(f"{ACCESS}/verify", json={"token": "never-issued"})
        self.assertEqual(response.status_code, 403)

    def test_unknown_permissions_return_valid_subset(self) -> None:
        response = self.client.post(
            f"{ACCESS}/generate",
            json={"userId": self.ivan.id, "permissions": ["view_reports", "fly"]},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 400)
        detail = response.json()["detail"]
        self.assertEqual(detail["validPermissions"], ["view_reports"])
        self.assertEqual(detail["invalidPermissions"], ["fly"])

    def test_missing_fields_and_unknown_user(self) -> None:
        response = self.client.post(
            f"{ACCESS}/generate", json={"permissions": ["view_reports"]}, headers=self.admin_headers
        )
        self.assertEqual(response.status_code, 400)

        response = self.client.post(
            f"{ACCESS}/generate",
            json={"userId": self.ivan.id, "permissions": []},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 400)

        response = self.client.post(
            f"{ACCESS}/generate",
            json={"userId": 9999, "permissions": ["view_reports"]},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 404)

    def test_boolean_duration_is_rejected(self) -> None:
        response = self.client.post(
            f"{ACCESS}/generate",
            json={"userId": self.ivan.id, "permissions": ["view_reports"], "duration": True},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 422)
        self.db.expire_all()
        self.assertIsNone(self.ivan.access_token)

    def test_generate_requires_admin(self) -> None:
        body = {"userId": self.ivan.id, "permissions": ["edit_products"]}
        response = self.client.post(f"{ACCESS}/generate", json=body)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("www-authenticate"), "Bearer")

        response = self.client.post(
            f"{ACCESS}/generate", json=body, headers=auth_headers(self.ivan)
        )
        self.assertEqual(response.status_code, 403)


class TestRevoke(AccessApiTestCase):
    def test_revoke_then_verify_rejects(self) -> None:
        issued = self._generate(["edit_products"])
        for _ in range(2):
            response = self.client.post(
                f"{ACCESS}/revoke", json={"userId": self.ivan.id}, headers=self.admin_headers
            )
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"message": "Access token revoked successfully"})

        response = self.client.post(f"{ACCESS}/verify", json={"token": issued["token"]})
        self.assertEqual(response.status_code, 403)

    def test_revoke_requires_user_id_and_admin(self) -> None:
        response = self.client.post(f"{ACCESS}/revoke", json={}, headers=self.admin_headers)
        self.assertEqual(response.status_code, 400)
        response = self.client.post(
            f"{ACCESS}/revoke", json={"userId": self.ivan.id}, headers=auth_headers(self.ivan)
        )
        self.assertEqual(response.status_code, 403)


class TestPermissionCatalog(AccessApiTestCase):
    def test_admin_lists_catalog(self) -> None:
        response = self.client.get(f"{ACCESS}/permissions", headers=self.admin_headers)
        self.assertEqual(response.status_code, 200)
        names = [p["name"] for p in response.json()]
        self.assertIn("edit_products", names)
        self.assertIn("view_reports", names)

    def test_non_admin_is_forbidden(self) -> None:
        response = self.client.get(f"{ACCESS}/permissions", headers=auth_headers(self.ivan))
        self.assertEqual(response.status_code, 403)

    def test_catalog_matches_enforced_names(self) -> None:
        response = self.client.get(f"{ACCESS}/permissions", headers=self.admin_headers)
        names = {p["name"] for p in response.json()}
        self.assertEqual(names, set(PERMISSION_CATALOG))
        for enforced in (EDIT_PRODUCTS, DELETE_PRODUCTS, VIEW_REPORTS):
            self.assertIn(enforced, names)


class TestAccessGate(AccessApiTestCase):
    """Bearer verification and the two authorization mechanisms."""

    def test_forged_token_is_forbidden(self) -> None:
        now = datetime.now(UTC)
        forged = jwt.encode(
            {"sub": str(self.admin.id), "role": "admin", "iat": now, "exp": now + timedelta(hours=1)},
            "guessed-secret",
            algorithm="HS256",
        )
        response = self.client.get(f"{ACCESS}/permissions", headers=bearer(forged))
        self.assertEqual(response.status_code, 403)

    def test_embedded_expiry_rejected_regardless_of_database(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=3)
        expired = create_restricted_token(self.admin, ["view_reports"], hours=1, now=past)
        # The user row says the token is still good; the gate must not care.
        self.admin.access_token = expired
        self.admin.token_expiration = datetime.now(UTC) + timedelta(hours=8)
        self.db.commit()

        response = self.client.get(f"{ACCESS}/permissions", headers=bearer(expired))
        self.assertEqual(response.status_code, 403)

    def test_malformed_authorization_header(self) -> None:
        response = self.client.get(
            f"{ACCESS}/permissions", headers={"Authorization": "Token abc"}
        )
        self.assertEqual(response.status_code, 401)

    def test_non_numeric_subject_is_forbidden(self) -> None:
        token = sign_token({"sub": "abc", "role": "admin"}, timedelta(hours=1))
        response = self.client.get(f"{ACCESS}/permissions", headers=bearer(token))
        self.assertEqual(response.status_code, 403)

    def test_delegated_claim_opens_reports(self) -> None:
        issued = self._generate(["view_reports"])
        response = self.client.get("/api/reports/top-products", headers=bearer(issued["token"]))
        self.assertEqual(response.status_code, 200)

        response = self.client.get("/api/reports/top-products", headers=auth_headers(self.ivan))
        self.assertEqual(response.status_code, 403)

    def test_product_edit_uses_assignment_table_not_claims(self) -> None:
        product = add_product(self.db)
        issued = self._generate(["edit_products"])
        url = f"/api/products/{product.id}"

        response = self.client.put(url, json={"stock": 1}, headers=bearer(issued["token"]))
        self.assertEqual(response.status_code, 403)

        response = self.client.put(
            f"/api/admin/users/{self.ivan.id}/permissions",
            json={"permissions": ["edit_products"]},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 200)

        response = self.client.put(url, json={"stock": 1}, headers=auth_headers(self.ivan))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["stock"], 1)

    def test_revoked_delegated_token_no_longer_opens_reports(self) -> None:
        issued = self._generate(["view_reports"])
        url = "/api/reports/top-products"
        self.assertEqual(self.client.get(url, headers=bearer(issued["token"])).status_code, 200)

        response = self.client.post(
            f"{ACCESS}/revoke", json={"userId": self.ivan.id}, headers=self.admin_headers
        )
        self.assertEqual(response.status_code, 200)
        response = self.client.get(url, headers=bearer(issued["token"]))
        self.assertEqual(response.status_code, 403)

    def test_reissued_token_supersedes_previous_for_reports(self) -> None:
        first = self._generate(["view_reports"], duration=1)
        second = self._generate(["view_reports"], duration=2)
        url = "/api/reports/top-customers"
        self.assertEqual(self.client.get(url, headers=bearer(first["token"])).status_code, 403)
        self.assertEqual(self.client.get(url, headers=bearer(second["token"])).status_code, 200)

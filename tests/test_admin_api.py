"""API tests for /api/admin: dashboard, users, roles and permission assignments."""

from datetime import UTC, datetime, timedelta

from app.models import Category
from tests.support import ApiTestCase, add_order, add_product, add_user, auth_headers

ADMIN = "/api/admin"


class TestAdminGuard(ApiTestCase):
    def test_every_route_requires_admin(self) -> None:
        vendor = add_user(self.db, "vendedor1", role="vendedor")
        for method, path in [
            ("get", "/dashboard"),
            ("get", "/users"),
            ("put", "/users/role"),
            ("get", f"/users/{vendor.id}/permissions"),
        ]:
            with self.subTest(path=path):
                response = self.client.request(method, f"{ADMIN}{path}", headers=auth_headers(vendor))
                self.assertEqual(response.status_code, 403)
                response = self.client.request(method, f"{ADMIN}{path}")
                self.assertEqual(response.status_code, 401)


class TestDashboard(ApiTestCase):
    def test_counts_and_recent_sales(self) -> None:
        buyer = add_user(self.db, "cliente", role="usuario")
        product = add_product(self.db, precio=10)
        self.db.add(Category(nombre="tuberculos"))
        self.db.commit()
        now = datetime.now(UTC)
        add_order(self.db, buyer, now - timedelta(days=2), [(product, 3)])
        add_order(self.db, buyer, now - timedelta(days=45), [(product, 1)])

        response = self.client.get(f"{ADMIN}/dashboard", headers=self.admin_headers)
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["users"], 2)
        self.assertEqual(data["products"], 1)
        self.assertEqual(data["categories"], 1)
        self.assertEqual(data["orders"], 2)
        self.assertEqual(data["recentSales"], 30.0)
        self.assertIn("serverIp", data)


class TestUsers(ApiTestCase):
    def test_list_hides_secrets(self) -> None:
        add_user(self.db, "ivan", role="vendedor")
        response = self.client.get(f"{ADMIN}/users", headers=self.admin_headers)
        self.assertEqual(response.status_code, 200)
        users = response.json()
        self.assertEqual([u["username"] for u in users], ["admin", "ivan"])
        for user in users:
            self.assertNotIn("password", user)
            self.assertNotIn("passwordHash", user)
            self.assertNotIn("accessToken", user)

    def test_change_role(self) -> None:
        ivan = add_user(self.db, "ivan")
        response = self.client.put(
            f"{ADMIN}/users/role",
            json={"userId": ivan.id, "newRole": "vendedor"},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 200)
        self.db.expire_all()
        self.assertEqual(ivan.role, "vendedor")

    def test_change_role_rejects_unknown_role_and_user(self) -> None:
        ivan = add_user(self.db, "ivan")
        response = self.client.put(
            f"{ADMIN}/users/role",
            json={"userId": ivan.id, "newRole": "superuser"},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 400)
        response = self.client.put(
            f"{ADMIN}/users/role",
            json={"userId": 999, "newRole": "admin"},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 404)


class TestPermissionAssignments(ApiTestCase):
    def test_replace_and_read_assignments(self) -> None:
        ivan = add_user(self.db, "ivan")
        url = f"{ADMIN}/users/{ivan.id}/permissions"
        response = self.client.put(
            url,
            json={"permissions": ["view_reports", "edit_products", "view_reports"]},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(sorted(response.json()["permissions"]), ["edit_products", "view_reports"])

        response = self.client.put(url, json={"permissions": []}, headers=self.admin_headers)
        self.assertEqual(response.json()["permissions"], [])

        response = self.client.get(url, headers=self.admin_headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"userId": ivan.id, "permissions": [], "source": "assignment"})

    def test_unknown_names_leave_assignments_untouched(self) -> None:
        ivan = add_user(self.db, "ivan")
        url = f"{ADMIN}/users/{ivan.id}/permissions"
        self.client.put(url, json={"permissions": ["view_reports"]}, headers=self.admin_headers)
        response = self.client.put(
            url, json={"permissions": ["edit_products", "teleport"]}, headers=self.admin_headers
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"]["invalidPermissions"], ["teleport"])
        self.assertEqual(
            self.client.get(url, headers=self.admin_headers).json()["permissions"],
            ["view_reports"],
        )

    def test_unknown_user(self) -> None:
        response = self.client.get(f"{ADMIN}/users/999/permissions", headers=self.admin_headers)
        self.assertEqual(response.status_code, 404)
        response = self.client.put(
            f"{ADMIN}/users/999/permissions",
            json={"permissions": ["view_reports"]},
            headers=self.admin_headers,
        )
        self.assertEqual(response.status_code, 404)

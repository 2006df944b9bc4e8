import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError

from foodorder.models.order import Order
from foodorder.models.user import User
from foodorder.repositories.stats_repo import StatsRepository
from foodorder.routers import admin as admin_routes
from tests.utils.factories import create_order_factory, create_user_factory
from tests.utils.helpers import (
    assert_error_response,
    assert_user_response_valid,
    auth_headers,
)


class BrokenStatsRepository(StatsRepository):
    def count_by_status(self, session):
        raise OperationalError("SELECT lower(status)", {}, Exception("server closed the connection"))


class TestAdminAccess:
    def test_should_return_401_when_not_authenticated(self, test_client):
        response = test_client.get("/api/v1/admin/stats")

        assert_error_response(response, 401, "Unauthorized access")

    def test_should_return_401_when_token_invalid(self, test_client):
        response = test_client.get("/api/v1/admin/stats", headers=auth_headers("not-a-jwt"))

        assert_error_response(response, 401, "Token expired")

    def test_should_return_403_when_not_admin(self, test_client, test_user_token):
        response = test_client.get("/api/v1/admin/users", headers=auth_headers(test_user_token))

        assert_error_response(response, 403, "Admin access required")

    def test_should_return_401_when_user_was_deleted(self, test_client, db_session, test_admin_token, test_admin):
        db_session.delete(test_admin)
        db_session.commit()

        response = test_client.get("/api/v1/admin/users", headers=auth_headers(test_admin_token))

        assert_error_response(response, 401)


class TestStatsEndpoint:
    def test_should_return_stats_envelope(self, test_client, db_session, test_admin_token):
        now = datetime.now(timezone.utc)
        create_order_factory(db_session, status="completed", total_amount=100, created_at=now)
        create_order_factory(db_session, status="completed", total_amount=250, created_at=now)
        create_order_factory(db_session, status="pending", total_amount=40, created_at=now)
        create_order_factory(db_session, status="refunded", total_amount=10, created_at=now)

        response = test_client.get("/api/v1/admin/stats", headers=auth_headers(test_admin_token))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        stats = data["stats"]
        assert stats["orders"] == {"total": 3, "completed": 2, "pending": 1, "cancelled": 0}
        assert stats["totalRevenue"] == 350
        assert len(stats["dailyRevenue"]) == 7
        assert len(stats["dailyOrders"]) == 7
        assert stats["dailyRevenue"][6] == 350
        assert stats["dailyOrders"][6] == 2

    def test_should_return_zeros_on_empty_store(self, test_client, test_admin_token):
        response = test_client.get("/api/v1/admin/stats", headers=auth_headers(test_admin_token))

        stats = response.json()["stats"]
        assert stats["orders"]["total"] == 0
        assert stats["totalRevenue"] == 0
        assert stats["dailyRevenue"] == [0] * 7
        assert stats["dailyOrders"] == [0] * 7

    def test_should_return_500_without_internal_detail_when_store_fails(
        self, test_client, test_admin_token, monkeypatch
    ):
        monkeypatch.setattr(admin_routes.stats_service, "repo", BrokenStatsRepository())

        response = test_client.get("/api/v1/admin/stats", headers=auth_headers(test_admin_token))

        assert_error_response(response, 500, "Failed to fetch stats")
        assert "server closed" not in response.text
        assert "error" not in response.json()


class TestUserAdministration:
    def test_should_list_users_without_passwords(self, test_client, test_admin_token, test_user):
        response = test_client.get("/api/v1/admin/users", headers=auth_headers(test_admin_token))

        assert response.status_code == 200
        users = response.json()["users"]
        assert len(users) == 2
        for user in users:
            assert_user_response_valid(user)
            assert set(user) == {"id", "name", "email", "role"}

    def test_should_list_staff_sorted_by_name(self, test_client, db_session, test_admin_token, test_user):
        create_user_factory(db_session, name="Zara", role="staff", phone="555-0101")
        create_user_factory(db_session, name="Amit", role="staff", phone="555-0102")

        response = test_client.get("/api/v1/admin/staff", headers=auth_headers(test_admin_token))

        assert response.status_code == 200
        staff = response.json()["staff"]
        assert [s["name"] for s in staff] == ["Amit", "Zara"]
        assert staff[0]["phone"] == "555-0102"
        assert "role" not in staff[0]
        assert "password" not in staff[0]

    def test_should_delete_user(self, test_client, db_session, test_admin_token, test_user):
        user_id = test_user.id

        response = test_client.delete(
            f"/api/v1/admin/users/{user_id}", headers=auth_headers(test_admin_token)
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "User deleted successfully"}
        db_session.expire_all()
        assert db_session.get(User, user_id) is None

    def test_should_return_404_when_deleting_unknown_user(self, test_client, test_admin_token):
        response = test_client.delete(
            f"/api/v1/admin/users/{uuid.uuid4()}", headers=auth_headers(test_admin_token)
        )

        assert_error_response(response, 404, "User not found")


class TestUpdateUserRole:
    def test_should_update_role(self, test_client, db_session, test_admin_token, test_user):
        response = test_client.patch(
            f"/api/v1/admin/users/{test_user.id}/role",
            json={"role": "staff"},
            headers=auth_headers(test_admin_token),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "User role updated successfully"
        assert_user_response_valid(data["user"])
        assert data["user"]["role"] == "staff"
        assert "createdAt" in data["user"]
        db_session.refresh(test_user)
        assert test_user.role == "staff"

    def test_should_forbid_changing_own_role(self, test_client, test_admin_token, test_admin):
        response = test_client.patch(
            f"/api/v1/admin/users/{test_admin.id}/role",
            json={"role": "user"},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 403, "Cannot modify your own role")

    def test_should_forbid_own_role_change_even_with_invalid_role(
        self, test_client, test_admin_token, test_admin
    ):
        response = test_client.patch(
            f"/api/v1/admin/users/{test_admin.id}/role",
            json={"role": "superuser"},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 403, "Cannot modify your own role")

    def test_should_reject_invalid_role_without_writing(
        self, test_client, db_session, test_admin_token, test_user
    ):
        response = test_client.patch(
            f"/api/v1/admin/users/{test_user.id}/role",
            json={"role": "owner"},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 400, "Invalid role specified")
        db_session.refresh(test_user)
        assert test_user.role == "user"

    def test_should_reject_missing_role(self, test_client, test_admin_token, test_user):
        response = test_client.patch(
            f"/api/v1/admin/users/{test_user.id}/role",
            json={},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 400, "Invalid role specified")

    def test_should_return_404_for_unknown_user(self, test_client, test_admin_token):
        response = test_client.patch(
            f"/api/v1/admin/users/{uuid.uuid4()}/role",
            json={"role": "admin"},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 404, "User not found")


class TestOrderAdministration:
    def test_should_list_orders_newest_first(self, test_client, db_session, test_admin_token):
        now = datetime.now(timezone.utc)
        old = create_order_factory(db_session, created_at=now - timedelta(days=3))
        new = create_order_factory(db_session, created_at=now)
        mid = create_order_factory(db_session, created_at=now - timedelta(days=1))

        response = test_client.get("/api/v1/admin/orders", headers=auth_headers(test_admin_token))

        assert response.status_code == 200
        orders = response.json()["orders"]
        assert [o["id"] for o in orders] == [str(new.id), str(mid.id), str(old.id)]
        assert "totalAmount" in orders[0]
        assert "createdAt" in orders[0]

    def test_should_update_order_status(self, test_client, db_session, test_admin_token):
        order = create_order_factory(db_session, status="pending")

        response = test_client.patch(
            f"/api/v1/admin/orders/{order.id}/status",
            json={"status": "completed"},
            headers=auth_headers(test_admin_token),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Order status updated successfully"
        assert data["order"]["id"] == str(order.id)
        assert data["order"]["status"] == "completed"
        assert "updatedAt" in data["order"]

    def test_should_store_status_lower_cased(self, test_client, db_session, test_admin_token):
        order = create_order_factory(db_session, status="pending")

        response = test_client.patch(
            f"/api/v1/admin/orders/{order.id}/status",
            json={"status": "Cancelled"},
            headers=auth_headers(test_admin_token),
        )

        assert response.status_code == 200
        db_session.refresh(order)
        assert order.status == "cancelled"

    def test_should_reject_invalid_status_listing_valid_set(
        self, test_client, db_session, test_admin_token
    ):
        order = create_order_factory(db_session, status="pending")

        response = test_client.patch(
            f"/api/v1/admin/orders/{order.id}/status",
            json={"status": "shipped"},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(
            response, 400, "Invalid status. Must be one of: pending, completed, cancelled"
        )
        db_session.refresh(order)
        assert order.status == "pending"

    def test_should_require_status(self, test_client, db_session, test_admin_token):
        order = create_order_factory(db_session, status="pending")

        response = test_client.patch(
            f"/api/v1/admin/orders/{order.id}/status",
            json={},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 400, "Status is required")

    def test_should_return_404_for_unknown_order(self, test_client, test_admin_token):
        response = test_client.patch(
            f"/api/v1/admin/orders/{uuid.uuid4()}/status",
            json={"status": "completed"},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 404, "Order not found")

    def test_should_return_400_for_malformed_order_id(self, test_client, test_admin_token):
        response = test_client.patch(
            "/api/v1/admin/orders/not-a-uuid/status",
            json={"status": "completed"},
            headers=auth_headers(test_admin_token),
        )

        assert_error_response(response, 400)

    def test_should_delete_order(self, test_client, db_session, test_admin_token):
        order = create_order_factory(db_session)
        order_id = order.id

        response = test_client.delete(
            f"/api/v1/admin/orders/{order_id}", headers=auth_headers(test_admin_token)
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Order deleted successfully"}
        db_session.expire_all()
        assert db_session.get(Order, order_id) is None

    def test_should_return_404_when_deleting_unknown_order(self, test_client, test_admin_token):
        response = test_client.delete(
            f"/api/v1/admin/orders/{uuid.uuid4()}", headers=auth_headers(test_admin_token)
        )

        assert_error_response(response, 404, "Order not found")

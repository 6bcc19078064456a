import pytest

from navandex.services.auth_service import AuthService
from navandex.services.order_service import OrderService
from navandex.services.user_service import UserService
from navandex.enums import UserRole, OrderStatus
from navandex.exceptions import NotFoundError, PermissionDeniedError, ServiceError
from conftest import make_order


class TestAuthService:
    """Test authentication service"""

    def test_register_user_success(self, app):
        user = AuthService.register_user(
            name="Service Test", phone_number="9647501231234", password="password123"
        )

        assert user.role == UserRole.CUSTOMER
        assert user.check_password("password123")

    def test_register_duplicate_phone(self, app, customer_user):
        with pytest.raises(ValueError, match="Phone number already registered"):
            AuthService.register_user(
                name="Dup", phone_number=customer_user.phone_number, password="password123"
            )

    def test_login_success(self, app, customer_user):
        result = AuthService.login_user(customer_user.phone_number, "password123")

        assert "access_token" in result
        assert "refresh_token" in result
        assert result["user"]["id"] == customer_user.id

    def test_login_invalid_credentials(self, app):
        with pytest.raises(ValueError, match="Invalid phone number or password"):
            AuthService.login_user("nobody", "password")

    def test_get_user_by_bad_id(self, app):
        with pytest.raises(NotFoundError):
            AuthService.get_user_by_id("abc")


class TestOrderService:
    """Test order service directly"""

    def test_get_order_hides_other_customers_orders(self, app, order, other_customer):
        with pytest.raises(NotFoundError):
            OrderService.get_order(order.id, other_customer)

    def test_customer_listing_is_scoped(self, app, orders, other_customer):
        pagination = OrderService.get_orders(other_customer)
        assert [o.title for o in pagination.items] == ["Phone Case"]

    def test_update_records_actor(self, app, order, worker_user):
        OrderService.update_order(order.id, worker_user, {"status": "CONFIRMED"})

        entry = order.status_history.first()
        assert entry.user_id == worker_user.id
        assert entry.status == OrderStatus.CONFIRMED

    def test_customer_staff_only_status(self, app, order, customer_user):
        with pytest.raises(PermissionDeniedError):
            OrderService.update_order(order.id, customer_user, {"status": "PURCHASED",
                                                                "order_number": "1"})

    def test_bulk_update_needs_change(self, app, order, admin_user):
        with pytest.raises(ServiceError):
            OrderService.bulk_update(admin_user, [order.id])

    def test_bulk_update_duplicate_ids(self, app, order, admin_user):
        updated = OrderService.bulk_update(admin_user, [order.id, order.id], status="SHIPPED")

        assert len(updated) == 1
        assert order.status_history.count() == 1

    def test_status_counts_zero_filled(self, app, customer_user):
        make_order(customer_user, status=OrderStatus.RECEIVED_IN_TURKEY)
        make_order(customer_user, status=OrderStatus.RECEIVED_IN_TURKEY)

        counts = OrderService.get_status_counts(customer_user.id)
        assert counts == {"RECEIVED_IN_TURKEY": 2, "PURCHASED": 0, "DELIVERED_TO_WAREHOUSE": 0}


class TestUserService:
    def test_list_users_by_role(self, app, admin_user, worker_user, customer_user):
        pagination = UserService.list_users(role="worker")
        assert [u.id for u in pagination.items] == [worker_user.id]

    def test_check_access(self, app, customer_user, other_customer, worker_user):
        UserService.check_access(worker_user, customer_user.id)
        UserService.check_access(customer_user, customer_user.id)

        with pytest.raises(PermissionDeniedError):
            UserService.check_access(customer_user, other_customer.id)

    def test_get_missing_user(self, app):
        with pytest.raises(NotFoundError, match="User not found"):
            UserService.get_user(404)

import re
from datetime import datetime

import pytest

from navandex.enums import OrderStatus
from navandex.exceptions import InvalidTransitionError, ServiceError
from navandex.utils.order_status import (
    ACTIVE_ORDER_STATUSES,
    PASSIVE_ORDER_STATUSES,
    statuses_for_filter,
    matches_status_filter,
    can_transition,
    check_transition,
    is_staff_only,
    parse_status,
    build_history_note,
)
from navandex.utils.helpers import (
    generate_invoice_number,
    format_order_code,
    slugify,
    storage_key,
    allowed_file,
)


class TestStatusFilters:
    """Test status groups and filters"""

    def test_warehouse_status_in_both_groups(self):
        assert OrderStatus.DELIVERED_TO_WAREHOUSE in ACTIVE_ORDER_STATUSES
        assert OrderStatus.DELIVERED_TO_WAREHOUSE in PASSIVE_ORDER_STATUSES

    def test_all_means_no_filter(self):
        assert statuses_for_filter("ALL") is None
        assert statuses_for_filter(None) is None
        assert statuses_for_filter("") is None

    def test_single_status(self):
        assert statuses_for_filter("shipped") == (OrderStatus.SHIPPED,)

    def test_invalid_filter(self):
        with pytest.raises(ServiceError, match="Invalid order status"):
            statuses_for_filter("LOST")

    @pytest.mark.parametrize(
        "status, status_filter, expected",
        [
            ("PURCHASED", "ACTIVE", True),
            ("PENDING", "ACTIVE", False),
            ("RETURNED", "PASSIVE", True),
            ("CONFIRMED", "PASSIVE", False),
            ("PREPAID", "ALL", True),
            ("SHIPPED", "SHIPPED", True),
        ],
    )
    def test_matches(self, status, status_filter, expected):
        assert matches_status_filter(status, status_filter) is expected


class TestTransitions:
    """Test the status transition guard"""

    def test_pipeline_moves_freely(self):
        assert can_transition(OrderStatus.PENDING, OrderStatus.PURCHASED)
        assert can_transition(OrderStatus.DELIVERED_TO_WAREHOUSE, OrderStatus.PENDING)

    def test_terminal_states(self):
        for terminal in (OrderStatus.CANCELLED, OrderStatus.RETURNED):
            for status in OrderStatus:
                assert can_transition(terminal, status) is (status == terminal)

    def test_delivered(self):
        assert can_transition("DELIVERED", "RETURNED")
        assert can_transition("DELIVERED", "COMPLETED")
        assert not can_transition("DELIVERED", "PENDING")
        assert not can_transition("COMPLETED", "DELIVERED")

    def test_check_transition_message(self):
        with pytest.raises(InvalidTransitionError) as exc:
            check_transition(OrderStatus.RETURNED, OrderStatus.SHIPPED)

        assert exc.value.message == "Cannot transition from RETURNED to SHIPPED"
        assert exc.value.status_code == 400

    def test_staff_only(self):
        assert is_staff_only("PURCHASED")
        assert is_staff_only(OrderStatus.RECEIVED_IN_TURKEY)
        assert not is_staff_only("CANCELLED")

    def test_parse_status_trims_and_uppercases(self):
        assert parse_status(" delivered ") is OrderStatus.DELIVERED


class TestHistoryNotes:
    @pytest.mark.parametrize(
        "kwargs, note",
        [
            ({}, "Order updated"),
            ({"status": "SHIPPED"}, "Order status updated to SHIPPED"),
            ({"order_number": "X1"}, "Order updated with order number X1"),
            ({"prepaid": False}, "Order updated and marked as not prepaid"),
            (
                {"status": "PURCHASED", "order_number": "X1", "prepaid": True},
                "Order status updated to PURCHASED with order number X1 and marked as prepaid",
            ),
        ],
    )
    def test_notes(self, kwargs, note):
        assert build_history_note(**kwargs) == note


class TestHelpers:
    """Test helper functions"""

    def test_invoice_number(self):
        now = datetime(2024, 2, 29, 12, 0, 0)
        number = generate_invoice_number(now)

        assert number.startswith("INV-20240229-")
        assert number[-6:] == str(int(now.timestamp() * 1000))[-6:]

    def test_invoice_number_format(self):
        assert re.fullmatch(r"INV-\d{8}-\d{6}", generate_invoice_number())

    def test_order_code(self):
        assert format_order_code(42) == "TR00042"
        assert format_order_code(123456) == "TR123456"

    def test_slugify(self):
        assert slugify("Hello World!") == "hello-world"

    def test_storage_key(self):
        key = storage_key("Summer Dress.JPG")
        assert re.fullmatch(r"\d{13}-[a-z0-9]{6}-summer-dress\.jpg", key)

    def test_storage_key_without_extension(self):
        assert re.fullmatch(r"\d{13}-[a-z0-9]{6}-readme", storage_key("README"))

    def test_allowed_file(self):
        assert allowed_file("a.PNG", {"png"})
        assert not allowed_file("a", {"png"})
        assert not allowed_file("a.exe", {"png"})


class TestValidators:
    def test_pagination_defaults_and_bounds(self, app):
        from navandex.utils.validators import validate_pagination

        with app.test_request_context("/?page=0&per_page=1000"):
            assert validate_pagination() == (1, 20)

        with app.test_request_context("/?page=3&per_page=5"):
            assert validate_pagination() == (3, 5)

    def test_parse_bool_arg(self, app):
        from navandex.utils.validators import parse_bool_arg

        with app.test_request_context("/?flag=TRUE&off=0"):
            assert parse_bool_arg("flag") is True
            assert parse_bool_arg("off") is False
            assert parse_bool_arg("missing", default=True) is True

from datetime import datetime
from decimal import Decimal
from unittest.mock import patch, MagicMock

import pytest
import requests

from navandex.services.notification_service import NotificationService
from navandex.enums import OrderStatus
from conftest import make_order


@pytest.fixture
def whatsapp_enabled(app):
    app.config.update(
        WHATSAPP_ENABLED=True,
        WHATSAPP_TOKEN="token",
        WHATSAPP_PHONE_NUMBER_ID="12345",
    )
    return app


def body_texts(payload):
    return [p["text"] for p in payload["template"]["components"][0]["parameters"]]


class TestPayloads:
    """Test WhatsApp template payloads"""

    def test_processing(self, app, customer_user):
        order = make_order(customer_user, status=OrderStatus.PROCESSING, price=Decimal("12.5"))

        payload = NotificationService.build_payload(order, now=datetime(2024, 3, 5, 14, 30))

        assert payload["to"] == "9647500000003"
        assert payload["template"]["name"] == "order_processing"
        assert body_texts(payload) == [
            "Test Customer",
            f"TR{order.id:05d}",
            "Sneakers",
            "$12.50",
            "March 5, 2024",
        ]

    def test_cancellation_includes_time(self, app, customer_user):
        order = make_order(customer_user, status=OrderStatus.CANCELLED)

        payload = NotificationService.build_payload(order, now=datetime(2024, 3, 5, 14, 30))

        assert payload["template"]["name"] == "order_cancellation_notice"
        assert body_texts(payload)[-1] == "March 5, 2024, 02:30 PM"

    def test_warehouse_delivery(self, app, customer_user):
        order = make_order(customer_user, status=OrderStatus.DELIVERED_TO_WAREHOUSE)

        payload = NotificationService.build_payload(order, now=datetime(2024, 3, 5))

        assert payload["template"]["name"] == "warehouse_delivery_confirmation"
        assert body_texts(payload)[-1] == "Erbil"

    def test_no_template_for_other_statuses(self, app, customer_user):
        order = make_order(customer_user, status=OrderStatus.SHIPPED)
        assert NotificationService.build_payload(order) is None


class TestSending:
    def test_disabled_by_default(self, app, customer_user):
        order = make_order(customer_user, status=OrderStatus.PROCESSING)

        with patch("navandex.services.notification_service.requests.post") as post:
            assert NotificationService.notify_status_change(order) is False

        post.assert_not_called()

    def test_sends_to_graph_api(self, whatsapp_enabled, customer_user):
        order = make_order(customer_user, status=OrderStatus.PROCESSING)

        with patch("navandex.services.notification_service.requests.post") as post:
            assert NotificationService.notify_status_change(order) is True

        url = post.call_args.args[0]
        assert url == "https://graph.facebook.com/v21.0/12345/messages"
        assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer token"

    def test_retries_then_gives_up(self, whatsapp_enabled, customer_user):
        order = make_order(customer_user, status=OrderStatus.CANCELLED)

        with patch(
            "navandex.services.notification_service.requests.post",
            side_effect=requests.exceptions.ConnectionError("offline"),
        ) as post:
            assert NotificationService.notify_status_change(order) is False

        assert post.call_count == 3

    def test_recovers_on_retry(self, whatsapp_enabled, customer_user):
        order = make_order(customer_user, status=OrderStatus.CANCELLED)
        ok = MagicMock()

        with patch(
            "navandex.services.notification_service.requests.post",
            side_effect=[requests.exceptions.Timeout("slow"), ok],
        ) as post:
            assert NotificationService.notify_status_change(order) is True

        assert post.call_count == 2

    def test_failed_notice_does_not_fail_update(
        self, whatsapp_enabled, client, admin_headers, customer_user
    ):
        order = make_order(customer_user)

        with patch(
            "navandex.services.notification_service.requests.post",
            side_effect=requests.exceptions.ConnectionError("offline"),
        ):
            response = client.put(
                f"/api/orders/{order.id}", headers=admin_headers, json={"status": "CANCELLED"}
            )

        assert response.status_code == 200
        assert response.json["order"]["status"] == "CANCELLED"

"""
WhatsApp Cloud API notifications for order status changes.

Only a few statuses have an approved template. Sending is best effort: a
failed notification is logged and never breaks the order update that
triggered it.
"""
import logging
from datetime import datetime

import requests
from flask import current_app

from navandex.enums import OrderStatus
from navandex.utils.helpers import format_order_code

logger = logging.getLogger(__name__)

WAREHOUSE_CITY = "Erbil"


def _long_date(now, with_time=False):
    text = f"{now.strftime('%B')} {now.day}, {now.year}"
    if with_time:
        text += f", {now.strftime('%I:%M %p')}"
    return text


def _processing_params(order, now):
    return [
        order.user.name,
        format_order_code(order.id),
        order.title or "your order",
        f"${float(order.price or 0):.2f}",
        _long_date(now),
    ]


def _cancellation_params(order, now):
    return [
        order.user.name,
        format_order_code(order.id),
        order.title or "your order",
        _long_date(now, with_time=True),
    ]


def _warehouse_params(order, now):
    return [
        order.user.name,
        format_order_code(order.id),
        order.title or "your order",
        _long_date(now),
        WAREHOUSE_CITY,
    ]


MESSAGE_TEMPLATES = {
    OrderStatus.PROCESSING: ("order_processing", _processing_params),
    OrderStatus.CANCELLED: ("order_cancellation_notice", _cancellation_params),
    OrderStatus.DELIVERED_TO_WAREHOUSE: ("warehouse_delivery_confirmation", _warehouse_params),
}


class NotificationService:
    @staticmethod
    def build_payload(order, now: datetime = None):
        """Template message for the order's current status, or None"""
        template = MESSAGE_TEMPLATES.get(order.status)
        if template is None or order.user is None:
            return None

        name, build_params = template
        now = now or datetime.now()
        return {
            "messaging_product": "whatsapp",
            "to": "".join(ch for ch in order.user.phone_number if ch.isdigit()),
            "type": "template",
            "template": {
                "name": name,
                "language": {"code": "en"},
                "components": [
                    {
                        "type": "body",
                        "parameters": [
                            {"type": "text", "text": str(value)}
                            for value in build_params(order, now)
                        ],
                    }
                ],
            },
        }

    @staticmethod
    def send(payload: dict):
        config = current_app.config
        url = (
            f"https://graph.facebook.com/{config['WHATSAPP_API_VERSION']}/"
            f"{config['WHATSAPP_PHONE_NUMBER_ID']}/messages"
        )
        headers = {
            "Authorization": f"Bearer {config['WHATSAPP_TOKEN']}",
            "Content-Type": "application/json",
        }
        response = requests.post(url, json=payload, headers=headers, timeout=20)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def notify_status_change(order) -> bool:
        """Send the status template for ``order``; True when delivered"""
        if not current_app.config.get("WHATSAPP_ENABLED"):
            logger.debug(f"WhatsApp disabled, skipping order {order.id}")
            return False

        payload = NotificationService.build_payload(order)
        if payload is None:
            return False

        max_retries = current_app.config.get("WHATSAPP_MAX_RETRIES", 3)
        for attempt in range(1, max_retries + 1):
            try:
                NotificationService.send(payload)
                logger.info(f"WhatsApp {order.status.value} notice sent for order {order.id}")
                return True
            except requests.exceptions.RequestException as e:
                logger.warning(
                    f"WhatsApp send failed for order {order.id} "
                    f"(attempt {attempt}/{max_retries}): {e}"
                )

        logger.error(f"Giving up WhatsApp notice for order {order.id} after {max_retries} attempts")
        return False

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func

from navandex.models.order import Order
from navandex.models.base import utcnow, ensure_utc
from navandex.extensions import db
from navandex.enums import OrderStatus
from navandex.exceptions import ServiceError
from navandex.utils.order_status import (
    parse_status,
    COMPLETED_STATUSES,
    IN_PROGRESS_STATUSES,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_date(value, default):
    if not value:
        return default
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ServiceError(f"Invalid date: {value}")
    return ensure_utc(parsed).astimezone(timezone.utc)


def _as_float(value) -> float:
    return float(value or Decimal("0"))


class ReportService:
    @staticmethod
    def build_report(start_date=None, end_date=None, status=None) -> dict:
        start = parse_date(start_date, EPOCH)
        end = parse_date(end_date, utcnow())
        order_status = parse_status(status) if status else None

        # Stored datetimes are naive UTC
        filters = [
            Order.created_at >= start.replace(tzinfo=None),
            Order.created_at <= end.replace(tzinfo=None),
        ]
        if order_status is not None:
            filters.append(Order.status == order_status)

        total_orders = Order.query.filter(*filters).count()

        sums = db.session.query(
            func.sum(Order.price),
            func.sum(Order.shipping_price),
            func.sum(Order.local_shipping_price),
        ).filter(*filters).one()

        grouped = (
            db.session.query(Order.status, func.count(Order.id))
            .filter(*filters)
            .group_by(Order.status)
            .all()
        )
        by_status = {parse_status(s).value: count for s, count in grouped}
        if order_status is not None:
            by_status = {order_status.value: by_status.get(order_status.value, 0)}

        return {
            "orders": {
                "total_orders": total_orders,
                "by_status": by_status,
                "trends": ReportService.monthly_trends(filters),
            },
            "financial": {
                "total_revenue": _as_float(sums[0]),
                "shipping_costs": {
                    "shipping_price": _as_float(sums[1]),
                    "local_shipping_price": _as_float(sums[2]),
                },
            },
        }

    @staticmethod
    def monthly_trends(filters) -> list:
        rows = (
            db.session.query(Order.created_at, Order.status)
            .filter(*filters)
            .order_by(Order.created_at.asc())
            .all()
        )

        months = {}
        for created_at, status in rows:
            key = (created_at.year, created_at.month)
            bucket = months.setdefault(
                key,
                {
                    "month": created_at.strftime("%b"),
                    "total": 0,
                    "cancelled": 0,
                    "completed": 0,
                    "processing": 0,
                },
            )
            status = parse_status(status)
            if status == OrderStatus.CANCELLED:
                bucket["cancelled"] += 1
            elif status in COMPLETED_STATUSES:
                bucket["completed"] += 1
            elif status in IN_PROGRESS_STATUSES:
                bucket["processing"] += 1
            bucket["total"] += 1

        return [months[key] for key in sorted(months)]

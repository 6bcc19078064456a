import logging
from decimal import Decimal

from sqlalchemy import or_, func

from navandex.models.order import Order, OrderStatusHistory
from navandex.models.user import User
from navandex.extensions import db
from navandex.enums import OrderStatus, UserRole
from navandex.exceptions import NotFoundError, PermissionDeniedError, ServiceError
from navandex.services.scraper_service import ScraperService
from navandex.services.pricing_service import PricingService
from navandex.services.notification_service import NotificationService
from navandex.utils.order_status import (
    NOTIFICATION_STATUSES,
    DEFAULT_TRACKED_STATUSES,
    statuses_for_filter,
    parse_status,
    check_transition,
    is_staff_only,
    build_history_note,
)

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_URL = "/logo.png"

# Fields a PUT may change besides status / order_number / prepaid
EDITABLE_FIELDS = (
    "price",
    "shipping_price",
    "local_shipping_price",
    "iqd_price",
    "iqd_shipping_price",
    "quantity",
    "title",
    "size",
    "color",
    "notes",
    "product_link",
    "image_url",
    "country",
)


def _record_history(order: Order, actor: User, notes: str):
    db.session.add(
        OrderStatusHistory(
            order_id=order.id,
            user_id=actor.id,
            status=order.status,
            notes=notes,
        )
    )


def notify_status_changes(orders):
    """WhatsApp the customer for every order now in a notification status"""
    for order in orders:
        if order.status in NOTIFICATION_STATUSES:
            NotificationService.notify_status_change(order)


class OrderService:
    @staticmethod
    def get_order(order_id: int, actor: User = None) -> Order:
        order = Order.query.get(order_id)
        if not order:
            raise NotFoundError("Order not found")

        # Customers only ever see their own orders
        if actor is not None and not actor.is_staff and order.user_id != actor.id:
            raise NotFoundError("Order not found")

        return order

    @staticmethod
    def get_orders(actor: User, status: str = None, country: str = None, search: str = None,
                   user_id: int = None, page: int = 1, per_page: int = 20):
        query = Order.query.join(User, Order.user_id == User.id)

        if not actor.is_staff:
            query = query.filter(Order.user_id == actor.id)
        elif user_id:
            query = query.filter(Order.user_id == user_id)

        statuses = statuses_for_filter(status)
        if statuses is not None:
            query = query.filter(Order.status.in_(statuses))

        if country and country.upper() != "ALL":
            query = query.filter(func.upper(Order.country) == country.upper())

        if search:
            query = query.filter(OrderService._search_clause(search.strip()))

        return query.order_by(Order.created_at.desc(), Order.id.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )

    @staticmethod
    def _search_clause(term: str):
        """Case-insensitive match over the columns shown in the order table"""
        pattern = f"%{term}%"
        clauses = [
            Order.title.ilike(pattern),
            User.name.ilike(pattern),
            User.phone_number.ilike(pattern),
            Order.order_number.ilike(pattern),
        ]

        matching_statuses = [s for s in OrderStatus if term.lower() in s.value.lower()]
        if matching_statuses:
            clauses.append(Order.status.in_(matching_statuses))

        if term.isdigit():
            clauses.append(Order.id == int(term))

        return or_(*clauses)

    @staticmethod
    def create_order(actor: User, data: dict) -> Order:
        # Staff can place orders on behalf of a customer
        if actor.is_staff and data.get("user_id"):
            owner = User.query.get(data["user_id"])
            if not owner:
                raise NotFoundError("User not found")
        else:
            owner = actor

        scraped = {"title": "", "images": []}
        if data.get("product_link"):
            scraped = ScraperService.try_scrape(data["product_link"])

        title = data.get("title") or scraped["title"]
        if not title:
            title = f"Order-{Order.query.count() + 1}"
        image_url = data.get("image_url") or (scraped["images"][0] if scraped["images"] else DEFAULT_IMAGE_URL)

        try:
            order = Order(
                user_id=owner.id,
                title=title,
                size=data.get("size") or "N/A",
                color=data.get("color") or "N/A",
                quantity=data.get("quantity") or 1,
                price=Decimal("0"),
                shipping_price=data.get("shipping_price") or Decimal("0"),
                local_shipping_price=data.get("local_shipping_price") or Decimal("0"),
                status=OrderStatus.PENDING,
                product_link=data.get("product_link") or "",
                image_url=image_url,
                notes=data.get("notes") or "",
                country=data.get("country") or owner.country or None,
            )
            db.session.add(order)
            db.session.flush()

            _record_history(order, actor, "Order created")
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Order {order.id} created for user {owner.id} by {actor.id}")
        return order

    @staticmethod
    def _apply_update(order: Order, actor: User, data: dict):
        """Validate and apply one order's changes; caller commits"""
        new_status = parse_status(data["status"]) if data.get("status") else None
        order_number = data.get("order_number")

        if not actor.is_staff:
            if order.user_id != actor.id:
                raise PermissionDeniedError("You can only update your own orders")
            if new_status is not None and is_staff_only(new_status):
                raise PermissionDeniedError(
                    "Only administrators and workers can perform this action"
                )

        if new_status == OrderStatus.PURCHASED and not order_number:
            raise ServiceError("Order number is required when marking as purchased")

        if new_status is not None:
            check_transition(order.status, new_status)
            order.status = new_status

        if order_number:
            order.order_number = order_number
        if data.get("prepaid") is not None:
            order.prepaid = data["prepaid"]

        for field in EDITABLE_FIELDS:
            if field in data:
                setattr(order, field, data[field])

        _record_history(
            order,
            actor,
            build_history_note(new_status, order_number, data.get("prepaid")),
        )

    @staticmethod
    def update_order(order_id: int, actor: User, data: dict) -> Order:
        order = Order.query.get(order_id)
        if not order:
            raise NotFoundError("Order not found")

        try:
            OrderService._apply_update(order, actor, data)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        if data.get("status"):
            notify_status_changes([order])
        return order

    @staticmethod
    def set_price(order_id: int, actor: User, price_try, local_shipping_price_try=0,
                  shipping_price=0) -> Order:
        """Convert lira prices with the newest rate and move the order to PROCESSING"""
        rate = PricingService.get_latest_rate()
        data = {
            "price": PricingService.convert_try_to_usd(price_try, rate),
            "local_shipping_price": PricingService.convert_try_to_usd(local_shipping_price_try, rate),
            "shipping_price": Decimal(shipping_price),
            "status": OrderStatus.PROCESSING.value,
        }
        return OrderService.update_order(order_id, actor, data)

    @staticmethod
    def bulk_update(actor: User, order_ids, status: str = None, order_number: str = None):
        """Apply the same change to many orders in a single transaction"""
        if not status and not order_number:
            raise ServiceError("Please provide either order number or status to update")

        unique_ids = list(dict.fromkeys(order_ids))
        orders = Order.query.filter(Order.id.in_(unique_ids)).all()
        found = {o.id for o in orders}
        missing = [i for i in unique_ids if i not in found]
        if missing:
            raise NotFoundError(f"Orders not found: {', '.join(str(i) for i in missing)}")

        data = {}
        if status:
            data["status"] = status
        if order_number:
            data["order_number"] = order_number

        try:
            for order in orders:
                OrderService._apply_update(order, actor, data)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Bulk updated {len(orders)} orders by {actor.id}: {data}")
        if status:
            notify_status_changes(orders)
        return orders

    @staticmethod
    def mark_arrived_by_tracking(tracking_number: str, actor: User) -> Order:
        """A parcel reached the warehouse; find it by its supplier tracking number"""
        order = Order.query.filter_by(order_number=tracking_number).first()
        if not order:
            raise NotFoundError("Order not found with this tracking number")

        try:
            check_transition(order.status, OrderStatus.DELIVERED_TO_WAREHOUSE)
            order.status = OrderStatus.DELIVERED_TO_WAREHOUSE
            _record_history(
                order,
                actor,
                f"Order delivered to warehouse with tracking number {tracking_number}",
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        notify_status_changes([order])
        return order

    @staticmethod
    def get_status_counts(user_id: int, status: str = None) -> dict:
        """Per-status order counts for one customer, zero-filled"""
        tracked = (parse_status(status),) if status else DEFAULT_TRACKED_STATUSES

        rows = (
            db.session.query(Order.status, func.count(Order.id))
            .filter(Order.user_id == user_id, Order.status.in_(tracked))
            .group_by(Order.status)
            .all()
        )

        counts = {s.value: 0 for s in tracked}
        for row_status, count in rows:
            counts[parse_status(row_status).value] = count
        return counts

    @staticmethod
    def get_customer(user_id: int) -> User:
        user = User.query.get(user_id)
        if not user or user.role != UserRole.CUSTOMER:
            raise NotFoundError("Customer not found")
        return user

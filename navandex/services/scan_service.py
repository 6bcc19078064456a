import logging
import re
from datetime import timedelta

from flask import current_app

from navandex.models.scan import ScanSession, ScanEntry, ScannedBarcode
from navandex.models.order import Order
from navandex.models.user import User
from navandex.models.base import utcnow, ensure_utc
from navandex.extensions import db
from navandex.enums import OrderStatus
from navandex.exceptions import NotFoundError, ConflictError, ServiceError
from navandex.services.order_service import OrderService, notify_status_changes
from navandex.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)

SCANNED_INVOICE_NOTES = "Generated from scanned orders"


def parse_barcode(barcode, max_length: int) -> int:
    """Barcodes are order ids printed on the label"""
    value = (barcode or "").strip()
    if not value:
        raise ServiceError("Barcode is required")
    if not re.fullmatch(r"[0-9]+", value):
        raise ServiceError("Invalid order ID format - only numbers are allowed")
    if len(value) > max_length:
        raise ServiceError("Invalid order ID length")
    return int(value)


class ScanService:
    """Warehouse scan terminal: collect parcels of one customer, then act on them"""

    @staticmethod
    def open_session(actor: User) -> ScanSession:
        session = ScanSession.query.filter_by(user_id=actor.id, closed_at=None).first()
        if session:
            return session

        session = ScanSession(user_id=actor.id)
        db.session.add(session)
        db.session.commit()
        logger.info(f"Scan session {session.id} opened by {actor.id}")
        return session

    @staticmethod
    def get_current_session(actor: User) -> ScanSession:
        session = ScanSession.query.filter_by(user_id=actor.id, closed_at=None).first()
        if not session:
            raise NotFoundError("No open scan session")
        return session

    @staticmethod
    def get_session(session_id: int, actor: User) -> ScanSession:
        session = ScanSession.query.get(session_id)
        if not session or session.user_id != actor.id:
            raise NotFoundError("Scan session not found")
        if not session.is_open:
            raise ServiceError("Scan session is closed")
        return session

    @staticmethod
    def scan(session_id: int, actor: User, barcode: str):
        """
        Add the order behind a barcode to the session.

        Returns ``(session, order, message)``; every rejection raises.
        """
        session = ScanService.get_session(session_id, actor)
        order_id = parse_barcode(barcode, current_app.config["BARCODE_MAX_LENGTH"])
        barcode = barcode.strip()
        now = utcnow()

        window = timedelta(seconds=current_app.config["SCAN_DEDUP_SECONDS"])
        seen = ScannedBarcode.query.filter_by(session_id=session.id, barcode=barcode).first()
        if seen and now - ensure_utc(seen.last_scanned_at) < window:
            raise ConflictError("This barcode was recently processed")

        order = Order.query.get(order_id)
        if not order:
            raise NotFoundError("Order not found")

        if order.status == OrderStatus.CANCELLED:
            raise ServiceError("Cannot process cancelled orders")

        if any(entry.order_id == order.id for entry in session.entries):
            raise ConflictError("This order has already been scanned")

        if session.customer_id is None or not session.entries:
            session.customer_id = order.user_id
            message = "Started new invoice"
        elif session.customer_id != order.user_id:
            raise ServiceError("This order belongs to a different customer")
        else:
            message = "Order added to list"

        session.entries.append(
            ScanEntry(order_id=order.id, barcode=barcode, scanned_at=now)
        )
        if seen:
            seen.last_scanned_at = now
        else:
            session.barcodes.append(ScannedBarcode(barcode=barcode, last_scanned_at=now))
        db.session.commit()
        return session, order, message

    @staticmethod
    def remove_order(session_id: int, actor: User, order_id: int) -> ScanSession:
        session = ScanService.get_session(session_id, actor)
        entry = next((e for e in session.entries if e.order_id == order_id), None)
        if not entry:
            raise NotFoundError("Order is not in this scan session")

        session.entries.remove(entry)
        if not session.entries:
            session.customer_id = None
        db.session.commit()
        return session

    @staticmethod
    def get_stats(session_id: int, actor: User) -> dict:
        session = ScanService.get_session(session_id, actor)
        if session.customer_id is None:
            raise ServiceError("No customer selected")
        return OrderService.get_status_counts(session.customer_id)

    @staticmethod
    def _require_orders(session: ScanSession):
        if not session.entries:
            raise ServiceError("No orders scanned")
        return session.orders

    @staticmethod
    def create_invoice(session_id: int, actor: User):
        session = ScanService.get_session(session_id, actor)
        orders = ScanService._require_orders(session)

        try:
            invoice = InvoiceService.generate_invoice(
                [o.id for o in orders],
                payment_method="Cash",
                notes=SCANNED_INVOICE_NOTES,
                commit=False,
            )
            db.session.flush()
            session.invoice_id = invoice.id
            session.closed_at = utcnow()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Scan session {session.id} closed with invoice {invoice.invoice_number}")
        return invoice

    @staticmethod
    def set_status(session_id: int, actor: User, status: OrderStatus):
        """Move every scanned order to ``status`` together, then clear the list"""
        session = ScanService.get_session(session_id, actor)
        orders = ScanService._require_orders(session)

        try:
            for order in orders:
                OrderService._apply_update(order, actor, {"status": status.value})
            session.entries.clear()
            session.customer_id = None
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Scan session {session.id}: {len(orders)} orders set to {status.value}")
        notify_status_changes(orders)
        return orders

    @staticmethod
    def mark_arrived(session_id: int, actor: User):
        return ScanService.set_status(session_id, actor, OrderStatus.DELIVERED_TO_WAREHOUSE)

    @staticmethod
    def mark_delivered(session_id: int, actor: User):
        return ScanService.set_status(session_id, actor, OrderStatus.DELIVERED)

    @staticmethod
    def discard(session_id: int, actor: User):
        session = ScanService.get_session(session_id, actor)
        db.session.delete(session)
        db.session.commit()

import logging
from datetime import timedelta
from decimal import Decimal

from flask import current_app

from navandex.models.invoice import Invoice
from navandex.models.order import Order
from navandex.models.user import User
from navandex.models.base import utcnow
from navandex.extensions import db
from navandex.enums import InvoiceStatus
from navandex.exceptions import NotFoundError, ServiceError
from navandex.utils.helpers import generate_invoice_number

logger = logging.getLogger(__name__)


def calculate_total(orders) -> Decimal:
    """Sum of (price + shipping + local shipping) x quantity over the orders"""
    total = Decimal("0")
    for order in orders:
        total += order.line_total()
    return total


def _unique_invoice_number(now) -> str:
    # Two invoices inside the same millisecond would collide
    number = generate_invoice_number(now)
    while Invoice.query.filter_by(invoice_number=number).first():
        now = now + timedelta(milliseconds=1)
        number = generate_invoice_number(now)
    return number


class InvoiceService:
    @staticmethod
    def get_invoices():
        return Invoice.query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

    @staticmethod
    def get_invoice(invoice_id: int) -> Invoice:
        invoice = Invoice.query.get(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice not found")
        return invoice

    @staticmethod
    def generate_invoice(order_ids, payment_method="Cash", notes="", due_date=None,
                         commit=True) -> Invoice:
        """
        Build an invoice for a set of orders belonging to one customer.

        The total is recalculated from the order lines; the invoice number
        derives from the current time.
        """
        orders = Order.query.filter(Order.id.in_(list(order_ids))).all()
        if not orders:
            raise NotFoundError("No orders found")

        customer_ids = {order.user_id for order in orders}
        if len(customer_ids) > 1:
            raise ServiceError("All orders must belong to the same customer")

        now = utcnow()
        if due_date is None:
            due_date = now + timedelta(days=current_app.config["INVOICE_DUE_DAYS"])

        invoice = Invoice(
            invoice_number=_unique_invoice_number(now),
            user_id=customer_ids.pop(),
            date=now,
            due_date=due_date,
            status=InvoiceStatus.PENDING,
            total=calculate_total(orders),
            payment_method=payment_method,
            notes=notes,
        )
        invoice.orders = orders
        db.session.add(invoice)

        if commit:
            try:
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise
            logger.info(f"Generated invoice {invoice.invoice_number} for {len(orders)} orders")

        return invoice

    @staticmethod
    def create_invoice(data: dict) -> Invoice:
        if not User.query.get(data["user_id"]):
            raise NotFoundError("User not found")
        if Invoice.query.filter_by(invoice_number=data["invoice_number"]).first():
            raise ServiceError("Invoice number already exists")

        orders = []
        if data.get("order_ids"):
            orders = Order.query.filter(Order.id.in_(data["order_ids"])).all()
            if len(orders) != len(set(data["order_ids"])):
                raise NotFoundError("One or more orders not found")

        invoice = Invoice(
            invoice_number=data["invoice_number"],
            user_id=data["user_id"],
            date=data["date"],
            due_date=data.get("due_date"),
            status=InvoiceStatus(data.get("status") or InvoiceStatus.PENDING.value),
            total=data["total"],
            payment_method=data.get("payment_method"),
            notes=data.get("notes"),
        )
        invoice.orders = orders
        db.session.add(invoice)
        db.session.commit()
        return invoice

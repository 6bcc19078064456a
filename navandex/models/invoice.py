from navandex.models.base import BaseModel
from navandex.extensions import db
from navandex.enums import InvoiceStatus


class Invoice(BaseModel):
    __tablename__ = "invoices"

    invoice_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    date = db.Column(db.DateTime, nullable=False)
    due_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(
        db.Enum(InvoiceStatus, name="invoice_statuses"),
        nullable=False,
        default=InvoiceStatus.PENDING,
    )
    total = db.Column(db.Numeric(15, 2), nullable=False)
    payment_method = db.Column(db.String(50))
    notes = db.Column(db.Text)

    orders = db.relationship("Order", backref="invoice", lazy="select")

    def to_dict(self, include_orders=True):
        data = super().to_dict()
        if self.user is not None:
            data["user"] = {
                "id": self.user.id,
                "name": self.user.name,
                "phone_number": self.user.phone_number,
                "address": self.user.address,
            }
        if include_orders:
            data["orders"] = [
                {
                    "id": o.id,
                    "title": o.title,
                    "size": o.size,
                    "color": o.color,
                    "quantity": o.quantity,
                    "price": float(o.price or 0),
                    "shipping_price": float(o.shipping_price or 0),
                    "local_shipping_price": float(o.local_shipping_price or 0),
                    "image_url": o.image_url,
                    "status": o.status.value,
                }
                for o in self.orders
            ]
        return data

from decimal import Decimal
from navandex.models.base import BaseModel
from navandex.extensions import db
from navandex.enums import OrderStatus


class Order(BaseModel):
    __tablename__ = "orders"

    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    invoice_id = db.Column(
        db.Integer,
        db.ForeignKey("invoices.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title = db.Column(db.String(500), nullable=False)
    size = db.Column(db.String(100), default="N/A")
    color = db.Column(db.String(100), default="N/A")
    quantity = db.Column(db.Integer, nullable=False, default=1)

    # USD amounts
    price = db.Column(db.Numeric(15, 2), nullable=False, default=Decimal("0"))
    shipping_price = db.Column(db.Numeric(15, 2), nullable=False, default=Decimal("0"))
    local_shipping_price = db.Column(db.Numeric(15, 2), nullable=False, default=Decimal("0"))
    # IQD amounts quoted to the customer
    iqd_price = db.Column(db.Numeric(15, 2), nullable=True)
    iqd_shipping_price = db.Column(db.Numeric(15, 2), nullable=True)

    status = db.Column(
        db.Enum(OrderStatus, name="order_statuses"),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    order_number = db.Column(db.String(100), nullable=True, index=True)
    prepaid = db.Column(db.Boolean, default=False, nullable=False)
    product_link = db.Column(db.Text, default="")
    image_url = db.Column(db.String(1000), default="/logo.png")
    notes = db.Column(db.Text, default="")
    country = db.Column(db.String(120), nullable=True)

    # Relationships
    status_history = db.relationship(
        "OrderStatusHistory",
        backref="order",
        lazy="dynamic",
        cascade="all, delete-orphan",
        order_by="OrderStatusHistory.created_at.desc()",
    )

    def line_total(self) -> Decimal:
        """Price plus both shipping legs, per unit, times quantity"""
        unit = (
            Decimal(self.price or 0)
            + Decimal(self.shipping_price or 0)
            + Decimal(self.local_shipping_price or 0)
        )
        return unit * (self.quantity or 0)

    def to_dict(self, include_user=True, include_history=False):
        data = super().to_dict()
        if include_user and self.user is not None:
            data["user"] = {"name": self.user.name, "phone_number": self.user.phone_number}
        if include_history:
            data["status_history"] = [h.to_dict() for h in self.status_history]
        return data


class OrderStatusHistory(BaseModel):
    __tablename__ = "order_status_history"

    order_id = db.Column(
        db.Integer,
        db.ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    status = db.Column(db.Enum(OrderStatus, name="order_statuses"), nullable=False)
    notes = db.Column(db.Text)

    user = db.relationship("User")

    def to_dict(self):
        data = super().to_dict()
        data["user"] = {"name": self.user.name} if self.user else None
        return data

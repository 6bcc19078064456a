from navandex.models.base import BaseModel
from navandex.extensions import db


class ScanSession(BaseModel):
    """A batch of scanned parcels belonging to a single customer"""

    __tablename__ = "scan_sessions"

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    invoice_id = db.Column(db.Integer, db.ForeignKey("invoices.id"), nullable=True)
    closed_at = db.Column(db.DateTime, nullable=True)

    entries = db.relationship(
        "ScanEntry",
        backref="session",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="ScanEntry.id",
    )
    # Kept after entries are removed so dedup survives list edits
    barcodes = db.relationship(
        "ScannedBarcode",
        lazy="select",
        cascade="all, delete-orphan",
    )
    customer = db.relationship("User", foreign_keys=[customer_id])

    @property
    def is_open(self) -> bool:
        return self.closed_at is None

    @property
    def orders(self):
        return [entry.order for entry in self.entries]

    def to_dict(self):
        data = super().to_dict()
        data["customer"] = self.customer.to_summary() if self.customer else None
        data["orders"] = [order.to_dict() for order in self.orders]
        return data


class ScanEntry(BaseModel):
    __tablename__ = "scan_entries"
    __table_args__ = (db.UniqueConstraint("session_id", "order_id"),)

    session_id = db.Column(
        db.Integer,
        db.ForeignKey("scan_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False)
    barcode = db.Column(db.String(32), nullable=False)
    scanned_at = db.Column(db.DateTime, nullable=False)

    order = db.relationship("Order")


class ScannedBarcode(BaseModel):
    """Last time a barcode was accepted into a session"""

    __tablename__ = "scanned_barcodes"
    __table_args__ = (db.UniqueConstraint("session_id", "barcode"),)

    session_id = db.Column(
        db.Integer,
        db.ForeignKey("scan_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    barcode = db.Column(db.String(32), nullable=False)
    last_scanned_at = db.Column(db.DateTime, nullable=False)

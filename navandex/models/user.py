from navandex.models.base import BaseModel
from navandex.extensions import db
from navandex.enums import UserRole, STAFF_ROLES
import bcrypt


class User(BaseModel):
    __tablename__ = "users"

    name = db.Column(db.String(255), nullable=False)
    phone_number = db.Column(db.String(32), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(UserRole, name="user_roles"), nullable=False, default=UserRole.CUSTOMER)
    address = db.Column(db.Text, default="")
    city = db.Column(db.String(120), default="")
    country = db.Column(db.String(120), default="")
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime, nullable=True)

    # Relationships
    orders = db.relationship(
        "Order", backref="user", lazy="dynamic", foreign_keys="Order.user_id"
    )
    invoices = db.relationship("Invoice", backref="user", lazy="dynamic")
    announcements = db.relationship("Announcement", backref="created_by", lazy="dynamic")

    def set_password(self, password: str):
        self.password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt()
        ).decode("utf-8")

    def check_password(self, password: str) -> bool:
        return bcrypt.checkpw(
            password.encode("utf-8"), self.password_hash.encode("utf-8")
        )

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def to_summary(self):
        return {"id": self.id, "name": self.name, "phone_number": self.phone_number}

    def to_dict(self, include_sensitive=False):
        data = super().to_dict()
        if not include_sensitive:
            data.pop("password_hash", None)
        return data

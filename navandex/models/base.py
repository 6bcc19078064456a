from navandex.extensions import db
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


def utcnow():
    return datetime.now(timezone.utc)


def ensure_utc(value):
    """SQLite hands back naive datetimes; treat them as UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BaseModel(db.Model):
    """Base model with common fields and methods"""

    __abstract__ = True

    # Integer keys: order ids are printed on labels and scanned as barcodes
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def save(self):
        """Save instance to database"""
        db.session.add(self)
        db.session.commit()
        return self

    def delete(self):
        """Delete instance from database"""
        db.session.delete(self)
        db.session.commit()

    def update(self, commit=True, **kwargs):
        """Update instance with provided kwargs"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        self.updated_at = utcnow()
        if commit:
            db.session.commit()
        return self

    def to_dict(self):
        """Convert model to dictionary"""
        result = {}
        for column in self.__table__.columns:
            result[column.name] = serialize_value(getattr(self, column.name))
        return result


def serialize_value(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    return value

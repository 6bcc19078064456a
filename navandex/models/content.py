from navandex.models.base import BaseModel
from navandex.extensions import db
from navandex.enums import AnnouncementCategory


class Announcement(BaseModel):
    __tablename__ = "announcements"

    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    category = db.Column(
        db.Enum(AnnouncementCategory, name="announcement_categories"),
        nullable=False,
        default=AnnouncementCategory.INFO,
    )
    is_important = db.Column(db.Boolean, default=False, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    def to_dict(self):
        data = super().to_dict()
        if self.created_by is not None:
            data["created_by"] = {
                "name": self.created_by.name,
                "role": self.created_by.role.value,
            }
        return data


class Banner(BaseModel):
    __tablename__ = "banners"

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(1000), nullable=False)
    link = db.Column(db.String(1000))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    position = db.Column(db.Integer, default=0, nullable=False)


class ExchangeRate(BaseModel):
    """TRY per one USD"""

    __tablename__ = "exchange_rates"

    rate = db.Column(db.Numeric(15, 4), nullable=False)

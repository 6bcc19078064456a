from sqlalchemy import or_

from navandex.models.content import Announcement, Banner
from navandex.models.user import User
from navandex.models.base import utcnow
from navandex.extensions import db
from navandex.enums import AnnouncementCategory
from navandex.exceptions import NotFoundError


class AnnouncementService:
    @staticmethod
    def get_announcements(include_inactive=False, limit=None):
        query = Announcement.query

        if not include_inactive:
            now = utcnow().replace(tzinfo=None)
            query = query.filter(
                Announcement.is_active.is_(True),
                or_(Announcement.expires_at.is_(None), Announcement.expires_at > now),
            )

        query = query.order_by(Announcement.created_at.desc(), Announcement.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_announcement(announcement_id: int) -> Announcement:
        announcement = Announcement.query.get(announcement_id)
        if not announcement:
            raise NotFoundError("Announcement not found")
        return announcement

    @staticmethod
    def create_announcement(author: User, data: dict) -> Announcement:
        announcement = Announcement(
            title=data["title"],
            content=data["content"],
            category=AnnouncementCategory(data.get("category") or "INFO"),
            is_important=data.get("is_important", False),
            expires_at=data.get("expires_at"),
            user_id=author.id,
        )
        db.session.add(announcement)
        db.session.commit()
        return announcement

    @staticmethod
    def update_announcement(announcement_id: int, data: dict) -> Announcement:
        announcement = AnnouncementService.get_announcement(announcement_id)
        if "category" in data:
            data = dict(data, category=AnnouncementCategory(data["category"]))
        return announcement.update(**data)

    @staticmethod
    def delete_announcement(announcement_id: int):
        AnnouncementService.get_announcement(announcement_id).delete()


class BannerService:
    @staticmethod
    def get_banners(active_only=False):
        query = Banner.query
        if active_only:
            query = query.filter(Banner.is_active.is_(True))
        return query.order_by(Banner.position.asc(), Banner.id.asc()).all()

    @staticmethod
    def get_banner(banner_id: int) -> Banner:
        banner = Banner.query.get(banner_id)
        if not banner:
            raise NotFoundError("Banner not found")
        return banner

    @staticmethod
    def create_banner(data: dict) -> Banner:
        return Banner(**data).save()

    @staticmethod
    def update_banner(banner_id: int, data: dict) -> Banner:
        return BannerService.get_banner(banner_id).update(**data)

    @staticmethod
    def delete_banner(banner_id: int):
        BannerService.get_banner(banner_id).delete()

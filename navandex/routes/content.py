from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.content_service import AnnouncementService, BannerService
from navandex.schemas import (
    AnnouncementCreateSchema,
    AnnouncementUpdateSchema,
    BannerCreateSchema,
    BannerUpdateSchema,
)
from navandex.utils.validators import validate_schema, parse_bool_arg
from navandex.utils.decorators import role_required
from navandex.enums import UserRole

announcements_bp = Blueprint("announcements", __name__)
banners_bp = Blueprint("banners", __name__)


# Announcements
@announcements_bp.route("/", methods=["GET"])
def get_announcements():
    """Public list of current announcements"""
    announcements = AnnouncementService.get_announcements(
        include_inactive=parse_bool_arg("include_inactive"),
        limit=request.args.get("limit", type=int),
    )
    return jsonify({"announcements": [a.to_dict() for a in announcements]}), 200


@announcements_bp.route("/", methods=["POST"])
@jwt_required()
@role_required(UserRole.ADMIN)
@validate_schema(AnnouncementCreateSchema)
def create_announcement(current_user):
    announcement = AnnouncementService.create_announcement(
        current_user, request.validated_data
    )
    return jsonify({"announcement": announcement.to_dict()}), 201


@announcements_bp.route("/<int:announcement_id>", methods=["PATCH"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
@validate_schema(AnnouncementUpdateSchema)
def update_announcement(announcement_id, current_user):
    announcement = AnnouncementService.update_announcement(
        announcement_id, request.validated_data
    )
    return jsonify({"announcement": announcement.to_dict()}), 200


@announcements_bp.route("/<int:announcement_id>", methods=["DELETE"])
@jwt_required()
@role_required(UserRole.ADMIN)
def delete_announcement(announcement_id, current_user):
    AnnouncementService.delete_announcement(announcement_id)
    return jsonify({"message": "Announcement deleted successfully"}), 200


# Banners
@banners_bp.route("/", methods=["GET"])
def get_banners():
    """Public list of banners, ordered by position"""
    banners = BannerService.get_banners(active_only=parse_bool_arg("active_only"))
    return jsonify({"banners": [b.to_dict() for b in banners]}), 200


@banners_bp.route("/", methods=["POST"])
@jwt_required()
@role_required(UserRole.ADMIN)
@validate_schema(BannerCreateSchema)
def create_banner(current_user):
    banner = BannerService.create_banner(request.validated_data)
    return jsonify({"banner": banner.to_dict()}), 201


@banners_bp.route("/<int:banner_id>", methods=["PATCH"])
@jwt_required()
@role_required(UserRole.ADMIN)
@validate_schema(BannerUpdateSchema, partial=True)
def update_banner(banner_id, current_user):
    banner = BannerService.update_banner(banner_id, request.validated_data)
    return jsonify({"banner": banner.to_dict()}), 200


@banners_bp.route("/<int:banner_id>", methods=["DELETE"])
@jwt_required()
@role_required(UserRole.ADMIN)
def delete_banner(banner_id, current_user):
    BannerService.delete_banner(banner_id)
    return jsonify({"message": "Banner deleted successfully"}), 200

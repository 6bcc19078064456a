from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.user_service import UserService
from navandex.schemas import UserCreateSchema, UserUpdateSchema
from navandex.utils.validators import validate_schema, validate_pagination
from navandex.utils.decorators import role_required
from navandex.enums import UserRole

users_bp = Blueprint("users", __name__)
user_stats_bp = Blueprint("user_stats", __name__)


@users_bp.route("/", methods=["GET"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
def get_users(current_user):
    """Get users, ordered by name"""
    role = request.args.get("role")
    if role and role.upper() not in UserRole.__members__:
        return jsonify({"error": "Invalid role specified"}), 400

    page, per_page = validate_pagination(default_per_page=10)
    pagination = UserService.list_users(
        role=role,
        search=request.args.get("search"),
        page=page,
        per_page=per_page,
    )

    return (
        jsonify(
            {
                "users": [u.to_dict() for u in pagination.items],
                "total": pagination.total,
                "has_more": pagination.has_next,
            }
        ),
        200,
    )


@users_bp.route("/", methods=["POST"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
@validate_schema(UserCreateSchema)
def create_user(current_user):
    """Create user; only admins may create other admins"""
    if request.validated_data["role"] == UserRole.ADMIN.value and current_user.role != UserRole.ADMIN:
        return jsonify({"error": "Only administrators can create administrators"}), 403

    try:
        user = UserService.create_user(**request.validated_data)
        return (
            jsonify({"message": "User created successfully", "user": user.to_dict()}),
            201,
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@users_bp.route("/<int:user_id>", methods=["GET"])
@jwt_required()
@role_required()
def get_user(user_id, current_user):
    """Get user detail"""
    UserService.check_access(current_user, user_id)
    user = UserService.get_user(user_id)
    return jsonify({"user": user.to_dict()}), 200


@users_bp.route("/<int:user_id>", methods=["PUT"])
@jwt_required()
@role_required()
@validate_schema(UserUpdateSchema, partial=True)
def update_user(user_id, current_user):
    """Update user information"""
    user = UserService.update_user(current_user, user_id, request.validated_data)
    return (
        jsonify({"message": "User updated successfully", "user": user.to_dict()}),
        200,
    )


@users_bp.route("/<int:user_id>/deactivate", methods=["PUT"])
@jwt_required()
@role_required(UserRole.ADMIN)
def deactivate_user(user_id, current_user):
    """Deactivate user account"""
    user = UserService.set_active(current_user, user_id, False)
    return (
        jsonify({"message": "User deactivated successfully", "user": user.to_dict()}),
        200,
    )


@users_bp.route("/<int:user_id>/activate", methods=["PUT"])
@jwt_required()
@role_required(UserRole.ADMIN)
def activate_user(user_id, current_user):
    """Activate user account"""
    user = UserService.set_active(current_user, user_id, True)
    return (
        jsonify({"message": "User activated successfully", "user": user.to_dict()}),
        200,
    )


@user_stats_bp.route("/stats", methods=["GET"])
@jwt_required()
@role_required()
def get_my_stats(current_user):
    """Dashboard numbers for the signed in user"""
    return jsonify(UserService.get_dashboard_stats(current_user)), 200

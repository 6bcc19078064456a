from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.scan_service import ScanService
from navandex.schemas import ScanSchema
from navandex.utils.validators import validate_schema
from navandex.utils.decorators import role_required
from navandex.enums import UserRole

scan_bp = Blueprint("scan", __name__)

STAFF = (UserRole.ADMIN, UserRole.WORKER)


@scan_bp.route("/sessions", methods=["POST"])
@jwt_required()
@role_required(*STAFF)
def open_session(current_user):
    """Open a scan session, or return the one already open"""
    session = ScanService.open_session(current_user)
    return jsonify({"session": session.to_dict()}), 200


@scan_bp.route("/sessions/current", methods=["GET"])
@jwt_required()
@role_required(*STAFF)
def get_current_session(current_user):
    session = ScanService.get_current_session(current_user)
    return jsonify({"session": session.to_dict()}), 200


@scan_bp.route("/sessions/<int:session_id>", methods=["DELETE"])
@jwt_required()
@role_required(*STAFF)
def discard_session(session_id, current_user):
    ScanService.discard(session_id, current_user)
    return jsonify({"message": "Scan session discarded"}), 200


@scan_bp.route("/sessions/<int:session_id>/scan", methods=["POST"])
@jwt_required()
@role_required(*STAFF)
@validate_schema(ScanSchema)
def scan_barcode(session_id, current_user):
    """Add the order behind a barcode to the session"""
    session, order, message = ScanService.scan(
        session_id, current_user, request.validated_data["barcode"]
    )
    return (
        jsonify({"message": message, "order": order.to_dict(), "session": session.to_dict()}),
        200,
    )


@scan_bp.route("/sessions/<int:session_id>/orders/<int:order_id>", methods=["DELETE"])
@jwt_required()
@role_required(*STAFF)
def remove_scanned_order(session_id, order_id, current_user):
    session = ScanService.remove_order(session_id, current_user, order_id)
    return jsonify({"message": "Order removed from list", "session": session.to_dict()}), 200


@scan_bp.route("/sessions/<int:session_id>/stats", methods=["GET"])
@jwt_required()
@role_required(*STAFF)
def get_session_stats(session_id, current_user):
    """Order counts for the customer being scanned"""
    stats = ScanService.get_stats(session_id, current_user)
    return jsonify({"stats": stats}), 200


@scan_bp.route("/sessions/<int:session_id>/invoice", methods=["POST"])
@jwt_required()
@role_required(*STAFF)
def create_session_invoice(session_id, current_user):
    """Invoice the scanned orders and close the session"""
    invoice = ScanService.create_invoice(session_id, current_user)
    return (
        jsonify({"message": "Invoice generated successfully", "invoice": invoice.to_dict()}),
        201,
    )


@scan_bp.route("/sessions/<int:session_id>/arrived", methods=["POST"])
@jwt_required()
@role_required(*STAFF)
def mark_session_arrived(session_id, current_user):
    orders = ScanService.mark_arrived(session_id, current_user)
    return (
        jsonify(
            {
                "message": "All orders marked as delivered to warehouse",
                "orders": [o.to_dict() for o in orders],
            }
        ),
        200,
    )


@scan_bp.route("/sessions/<int:session_id>/delivered", methods=["POST"])
@jwt_required()
@role_required(*STAFF)
def mark_session_delivered(session_id, current_user):
    orders = ScanService.mark_delivered(session_id, current_user)
    return (
        jsonify(
            {
                "message": "All orders marked as delivered",
                "orders": [o.to_dict() for o in orders],
            }
        ),
        200,
    )

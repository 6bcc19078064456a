from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.report_service import ReportService
from navandex.utils.decorators import role_required
from navandex.enums import UserRole

reports_bp = Blueprint("reports", __name__)


@reports_bp.route("/", methods=["GET"])
@jwt_required()
@role_required(UserRole.ADMIN)
def get_reports(current_user):
    """Order counts, monthly trends and revenue for a date range"""
    report = ReportService.build_report(
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
        status=request.args.get("status"),
    )
    return jsonify(report), 200

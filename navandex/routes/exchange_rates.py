from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.pricing_service import PricingService
from navandex.schemas import ExchangeRateSchema
from navandex.utils.validators import validate_schema
from navandex.utils.decorators import role_required
from navandex.enums import UserRole

exchange_rates_bp = Blueprint("exchange_rates", __name__)


@exchange_rates_bp.route("/", methods=["GET"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
def get_exchange_rates(current_user):
    """All recorded TRY/USD rates, newest first"""
    rates = PricingService.list_rates()
    return jsonify({"rates": [r.to_dict() for r in rates]}), 200


@exchange_rates_bp.route("/", methods=["POST"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
@validate_schema(ExchangeRateSchema)
def create_exchange_rate(current_user):
    rate = PricingService.add_rate(request.validated_data["rate"])
    return jsonify({"rate": rate.to_dict()}), 201

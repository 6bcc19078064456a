from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.order_service import OrderService
from navandex.schemas import (
    OrderCreateSchema,
    OrderUpdateSchema,
    OrderPriceSchema,
    BulkOrderUpdateSchema,
)
from navandex.utils.validators import validate_schema, validate_pagination
from navandex.utils.decorators import role_required
from navandex.utils.order_status import STATUS_FILTERS
from navandex.enums import UserRole

orders_bp = Blueprint("orders", __name__)
tracking_bp = Blueprint("tracking", __name__)


@orders_bp.route("/", methods=["GET"])
@jwt_required()
@role_required()
def get_orders(current_user):
    """List orders; customers only get their own"""
    page, per_page = validate_pagination()

    pagination = OrderService.get_orders(
        current_user,
        status=request.args.get("status"),
        country=request.args.get("country"),
        search=request.args.get("search"),
        user_id=request.args.get("user_id", type=int),
        page=page,
        per_page=per_page,
    )

    return (
        jsonify(
            {
                "orders": [o.to_dict() for o in pagination.items],
                "total": pagination.total,
                "page": page,
                "pages": pagination.pages,
            }
        ),
        200,
    )


@orders_bp.route("/", methods=["POST"])
@jwt_required()
@role_required()
@validate_schema(OrderCreateSchema)
def create_order(current_user):
    """Create order"""
    order = OrderService.create_order(current_user, request.validated_data)
    return (
        jsonify({"message": "Order created successfully", "order": order.to_dict()}),
        201,
    )


@orders_bp.route("/statuses", methods=["GET"])
def get_status_filters():
    return jsonify({"statuses": STATUS_FILTERS}), 200


@orders_bp.route("/stats", methods=["GET"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
def get_order_stats(current_user):
    """Per-status order counts for one customer"""
    user_id = request.args.get("user_id", type=int)
    if not user_id:
        return jsonify({"error": "User ID is required"}), 400

    customer = OrderService.get_customer(user_id)
    stats = OrderService.get_status_counts(customer.id, request.args.get("status"))
    return jsonify({"user": customer.to_summary(), "stats": stats}), 200


@orders_bp.route("/bulk", methods=["PUT"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
@validate_schema(BulkOrderUpdateSchema)
def bulk_update_orders(current_user):
    """Update many orders at once; all or nothing"""
    data = request.validated_data
    orders = OrderService.bulk_update(
        current_user,
        data["order_ids"],
        status=data.get("status"),
        order_number=data.get("order_number"),
    )
    return (
        jsonify(
            {
                "message": f"{len(orders)} orders updated successfully",
                "orders": [o.to_dict() for o in orders],
            }
        ),
        200,
    )


@orders_bp.route("/<int:order_id>", methods=["GET"])
@jwt_required()
@role_required()
def get_order(order_id, current_user):
    """Get order detail with its status history"""
    try:
        order = OrderService.get_order(order_id, current_user)
        return jsonify({"order": order.to_dict(include_history=True)}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 404


@orders_bp.route("/<int:order_id>", methods=["PUT"])
@jwt_required()
@role_required()
@validate_schema(OrderUpdateSchema)
def update_order(order_id, current_user):
    """Update order fields and/or status"""
    order = OrderService.update_order(order_id, current_user, request.validated_data)
    return (
        jsonify({"message": "Order updated successfully", "order": order.to_dict()}),
        200,
    )


@orders_bp.route("/<int:order_id>/price", methods=["PUT"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
@validate_schema(OrderPriceSchema)
def set_order_price(order_id, current_user):
    """Set prices entered in lira"""
    data = request.validated_data
    order = OrderService.set_price(
        order_id,
        current_user,
        data["price_try"],
        local_shipping_price_try=data["local_shipping_price_try"],
        shipping_price=data["shipping_price"],
    )
    return (
        jsonify({"message": "Price updated successfully", "order": order.to_dict()}),
        200,
    )


@tracking_bp.route("/<order_number>", methods=["PUT"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
def mark_arrived(order_number, current_user):
    """Mark the order with this tracking number as delivered to the warehouse"""
    order = OrderService.mark_arrived_by_tracking(order_number.strip(), current_user)
    return (
        jsonify(
            {
                "message": "Order marked as delivered to warehouse",
                "order": order.to_dict(),
            }
        ),
        200,
    )

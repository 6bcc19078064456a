from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from navandex.services.invoice_service import InvoiceService
from navandex.schemas import InvoiceGenerateSchema, InvoiceCreateSchema
from navandex.utils.validators import validate_schema
from navandex.utils.decorators import role_required
from navandex.enums import UserRole

invoices_bp = Blueprint("invoices", __name__)


@invoices_bp.route("/", methods=["GET"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
def get_invoices(current_user):
    """Get all invoices"""
    invoices = InvoiceService.get_invoices()
    return jsonify({"invoices": [i.to_dict() for i in invoices]}), 200


@invoices_bp.route("/", methods=["POST"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
@validate_schema(InvoiceCreateSchema)
def create_invoice(current_user):
    """Create invoice from explicit values"""
    invoice = InvoiceService.create_invoice(request.validated_data)
    return jsonify({"invoice": invoice.to_dict()}), 201


@invoices_bp.route("/generate", methods=["POST"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
@validate_schema(InvoiceGenerateSchema)
def generate_invoice(current_user):
    """Generate invoice for a customer's orders"""
    data = request.validated_data
    invoice = InvoiceService.generate_invoice(
        data["order_ids"],
        payment_method=data["payment_method"],
        notes=data["notes"],
        due_date=data.get("due_date"),
    )
    return (
        jsonify({"message": "Invoice generated successfully", "invoice": invoice.to_dict()}),
        201,
    )


@invoices_bp.route("/<int:invoice_id>", methods=["GET"])
@jwt_required()
@role_required(UserRole.ADMIN, UserRole.WORKER)
def get_invoice(invoice_id, current_user):
    """Get invoice detail"""
    try:
        invoice = InvoiceService.get_invoice(invoice_id)
        return jsonify({"invoice": invoice.to_dict()}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 404

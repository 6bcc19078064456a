from decimal import Decimal
from marshmallow import fields, validate, validates_schema, ValidationError
from navandex.enums import OrderStatus, InvoiceStatus
from .base import BaseSchema

STATUSES = [s.value for s in OrderStatus]


class OrderCreateSchema(BaseSchema):
    user_id = fields.Int()
    title = fields.Str(validate=validate.Length(max=500))
    size = fields.Str()
    color = fields.Str()
    quantity = fields.Int(validate=validate.Range(min=1))
    shipping_price = fields.Decimal(places=2, validate=validate.Range(min=0))
    local_shipping_price = fields.Decimal(places=2, validate=validate.Range(min=0))
    product_link = fields.Str()
    image_url = fields.Str(validate=validate.Length(max=1000))
    notes = fields.Str()
    country = fields.Str(validate=validate.Length(max=120))


class OrderUpdateSchema(BaseSchema):
    status = fields.Str(validate=validate.OneOf(STATUSES))
    price = fields.Decimal(places=2, validate=validate.Range(min=0))
    shipping_price = fields.Decimal(places=2, validate=validate.Range(min=0))
    local_shipping_price = fields.Decimal(places=2, validate=validate.Range(min=0))
    iqd_price = fields.Decimal(places=2, validate=validate.Range(min=0), allow_none=True)
    iqd_shipping_price = fields.Decimal(places=2, validate=validate.Range(min=0), allow_none=True)
    order_number = fields.Str(validate=validate.Length(max=100))
    prepaid = fields.Bool()
    quantity = fields.Int(validate=validate.Range(min=1))
    title = fields.Str(validate=validate.Length(min=1, max=500))
    size = fields.Str()
    color = fields.Str()
    notes = fields.Str()
    product_link = fields.Str()
    image_url = fields.Str(validate=validate.Length(max=1000))
    country = fields.Str(validate=validate.Length(max=120), allow_none=True)


class OrderPriceSchema(BaseSchema):
    """Prices entered in Turkish lira, except international shipping"""

    price_try = fields.Decimal(required=True, places=2, validate=validate.Range(min=0))
    local_shipping_price_try = fields.Decimal(
        places=2, validate=validate.Range(min=0), load_default=Decimal("0")
    )
    shipping_price = fields.Decimal(places=2, validate=validate.Range(min=0), load_default=Decimal("0"))


class BulkOrderUpdateSchema(BaseSchema):
    order_ids = fields.List(fields.Int(), required=True, validate=validate.Length(min=1))
    status = fields.Str(validate=validate.OneOf(STATUSES))
    order_number = fields.Str(validate=validate.Length(min=1, max=100))

    @validates_schema
    def validate_changes(self, data, **kwargs):
        if not data.get("status") and not data.get("order_number"):
            raise ValidationError(
                "Please provide either order number or status to update", "_schema"
            )


class InvoiceGenerateSchema(BaseSchema):
    order_ids = fields.List(fields.Int(), required=True, validate=validate.Length(min=1))
    payment_method = fields.Str(load_default="Cash")
    notes = fields.Str(load_default="")
    due_date = fields.DateTime(allow_none=True)


class InvoiceCreateSchema(BaseSchema):
    invoice_number = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    user_id = fields.Int(required=True)
    order_ids = fields.List(fields.Int(), load_default=list)
    date = fields.DateTime(required=True)
    due_date = fields.DateTime(allow_none=True)
    status = fields.Str(
        load_default=InvoiceStatus.PENDING.value,
        validate=validate.OneOf([s.value for s in InvoiceStatus]),
    )
    total = fields.Decimal(required=True, places=2, validate=validate.Range(min=0))
    payment_method = fields.Str()
    notes = fields.Str()


class ScanSchema(BaseSchema):
    barcode = fields.Str(required=True)


class ExchangeRateSchema(BaseSchema):
    rate = fields.Decimal(
        required=True,
        places=4,
        validate=validate.Range(min=0, min_inclusive=False, error="Invalid rate provided"),
    )

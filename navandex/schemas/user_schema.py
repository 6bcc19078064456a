from marshmallow import fields, validate
from navandex.enums import UserRole
from .base import BaseSchema

ROLES = [r.value for r in UserRole]


class UserLoginSchema(BaseSchema):
    phone_number = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, validate=validate.Length(min=1))


class UserRegisterSchema(BaseSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    phone_number = fields.Str(required=True, validate=validate.Length(min=3, max=32))
    password = fields.Str(required=True, validate=validate.Length(min=8))
    address = fields.Str(load_default="")
    city = fields.Str(load_default="")
    country = fields.Str(load_default="")


class UserCreateSchema(UserRegisterSchema):
    password = fields.Str(required=True, validate=validate.Length(min=6))
    role = fields.Str(required=True, validate=validate.OneOf(ROLES))


class UserUpdateSchema(BaseSchema):
    name = fields.Str(validate=validate.Length(min=1, max=255))
    phone_number = fields.Str(validate=validate.Length(min=3, max=32))
    role = fields.Str(validate=validate.OneOf(ROLES, error="Invalid role specified"))
    password = fields.Str(validate=validate.Length(min=6))
    address = fields.Str()
    city = fields.Str()
    country = fields.Str()

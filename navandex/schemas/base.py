from marshmallow import EXCLUDE
from navandex.extensions import ma


class BaseSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

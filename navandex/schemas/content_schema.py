from marshmallow import fields, validate
from navandex.enums import AnnouncementCategory
from .base import BaseSchema

CATEGORIES = [c.value for c in AnnouncementCategory]


class AnnouncementCreateSchema(BaseSchema):
    title = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    content = fields.Str(required=True, validate=validate.Length(min=1))
    category = fields.Str(load_default=AnnouncementCategory.INFO.value, validate=validate.OneOf(CATEGORIES))
    is_important = fields.Bool(load_default=False)
    expires_at = fields.DateTime(allow_none=True, load_default=None)


class AnnouncementUpdateSchema(BaseSchema):
    title = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    content = fields.Str(required=True, validate=validate.Length(min=1))
    category = fields.Str(validate=validate.OneOf(CATEGORIES))
    is_important = fields.Bool()
    is_active = fields.Bool()
    expires_at = fields.DateTime(allow_none=True)


class BannerCreateSchema(BaseSchema):
    title = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    description = fields.Str(required=True, validate=validate.Length(min=1))
    image_url = fields.Str(required=True, validate=validate.Length(min=1, max=1000))
    link = fields.Str(allow_none=True)
    is_active = fields.Bool(load_default=True)
    position = fields.Int(load_default=0)


class BannerUpdateSchema(BaseSchema):
    title = fields.Str(validate=validate.Length(min=1, max=255))
    description = fields.Str(validate=validate.Length(min=1))
    image_url = fields.Str(validate=validate.Length(min=1, max=1000))
    link = fields.Str(allow_none=True)
    is_active = fields.Bool()
    position = fields.Int()


class ScrapeSchema(BaseSchema):
    url = fields.Url(required=True)

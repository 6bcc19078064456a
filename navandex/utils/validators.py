from functools import wraps
from flask import request, jsonify
from marshmallow import ValidationError


def validate_schema(schema_class, partial=False):
    """Decorator to validate request data against schema"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            schema = schema_class()
            try:
                validated_data = schema.load(request.get_json(silent=True) or {}, partial=partial)
                request.validated_data = validated_data
                return f(*args, **kwargs)
            except ValidationError as err:
                return jsonify({'error': 'Validation error', 'messages': err.messages}), 400
        return decorated_function
    return decorator


def validate_pagination(default_per_page=20, max_per_page=100):
    """Validate pagination parameters"""
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', default_per_page, type=int)

    if page < 1:
        page = 1
    if per_page < 1 or per_page > max_per_page:
        per_page = default_per_page

    return page, per_page


def parse_bool_arg(name, default=False):
    value = request.args.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

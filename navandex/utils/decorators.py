from functools import wraps
from flask import jsonify
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from navandex.models.user import User


def load_current_user():
    """Resolve the user behind the verified JWT, or None"""
    user_id = get_jwt_identity()
    try:
        return User.query.get(int(user_id))
    except (TypeError, ValueError):
        return None


def role_required(*roles):
    """Decorator to check if user has required role"""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = load_current_user()

            if not user or not user.is_active:
                return jsonify({'error': 'User not found or inactive'}), 403

            if roles and user.role not in roles:
                return jsonify({'error': 'Insufficient permissions'}), 403

            # Pass user to route handler
            kwargs['current_user'] = user
            return fn(*args, **kwargs)
        return wrapper
    return decorator

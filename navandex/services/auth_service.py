import logging
from navandex.models.user import User
from navandex.models.base import utcnow
from navandex.extensions import db
from navandex.enums import UserRole
from navandex.exceptions import NotFoundError
from flask_jwt_extended import create_access_token, create_refresh_token

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and token issuing"""

    @staticmethod
    def register_user(name: str, phone_number: str, password: str, **kwargs) -> User:
        if User.query.filter_by(phone_number=phone_number).first():
            raise ValueError("Phone number already registered")

        user = User(
            name=name,
            phone_number=phone_number,
            role=UserRole.CUSTOMER,
            address=kwargs.get("address") or "",
            city=kwargs.get("city") or "",
            country=kwargs.get("country") or "",
            is_active=True,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        logger.info(f"Registered customer {user.id}")
        return user

    @staticmethod
    def issue_tokens(user: User) -> dict:
        return {
            "access_token": create_access_token(identity=user),
            "refresh_token": create_refresh_token(identity=user),
        }

    @staticmethod
    def login_user(phone_number: str, password: str) -> dict:
        """Authenticate user and generate tokens"""
        user = User.query.filter_by(phone_number=phone_number).first()

        if not user or not user.check_password(password):
            raise ValueError("Invalid phone number or password")

        if not user.is_active:
            raise ValueError("Account is deactivated")

        user.last_login = utcnow()
        db.session.commit()

        result = AuthService.issue_tokens(user)
        result["user"] = user.to_dict()
        return result

    @staticmethod
    def get_user_by_id(user_id) -> User:
        try:
            user = User.query.get(int(user_id))
        except (TypeError, ValueError):
            user = None
        if not user:
            raise NotFoundError("User not found")
        return user

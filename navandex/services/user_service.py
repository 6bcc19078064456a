from sqlalchemy import or_
from navandex.models.user import User
from navandex.models.order import Order
from navandex.extensions import db
from navandex.enums import UserRole, OrderStatus
from navandex.exceptions import NotFoundError, PermissionDeniedError, ServiceError


class UserService:
    @staticmethod
    def get_user(user_id: int) -> User:
        user = User.query.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def list_users(role: str = None, search: str = None, page: int = 1, per_page: int = 10):
        query = User.query

        if role:
            query = query.filter(User.role == UserRole(role.upper()))

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(User.name.ilike(pattern), User.phone_number.ilike(pattern))
            )

        return query.order_by(User.name.asc()).paginate(
            page=page, per_page=per_page, error_out=False
        )

    @staticmethod
    def create_user(name, phone_number, role, password, **kwargs) -> User:
        if User.query.filter_by(phone_number=phone_number).first():
            raise ServiceError("Phone number already in use")

        user = User(
            name=name,
            phone_number=phone_number,
            role=UserRole(role),
            address=kwargs.get("address") or "",
            city=kwargs.get("city") or "",
            country=kwargs.get("country") or "",
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def check_access(actor: User, user_id: int):
        """Staff may act on anyone, everybody else only on themselves"""
        if not actor.is_staff and actor.id != user_id:
            raise PermissionDeniedError("Unauthorized")

    @staticmethod
    def update_user(actor: User, user_id: int, data: dict) -> User:
        UserService.check_access(actor, user_id)
        user = UserService.get_user(user_id)

        if user.role == UserRole.ADMIN and actor.role != UserRole.ADMIN:
            raise PermissionDeniedError("Only administrators can edit administrator accounts")

        if "phone_number" in data:
            if actor.role != UserRole.ADMIN:
                raise ServiceError("Phone number cannot be changed")
            taken = User.query.filter(
                User.phone_number == data["phone_number"], User.id != user_id
            ).first()
            if taken:
                raise ServiceError("Phone number already in use")
            user.phone_number = data["phone_number"]

        if "role" in data:
            if actor.role != UserRole.ADMIN:
                raise PermissionDeniedError("Only administrators can change roles")
            user.role = UserRole(data["role"])

        for field in ("name", "address", "city", "country"):
            if field in data:
                setattr(user, field, data[field])

        if data.get("password"):
            user.set_password(data["password"])

        db.session.commit()
        return user

    @staticmethod
    def set_active(actor: User, user_id: int, is_active: bool) -> User:
        user = UserService.get_user(user_id)
        if not is_active and user.id == actor.id:
            raise ServiceError("Cannot deactivate your own account")
        user.is_active = is_active
        db.session.commit()
        return user

    @staticmethod
    def get_dashboard_stats(user: User) -> dict:
        """Numbers and recent orders shown on a customer's home page"""
        orders = (
            Order.query.filter_by(user_id=user.id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )

        def summarize(order):
            price = float(order.price or 0)
            return {
                "id": order.id,
                "title": order.title,
                "status": order.status.value,
                "price": price,
                "quantity": order.quantity,
                "created_at": order.created_at.isoformat(),
                "total": round(price * order.quantity, 2),
                "items": order.quantity,
            }

        delivered = sum(1 for o in orders if o.status == OrderStatus.DELIVERED)

        return {
            "stats": {
                "total_orders": len(orders),
                "delivered_orders": delivered,
                "saved_addresses": 1 if user.address else 0,
                "wishlist_items": 0,
            },
            "user_info": {
                "address": user.address,
                "city": user.city,
                "country": user.country,
                "phone_number": user.phone_number,
                "created_at": user.created_at.isoformat(),
                "role": user.role.value,
                "is_active": user.is_active,
            },
            "recent_orders": [summarize(o) for o in orders[:3]],
            "all_orders": [summarize(o) for o in orders],
        }

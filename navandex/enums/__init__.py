from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    WORKER = "WORKER"
    CUSTOMER = "CUSTOMER"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    CONFIRMED = "CONFIRMED"
    PURCHASED = "PURCHASED"
    SHIPPED = "SHIPPED"
    RECEIVED_IN_TURKEY = "RECEIVED_IN_TURKEY"
    DELIVERED_TO_WAREHOUSE = "DELIVERED_TO_WAREHOUSE"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    PREPAID = "PREPAID"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


class InvoiceStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class AnnouncementCategory(str, Enum):
    INFO = "INFO"
    UPDATE = "UPDATE"
    ALERT = "ALERT"


STAFF_ROLES = (UserRole.ADMIN, UserRole.WORKER)

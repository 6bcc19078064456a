from navandex.enums import OrderStatus
from navandex.exceptions import InvalidTransitionError, ServiceError

ACTIVE_ORDER_STATUSES = (
    OrderStatus.CONFIRMED,
    OrderStatus.PURCHASED,
    OrderStatus.RECEIVED_IN_TURKEY,
    OrderStatus.DELIVERED_TO_WAREHOUSE,
)

# DELIVERED_TO_WAREHOUSE appears in both groups
PASSIVE_ORDER_STATUSES = (
    OrderStatus.DELIVERED,
    OrderStatus.DELIVERED_TO_WAREHOUSE,
    OrderStatus.CANCELLED,
    OrderStatus.RETURNED,
)

STAFF_ONLY_STATUSES = (
    OrderStatus.PURCHASED,
    OrderStatus.RECEIVED_IN_TURKEY,
    OrderStatus.DELIVERED_TO_WAREHOUSE,
)

NOTIFICATION_STATUSES = (
    OrderStatus.PROCESSING,
    OrderStatus.CANCELLED,
    OrderStatus.DELIVERED_TO_WAREHOUSE,
)

# Statuses tracked by the per-customer stats endpoint when none is given
DEFAULT_TRACKED_STATUSES = (
    OrderStatus.RECEIVED_IN_TURKEY,
    OrderStatus.PURCHASED,
    OrderStatus.DELIVERED_TO_WAREHOUSE,
)

# Used by reports to bucket monthly trends
COMPLETED_STATUSES = (OrderStatus.DELIVERED, OrderStatus.COMPLETED)
IN_PROGRESS_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.CONFIRMED,
    OrderStatus.PURCHASED,
    OrderStatus.SHIPPED,
    OrderStatus.RECEIVED_IN_TURKEY,
    OrderStatus.DELIVERED_TO_WAREHOUSE,
)

STATUS_FILTERS = [
    {"value": "ALL", "label": "All Orders", "color": "gray"},
    {"value": "ACTIVE", "label": "Active", "color": "emerald"},
    {"value": "PASSIVE", "label": "Passive", "color": "gray"},
    {"value": "PENDING", "label": "Pending", "color": "yellow"},
    {"value": "PROCESSING", "label": "Processing", "color": "blue"},
    {"value": "CONFIRMED", "label": "Confirmed", "color": "emerald"},
    {"value": "PURCHASED", "label": "Purchased", "color": "pink"},
    {"value": "SHIPPED", "label": "Shipped", "color": "purple"},
    {"value": "DELIVERED", "label": "Delivered", "color": "green"},
    {"value": "CANCELLED", "label": "Cancelled", "color": "red"},
    {"value": "RETURNED", "label": "Returned", "color": "orange"},
    {"value": "RECEIVED_IN_TURKEY", "label": "Received in Turkey", "color": "indigo"},
    {"value": "DELIVERED_TO_WAREHOUSE", "label": "Delivered to Warehouse", "color": "purple"},
]

# Only restricted states are listed; anything else may move freely
RESTRICTED_TRANSITIONS = {
    OrderStatus.CANCELLED: (),
    OrderStatus.RETURNED: (),
    OrderStatus.DELIVERED: (OrderStatus.RETURNED, OrderStatus.COMPLETED),
    OrderStatus.COMPLETED: (OrderStatus.RETURNED,),
}


def parse_status(value) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError:
        raise ServiceError(f"Invalid order status: {value}")


def statuses_for_filter(status_filter):
    """
    Resolve a status filter value to the statuses it matches.

    Returns None for ALL (no filtering), a tuple for ACTIVE / PASSIVE,
    and a one-element tuple for a single status.
    """
    if not status_filter:
        return None

    value = str(status_filter).strip().upper()
    if value == "ALL":
        return None
    if value == "ACTIVE":
        return ACTIVE_ORDER_STATUSES
    if value == "PASSIVE":
        return PASSIVE_ORDER_STATUSES
    return (parse_status(value),)


def matches_status_filter(status, status_filter) -> bool:
    statuses = statuses_for_filter(status_filter)
    return statuses is None or parse_status(status) in statuses


def can_transition(current, new) -> bool:
    current = parse_status(current) if current is not None else None
    new = parse_status(new)
    if current is None or current == new:
        return True
    allowed = RESTRICTED_TRANSITIONS.get(current)
    return allowed is None or new in allowed


def check_transition(current, new):
    if not can_transition(current, new):
        raise InvalidTransitionError(current, new)


def is_staff_only(status) -> bool:
    return parse_status(status) in STAFF_ONLY_STATUSES


def build_history_note(status=None, order_number=None, prepaid=None) -> str:
    """Human readable note stored with each status history row"""
    if status:
        note = f"Order status updated to {parse_status(status).value}"
    else:
        note = "Order updated"
    if order_number:
        note += f" with order number {order_number}"
    if prepaid is not None:
        note += f" and marked as {'prepaid' if prepaid else 'not prepaid'}"
    return note

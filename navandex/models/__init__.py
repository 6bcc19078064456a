from .user import User
from .order import Order, OrderStatusHistory
from .invoice import Invoice
from .content import Announcement, Banner, ExchangeRate
from .scan import ScanSession, ScanEntry, ScannedBarcode

__all__ = [
    "User",
    "Order",
    "OrderStatusHistory",
    "Invoice",
    "Announcement",
    "Banner",
    "ExchangeRate",
    "ScanSession",
    "ScanEntry",
    "ScannedBarcode",
]

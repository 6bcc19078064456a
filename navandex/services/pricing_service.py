from decimal import Decimal, ROUND_HALF_UP
from navandex.models.content import ExchangeRate
from navandex.extensions import db
from navandex.exceptions import ServiceError

CENT = Decimal("0.01")
CURRENCY_SYMBOLS = {"USD": "$", "TRY": "₺"}


class PricingService:
    """Exchange rates and TRY <-> USD conversion"""

    @staticmethod
    def list_rates():
        return ExchangeRate.query.order_by(
            ExchangeRate.created_at.desc(), ExchangeRate.id.desc()
        ).all()

    @staticmethod
    def add_rate(rate: Decimal) -> ExchangeRate:
        if rate is None or Decimal(rate) <= 0:
            raise ServiceError("Invalid rate provided")
        exchange_rate = ExchangeRate(rate=Decimal(rate))
        db.session.add(exchange_rate)
        db.session.commit()
        return exchange_rate

    @staticmethod
    def get_latest_rate() -> Decimal:
        rate = ExchangeRate.query.order_by(
            ExchangeRate.created_at.desc(), ExchangeRate.id.desc()
        ).first()
        if not rate:
            raise ServiceError("Exchange rate not available")
        return Decimal(rate.rate)

    @staticmethod
    def convert_try_to_usd(amount, rate: Decimal = None) -> Decimal:
        rate = rate if rate is not None else PricingService.get_latest_rate()
        return (Decimal(amount) / Decimal(rate)).quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def convert_usd_to_try(amount, rate: Decimal = None) -> Decimal:
        rate = rate if rate is not None else PricingService.get_latest_rate()
        return (Decimal(amount) * Decimal(rate)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_price(amount, currency: str = "USD") -> str:
    """Format an amount the way invoices and labels print it"""
    currency = currency.upper()
    if currency not in CURRENCY_SYMBOLS:
        raise ValueError(f"Unsupported currency: {currency}")
    value = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOLS[currency]}{abs(value):,.2f}"

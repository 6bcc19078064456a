from .user_schema import (
    UserLoginSchema,
    UserRegisterSchema,
    UserCreateSchema,
    UserUpdateSchema,
)
from .order_schema import (
    OrderCreateSchema,
    OrderUpdateSchema,
    OrderPriceSchema,
    BulkOrderUpdateSchema,
    InvoiceGenerateSchema,
    InvoiceCreateSchema,
    ScanSchema,
    ExchangeRateSchema,
)
from .content_schema import (
    AnnouncementCreateSchema,
    AnnouncementUpdateSchema,
    BannerCreateSchema,
    BannerUpdateSchema,
    ScrapeSchema,
)

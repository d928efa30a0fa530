"""SQLAlchemy models for the kiosk POS."""

from kiosk.models.user import User
from kiosk.models.profile import Profile
from kiosk.models.category import Category
from kiosk.models.product import Product
from kiosk.models.subscription import Subscription, SubscriptionStatus
from kiosk.models.sale import Sale, SaleDetail, PaymentMethod

__all__ = [
    "User",
    "Profile",
    "Category",
    "Product",
    "Subscription",
    "SubscriptionStatus",
    "Sale",
    "SaleDetail",
    "PaymentMethod",
]

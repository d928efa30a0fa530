from kiosk.schemas.auth import (
    LoginRequest, TokenResponse, RegisterRequest, RegisterResponse, MeResponse,
)
from kiosk.schemas.profile import ProfileUpdate, ProfileResponse
from kiosk.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryResponse, CategoryListResponse,
)
from kiosk.schemas.product import (
    ProductCreate, ProductUpdate, ProductResponse, ProductListResponse,
)
from kiosk.schemas.subscription import SubscriptionResponse
from kiosk.schemas.sale import (
    SaleCreate, SaleResponse, SaleListResponse,
    SaleDetailCreate, SaleDetailUpdate, SaleDetailResponse,
)

__all__ = [
    "LoginRequest", "TokenResponse", "RegisterRequest", "RegisterResponse", "MeResponse",
    "ProfileUpdate", "ProfileResponse",
    "CategoryCreate", "CategoryUpdate", "CategoryResponse", "CategoryListResponse",
    "ProductCreate", "ProductUpdate", "ProductResponse", "ProductListResponse",
    "SubscriptionResponse",
    "SaleCreate", "SaleResponse", "SaleListResponse",
    "SaleDetailCreate", "SaleDetailUpdate", "SaleDetailResponse",
]

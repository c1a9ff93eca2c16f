"""
Record schemas stored in the catalog collections.

Category and Seller are embedded by value inside every CatalogItem at write
time. Nothing here resolves references across collections: renaming a
category does not touch items that were stored with the old copy.

Stored JSON uses camelCase keys (``reviewCount``, ``isOnSale``...) so that
documents written by the mobile app load unchanged; attribute access is
snake_case and both spellings are accepted on input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    SENT = "sent"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class NotificationType(str, Enum):
    ORDER = "order"
    OFFER = "offer"
    ACTIVITY = "activity"
    PROMOTION = "promotion"
    STOCK = "stock"
    REVIEW = "review"
    SALE = "sale"
    CART = "cart"
    ARRIVAL = "arrival"


# ---------------------------------------------------------------------------
# Embedded value objects
# ---------------------------------------------------------------------------

class Category(RecordModel):
    id: str
    name: str
    icon: str = ""
    image: str = ""
    description: Optional[str] = None
    product_count: Optional[int] = None
    subcategories: List[str] = Field(default_factory=list)


class Seller(RecordModel):
    id: str
    name: str
    avatar: str = ""
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    is_verified: bool = False
    followers_count: int = Field(default=0, ge=0)
    description: str = ""
    banner: Optional[str] = None
    location: str = ""
    joined_date: Optional[datetime] = None
    order_count: Optional[int] = None


class Color(RecordModel):
    name: str
    hex: str
    image: Optional[str] = None


class Address(RecordModel):
    id: str
    type: str = "home"                   # home / work / other
    name: str
    street: str
    city: str
    state: str = ""
    zip_code: str = ""
    country: str
    phone: Optional[str] = None
    is_default: bool = False


# ---------------------------------------------------------------------------
# Collection records
# ---------------------------------------------------------------------------

class CatalogItem(RecordModel):
    id: str
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    original_price: Optional[Decimal] = Field(default=None, ge=0)
    discount_percentage: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    category: Category
    subcategory: str = ""
    brand: str = ""
    seller: Seller
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    # in_stock=False does not force stock_count=0; callers own that rule.
    in_stock: bool = True
    stock_count: int = Field(default=0, ge=0)
    sizes: Optional[List[str]] = None
    colors: Optional[List[Color]] = None
    tags: List[str] = Field(default_factory=list)
    is_new: bool = False
    is_featured: bool = False
    is_on_sale: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    order_count: Optional[int] = None


class CartItem(RecordModel):
    id: str
    user_id: str
    product: CatalogItem
    quantity: int = Field(ge=1)
    selected_size: Optional[str] = None
    selected_color: Optional[Color] = None
    price: Decimal = Field(ge=0)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class OrderRecord(RecordModel):
    id: str
    user_id: str
    items: List[CartItem] = Field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    subtotal: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    shipping: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    promo_code: Optional[str] = None
    shipping_address: Optional[Address] = None
    billing_address: Optional[Address] = None
    tracking_number: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ReviewRecord(RecordModel):
    id: str
    user_id: str
    product_id: str
    user_name: Optional[str] = None
    rating: float = Field(ge=0, le=5)
    title: str = ""
    comment: str = ""
    images: List[str] = Field(default_factory=list)
    is_verified: bool = False
    helpful: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class NotificationRecord(RecordModel):
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    data: Optional[Dict[str, Any]] = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class NotificationPreferences(RecordModel):
    email: bool = True
    push: bool = True
    sms: bool = False


class UserPreferences(RecordModel):
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    language: str = "en"
    currency: str = "USD"


class User(RecordModel):
    # Credentials and payment methods are not stored on the user record.
    id: str
    email: str
    name: str
    avatar: Optional[str] = None
    phone: Optional[str] = None
    birthday: Optional[str] = None
    addresses: List[Address] = Field(default_factory=list)
    wishlist: List[str] = Field(default_factory=list)
    preferences: Optional[UserPreferences] = None
    followers_count: Optional[int] = Field(default=None, ge=0)
    followings_count: Optional[int] = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class StoryMediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class Story(RecordModel):
    id: str
    user_id: str
    seller_id: Optional[str] = None
    user: User
    type: StoryMediaType = StoryMediaType.IMAGE
    media: str
    product: Optional[CatalogItem] = None
    duration: int = Field(default=5, ge=0)      # seconds
    is_viewed: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime

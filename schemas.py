"""
Database Schemas for the Kaaya beauty store

Each Pydantic model represents a collection in MongoDB.
Collection name is the lowercase class name.

Documents are stored with camelCase keys (the JSON wire format); Python code
uses the snake_case attribute names.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

OrderStatus = Literal["confirmed", "processing", "shipped", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "paid", "failed", "refunded"]
UserRole = Literal["admin", "manager", "customer"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def reconcile_stock(model: BaseModel) -> BaseModel:
    """stockCount wins: inStock is derived from it whenever it is sent."""
    stock_count = getattr(model, "stock_count", None)
    if stock_count is None:
        return model
    expected = stock_count > 0
    if "in_stock" in model.model_fields_set and model.in_stock is not None and model.in_stock != expected:
        raise ValueError("inStock must match stockCount")
    model.in_stock = expected
    return model


class User(CamelModel):
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password hash")
    role: UserRole = Field("customer", description="admin, manager or customer")
    is_active: bool = Field(True)


class Product(CamelModel):
    name: str = Field(..., description="Product name")
    description: str = Field(..., description="Product description")
    price: float = Field(..., ge=0, description="Selling price")
    original_price: Optional[float] = Field(None, ge=0, description="Price before discount")
    discount: Optional[float] = Field(None, ge=0, le=100, description="Discount percent")
    category: str = Field(..., description="Category name")
    subcategory: Optional[str] = Field(None, description="Subcategory name")
    brand: str = Field(..., description="Brand")
    image: str = Field(..., description="Main image URL")
    images: List[str] = Field(default_factory=list)
    in_stock: bool = Field(True)
    stock_count: Optional[int] = Field(None, ge=0, description="Units in stock; drives inStock when set")
    rating: float = Field(0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    tags: List[str] = Field(default_factory=list)
    is_active: bool = Field(True)
    ingredients: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    how_to_use: Optional[str] = None
    skin_type: List[str] = Field(default_factory=list)
    size: Optional[str] = None
    shade: Optional[str] = None

    @model_validator(mode="after")
    def stock_consistent(self):
        return reconcile_stock(self)


class Category(CamelModel):
    name: str = Field(..., description="Unique category name")
    slug: str = Field(..., description="Unique URL slug")
    description: str = Field(..., description="Category description")
    image: Optional[str] = Field(None, description="Image URL")
    is_active: bool = Field(True)
    sort_order: int = Field(0)
    parent_id: Optional[str] = Field(None, description="Parent category id for subcategories")


class Customer(CamelModel):
    name: str
    email: str
    phone: Optional[str] = None


class OrderItem(CamelModel):
    id: str
    name: str
    image: Optional[str] = None
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)


class ShippingAddress(CamelModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str


class Order(CamelModel):
    order_number: str
    customer: Customer
    items: List[OrderItem]
    total: float = Field(..., ge=0)
    status: OrderStatus = "confirmed"
    payment_status: PaymentStatus = "pending"
    shipping_address: ShippingAddress
    order_date: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Settings sections

class GeneralSettings(CamelModel):
    site_name: str = "Kaaya Beauty"
    site_description: str = "Your ultimate destination for beauty and cosmetics"
    contact_email: str = "support@kaaya.com"
    contact_phone: str = "+91 9876543210"
    currency: str = "INR"
    timezone: str = "Asia/Kolkata"
    language: str = "en"


class NotificationSettings(CamelModel):
    email_notifications: bool = True
    sms_notifications: bool = False
    order_updates: bool = True
    low_stock_alerts: bool = True
    new_customer_alerts: bool = True
    daily_reports: bool = True
    weekly_reports: bool = False


class RazorpaySettings(CamelModel):
    enabled: bool = True
    key_id: str = "rzp_test_***"
    key_secret: str = "***"


class PaypalSettings(CamelModel):
    enabled: bool = False
    client_id: str = ""
    client_secret: str = ""


class StripeSettings(CamelModel):
    enabled: bool = False
    publishable_key: str = ""
    secret_key: str = ""


class CodSettings(CamelModel):
    enabled: bool = True
    min_amount: float = Field(0, ge=0)
    max_amount: float = Field(5000, ge=0)


class PaymentSettings(CamelModel):
    razorpay: RazorpaySettings = Field(default_factory=RazorpaySettings)
    paypal: PaypalSettings = Field(default_factory=PaypalSettings)
    stripe: StripeSettings = Field(default_factory=StripeSettings)
    cod: CodSettings = Field(default_factory=CodSettings)


class ShippingMethod(CamelModel):
    enabled: bool = True
    rate: float = Field(0, ge=0)
    estimated_days: str = ""


class ShippingZone(CamelModel):
    name: str
    rate: float = Field(..., ge=0)
    days: str


class ShippingSettings(CamelModel):
    free_shipping_threshold: float = Field(999, ge=0)
    standard_shipping: ShippingMethod = Field(
        default_factory=lambda: ShippingMethod(rate=99, estimated_days="3-7"))
    express_shipping: ShippingMethod = Field(
        default_factory=lambda: ShippingMethod(rate=199, estimated_days="1-2"))
    zones: List[ShippingZone] = Field(default_factory=lambda: [
        ShippingZone(name="Metro Cities", rate=99, days="2-4"),
        ShippingZone(name="Tier 2 Cities", rate=149, days="4-7"),
        ShippingZone(name="Remote Areas", rate=199, days="7-14"),
    ])


class SecuritySettings(CamelModel):
    two_factor_auth: bool = False
    session_timeout: int = Field(30, ge=1)
    login_attempts: int = Field(5, ge=1)
    password_expiry: int = Field(90, ge=0)
    require_strong_password: bool = True


class Settings(CamelModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    payment: PaymentSettings = Field(default_factory=PaymentSettings)
    shipping: ShippingSettings = Field(default_factory=ShippingSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

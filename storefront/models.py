# Filename: storefront/models.py
# Storefront records as pydantic models.
#  - Product / Review / CartItem / User mirror what the storefront screens show.
#  - OfferSuggestion is the shape returned by the offer generator.
#  - AppState is the whole session: catalog, cart and signed-in user.

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    RUNNING = "Running"
    LIFESTYLE = "Lifestyle"
    BASKETBALL = "Basketball"
    CUSTOM = "Custom"


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class ImageSize(str, Enum):
    ONE_K = "1K"
    TWO_K = "2K"
    FOUR_K = "4K"


class PaymentMethod(str, Enum):
    MPESA = "mpesa"
    CARD = "card"


class StoreModel(BaseModel):
    """Shared config: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Review(StoreModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., description="Unique within the product's review list")
    user_name: str = Field(..., description="Author name")
    rating: int = Field(..., ge=1, le=5, description="Star rating 1-5")
    comment: str = Field(..., description="Review text")
    date: dt.date = Field(..., description="Submission date (YYYY-MM-DD)")


class Product(StoreModel):
    """
    A sellable sneaker.
    - original_price: pre-discount price, only set when discounted
    - reviews: denormalized count; equals len(reviews_list) whenever the list is tracked
    - sales: optional counter used for "top sellers" ranking
    """

    id: str = Field(..., description="Unique product identifier")
    name: str
    brand: str
    price: float = Field(..., ge=0, allow_inf_nan=False)
    original_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    description: str = ""
    image: str = ""
    sizes: List[float] = Field(..., min_length=1, description="Available sizes")
    category: Category
    rating: float = Field(0, ge=0, le=5)
    reviews: int = Field(0, ge=0, description="Review count")
    reviews_list: Optional[List[Review]] = None
    sales: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_consistency(self) -> "Product":
        if any(s <= 0 for s in self.sizes):
            raise ValueError("sizes must be positive numbers")
        if len(set(self.sizes)) != len(self.sizes):
            raise ValueError("sizes must not repeat")
        if self.original_price is not None and self.original_price < self.price:
            raise ValueError("original_price must not be lower than price")
        if self.reviews_list is not None and self.reviews != len(self.reviews_list):
            raise ValueError("review count must match the number of reviews")
        return self


class CartItem(Product):
    selected_size: float
    quantity: int = Field(..., ge=1)

    @model_validator(mode="after")
    def check_size(self) -> "CartItem":
        if self.selected_size not in self.sizes:
            raise ValueError(f"size {self.selected_size:g} is not available for product {self.id}")
        return self

    @property
    def key(self) -> tuple:
        return (self.id, self.selected_size)


class CartTotals(StoreModel):
    subtotal: float
    shipping: float
    total: float


class User(StoreModel):
    id: str
    name: str
    email: str
    role: Role = Role.USER


class OfferSuggestion(StoreModel):
    product_id: str
    suggested_price: float = Field(..., ge=0, allow_inf_nan=False)
    reasoning: str = ""


class Order(StoreModel):
    id: str
    items: List[CartItem]
    totals: CartTotals
    method: PaymentMethod
    phone: Optional[str] = None
    status: str = "paid"
    created_at: dt.datetime


class AppState(StoreModel):
    products: List[Product] = Field(default_factory=list)
    cart: List[CartItem] = Field(default_factory=list)
    user: Optional[User] = None

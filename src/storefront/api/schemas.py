"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the internal Protean
commands. Request fields are lenient so that missing or malformed values
reach the domain and come back as its validation errors.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CategorySummary(BaseModel):
    id: str
    name: str


class UserSummary(BaseModel):
    id: str
    name: str
    email: str


class ProductSummary(BaseModel):
    id: str
    name: str
    price: float


class DeletedResponse(BaseModel):
    status: str = "ok"
    message: str


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    name: str | None = None
    description: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Electronics",
                    "description": "Phones, laptops and accessories",
                }
            ]
        }
    }


class UpdateCategoryRequest(BaseModel):
    name: str | None = None
    description: str | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str
    created_at: datetime | None = None


class CategoryListResponse(BaseModel):
    count: int
    categories: list[CategoryResponse]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    quantity: int | None = None
    category_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Mouse",
                    "description": "2.4GHz ergonomic mouse",
                    "price": 24.99,
                    "quantity": 150,
                    "category_id": "5b0c3b8e-3f5e-4f43-8d1a-2f4a5a6b7c8d",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    category_id: str | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    quantity: int
    category_id: str
    category: CategorySummary | None = None
    created_at: datetime | None = None


class ProductListResponse(BaseModel):
    count: int
    products: list[ProductResponse]
    message: str | None = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    name: str | None = None
    email: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ada Lovelace",
                    "email": "ada@example.com",
                }
            ]
        }
    }


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime | None = None


class UserListResponse(BaseModel):
    count: int
    users: list[UserResponse]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    user_id: str | None = None
    line_items: list[Any] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                    "line_items": [
                        {"product_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7", "quantity": 2},
                    ],
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"status": "Shipped"}]}}


class OrderLineResponse(BaseModel):
    product_id: str
    position: int
    product: ProductSummary | None = None
    product_name: str
    unit_price: float
    quantity: int
    line_total: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    user: UserSummary | None = None
    lines: list[OrderLineResponse]
    total_amount: float
    status: str
    order_date: datetime | None = None


class OrderListResponse(BaseModel):
    count: int
    orders: list[OrderResponse]
    message: str | None = None

"""Pydantic request/response schemas for the storefront API.

Request models only shape the payload; business validation (empty names,
negative prices, empty item lists) is left to the components so it is
reported as a 400 with the component's message.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.timestamps import to_rfc3339
from storefront.domain.model.user import User, UserProfile

# --- Product schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Trail Running Shoe",
                    "description": "Lightweight shoe with a rock plate.",
                    "price": 129.99,
                    "stock_quantity": 40,
                    "category": "footwear",
                }
            ]
        }
    }

    name: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    stock_quantity: int = 0
    category: str = ""


class UpdateProductRequest(BaseModel):
    name: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    category: str = ""


class UpdateStockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": -3}]}}

    quantity: int


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    stock_quantity: int
    category: str
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, product: Product) -> ProductResponse:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price.amount),
            stock_quantity=product.stock_quantity,
            category=product.category,
            created_at=to_rfc3339(product.created_at),
            updated_at=to_rfc3339(product.updated_at),
        )


class StockResponse(BaseModel):
    id: str
    name: str
    stock_quantity: int


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int


# --- Order schemas ---


class OrderItemPayload(BaseModel):
    product_id: str = ""
    quantity: int
    price: Decimal


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "4f1c2a9e0b7d4e13a6c58d2f9e0b1a37",
                    "items": [
                        {"product_id": "9a8b7c6d5e4f40312a1b2c3d4e5f6a7b", "quantity": 2, "price": 10.0},
                    ],
                }
            ]
        }
    }

    user_id: str = ""
    items: list[OrderItemPayload] = Field(default_factory=list)


class UpdateOrderRequest(BaseModel):
    status: str = ""


class OrderItemResponse(BaseModel):
    product_id: str
    quantity: int
    price: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    status: str
    total_amount: float
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, order: Order) -> OrderResponse:
        return cls(
            id=order.id,
            user_id=order.user_id,
            items=[
                OrderItemResponse(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    price=float(item.unit_price.amount),
                )
                for item in order.items
            ],
            status=order.status,
            total_amount=float(order.total_amount.amount),
            created_at=to_rfc3339(order.created_at),
            updated_at=to_rfc3339(order.updated_at),
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int


# --- User schemas ---


class UserRequest(BaseModel):
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: str = "customer"
    phone: str = ""
    address: str = ""

    def to_profile(self) -> UserProfile:
        return UserProfile.of(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            role=self.role,
            phone=self.phone,
            address=self.address,
        )


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    phone: str
    address: str
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        profile = user.profile
        return cls(
            id=user.id,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            role=profile.role,
            phone=profile.phone,
            address=profile.address,
            created_at=to_rfc3339(user.created_at),
            updated_at=to_rfc3339(user.updated_at),
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]
    total: int


class DeleteUserResponse(BaseModel):
    success: bool = True
    message: str = "user deleted successfully"

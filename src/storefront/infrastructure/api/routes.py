"""FastAPI endpoints for products, orders and users.

Handlers are plain ``def`` functions, so FastAPI runs each request on its
thread pool; components and stores are safe to share across threads.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from storefront.application.dto import OrderItemSpec
from storefront.infrastructure.api.schemas import (
    CreateOrderRequest,
    CreateProductRequest,
    DeleteUserResponse,
    OrderListResponse,
    OrderResponse,
    ProductListResponse,
    ProductResponse,
    StockResponse,
    UpdateOrderRequest,
    UpdateProductRequest,
    UpdateStockRequest,
    UserListResponse,
    UserRequest,
    UserResponse,
)
from storefront.infrastructure.bootstrap import Services

product_router = APIRouter(prefix="/products", tags=["products"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
user_router = APIRouter(prefix="/users", tags=["users"])


def get_services(request: Request) -> Services:
    return request.app.state.services


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse)
def create_product(body: CreateProductRequest, services: Services = Depends(get_services)):
    product = services.catalog.create(
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        category=body.category,
    )
    return ProductResponse.from_domain(product)


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, services: Services = Depends(get_services)):
    return ProductResponse.from_domain(services.catalog.get(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    services: Services = Depends(get_services),
):
    product = services.catalog.update(
        product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
    )
    return ProductResponse.from_domain(product)


@product_router.put("/{product_id}/stock", response_model=StockResponse)
def update_stock(
    product_id: str,
    body: UpdateStockRequest,
    services: Services = Depends(get_services),
):
    product = services.catalog.adjust_stock(product_id, body.quantity)
    return StockResponse(id=product.id, name=product.name, stock_quantity=product.stock_quantity)


@product_router.get("", response_model=ProductListResponse)
def list_products(
    category: str = "",
    page: int = 1,
    limit: int = 10,
    services: Services = Depends(get_services),
):
    result = services.catalog.list(category, page, limit)
    return ProductListResponse(
        products=[ProductResponse.from_domain(p) for p in result.items],
        total=result.total,
    )


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
def create_order(body: CreateOrderRequest, services: Services = Depends(get_services)):
    specs = [
        OrderItemSpec(product_id=item.product_id, quantity=item.quantity, price=item.price)
        for item in body.items
    ]
    return OrderResponse.from_domain(services.orders.create(body.user_id, specs))


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, services: Services = Depends(get_services)):
    return OrderResponse.from_domain(services.orders.get(order_id))


@order_router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    services: Services = Depends(get_services),
):
    return OrderResponse.from_domain(services.orders.update_status(order_id, body.status))


@order_router.get("", response_model=OrderListResponse)
def list_orders(
    user_id: str = "",
    page: int = 1,
    limit: int = 10,
    services: Services = Depends(get_services),
):
    result = services.orders.list(user_id, page, limit)
    return OrderListResponse(
        orders=[OrderResponse.from_domain(o) for o in result.items],
        total=result.total,
    )


# --- User endpoints ---


@user_router.post("", status_code=201, response_model=UserResponse)
def create_user(body: UserRequest, services: Services = Depends(get_services)):
    return UserResponse.from_domain(services.users.create(body.to_profile()))


@user_router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, services: Services = Depends(get_services)):
    return UserResponse.from_domain(services.users.get(user_id))


@user_router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, body: UserRequest, services: Services = Depends(get_services)):
    return UserResponse.from_domain(services.users.update(user_id, body.to_profile()))


@user_router.delete("/{user_id}", response_model=DeleteUserResponse)
def delete_user(user_id: str, services: Services = Depends(get_services)):
    services.users.delete(user_id)
    return DeleteUserResponse()


@user_router.get("", response_model=UserListResponse)
def list_users(
    role: str = "",
    page: int = 1,
    limit: int = 10,
    services: Services = Depends(get_services),
):
    result = services.users.list(role, page, limit)
    return UserListResponse(
        users=[UserResponse.from_domain(u) for u in result.items],
        total=result.total,
    )

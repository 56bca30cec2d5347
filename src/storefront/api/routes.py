"""FastAPI routes for the Storefront: categories, products, users and orders."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    CategoryListResponse,
    CategoryResponse,
    CategorySummary,
    CreateCategoryRequest,
    CreateProductRequest,
    DeletedResponse,
    OrderLineResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductListResponse,
    ProductResponse,
    ProductSummary,
    RegisterUserRequest,
    UpdateCategoryRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UserListResponse,
    UserResponse,
    UserSummary,
)
from storefront.category.category import Category
from storefront.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.category.queries import get_category, list_categories
from storefront.order.deletion import DeleteOrder
from storefront.order.placement import PlaceOrder
from storefront.order.queries import get_order, list_orders, list_orders_by_user
from storefront.order.status import UpdateOrderStatus
from storefront.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.product.product import Product
from storefront.product.queries import get_product, list_products, list_products_by_category
from storefront.shared import references
from storefront.user.queries import get_user, list_users
from storefront.user.registration import DeleteUser, RegisterUser
from storefront.user.user import User


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------
def _resolved_or_none(aggregate_cls, identifier):
    result = references.resolve(aggregate_cls, identifier)
    return None if isinstance(result, references.Resolution) else result


def _category_response(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        description=category.description,
        created_at=category.created_at,
    )


def _product_response(product) -> ProductResponse:
    category = _resolved_or_none(Category, product.category_id)
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        quantity=product.quantity,
        category_id=str(product.category_id),
        category=CategorySummary(id=str(category.id), name=category.name) if category else None,
        created_at=product.created_at,
    )


def _user_response(user) -> UserResponse:
    return UserResponse(id=str(user.id), name=user.name, email=user.email, created_at=user.created_at)


def _order_response(order) -> OrderResponse:
    user = _resolved_or_none(User, order.user_id)

    lines = []
    for line in order.ordered_lines:
        product = _resolved_or_none(Product, line.product_id)
        lines.append(
            OrderLineResponse(
                product_id=str(line.product_id),
                product=ProductSummary(id=str(product.id), name=product.name, price=product.price)
                if product
                else None,
                product_name=line.product_name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                position=line.position,
                line_total=line.line_total,
            )
        )

    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        user=UserSummary(id=str(user.id), name=user.name, email=user.email) if user else None,
        lines=lines,
        total_amount=order.total_amount,
        status=order.status,
        order_date=order.order_date,
    )


# ---------------------------------------------------------------------------
# Category Router
# ---------------------------------------------------------------------------
category_router = APIRouter(prefix="/categories", tags=["categories"])


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryResponse:
    command = CreateCategory(name=body.name, description=body.description)
    category_id = current_domain.process(command, asynchronous=False)
    return _category_response(get_category(category_id))


@category_router.get("", response_model=CategoryListResponse)
async def read_categories() -> CategoryListResponse:
    categories = list_categories()
    return CategoryListResponse(
        count=len(categories),
        categories=[_category_response(category) for category in categories],
    )


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def read_category(category_id: str) -> CategoryResponse:
    return _category_response(get_category(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> CategoryResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
    )
    current_domain.process(command, asynchronous=False)
    return _category_response(get_category(category_id))


@category_router.delete("/{category_id}", response_model=DeletedResponse)
async def delete_category(category_id: str) -> DeletedResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return DeletedResponse(message="Category deleted")


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        quantity=body.quantity,
        category_id=body.category_id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product_response(get_product(product_id))


@product_router.get("", response_model=ProductListResponse)
async def read_products() -> ProductListResponse:
    products = list_products()
    return ProductListResponse(
        count=len(products),
        products=[_product_response(product) for product in products],
    )


@product_router.get("/category/{category_id}", response_model=ProductListResponse)
async def read_products_by_category(category_id: str) -> ProductListResponse:
    products = list_products_by_category(category_id)
    return ProductListResponse(
        count=len(products),
        products=[_product_response(product) for product in products],
        message=None if products else "No products found in this category",
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> ProductResponse:
    return _product_response(get_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category_id=body.category_id,
    )
    current_domain.process(command, asynchronous=False)
    return _product_response(get_product(product_id))


@product_router.delete("/{product_id}", response_model=DeletedResponse)
async def delete_product(product_id: str) -> DeletedResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return DeletedResponse(message="Product deleted")


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=UserResponse)
async def register_user(body: RegisterUserRequest) -> UserResponse:
    user_id = current_domain.process(RegisterUser(name=body.name, email=body.email), asynchronous=False)
    return _user_response(get_user(user_id))


@user_router.get("", response_model=UserListResponse)
async def read_users() -> UserListResponse:
    users = list_users()
    return UserListResponse(count=len(users), users=[_user_response(user) for user in users])


@user_router.get("/{user_id}", response_model=UserResponse)
async def read_user(user_id: str) -> UserResponse:
    return _user_response(get_user(user_id))


@user_router.delete("/{user_id}", response_model=DeletedResponse)
async def delete_user(user_id: str) -> DeletedResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return DeletedResponse(message="User deleted")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest) -> OrderResponse:
    command = PlaceOrder(
        user_id=body.user_id,
        line_items=json.dumps(body.line_items) if body.line_items is not None else None,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_response(get_order(order_id))


@order_router.get("", response_model=OrderListResponse)
async def read_orders() -> OrderListResponse:
    orders = list_orders()
    return OrderListResponse(count=len(orders), orders=[_order_response(order) for order in orders])


@order_router.get("/user/{user_id}", response_model=OrderListResponse)
async def read_orders_by_user(user_id: str) -> OrderListResponse:
    orders = list_orders_by_user(user_id)
    return OrderListResponse(
        count=len(orders),
        orders=[_order_response(order) for order in orders],
        message=None if orders else "No orders found for this user",
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str) -> OrderResponse:
    return _order_response(get_order(order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return _order_response(get_order(order_id))


@order_router.delete("/{order_id}", response_model=DeletedResponse)
async def delete_order(order_id: str) -> DeletedResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return DeletedResponse(message="Order deleted and stock restored")

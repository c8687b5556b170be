# ecommerce/adapters/api/routers/orders.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
import structlog

from ecommerce.core.domain.models import OrderLine, TokenClaims
from ecommerce.core.use_cases.orders import (
    AddOrder,
    DeleteOrder,
    GetOrder,
    ListUserOrders,
    UpdateOrder,
)
from ecommerce.core.domain.exceptions import NotFoundError, ValidationError
from ecommerce.adapters.api.dependencies import (
    get_add_order_use_case,
    get_current_claims,
    get_delete_order_use_case,
    get_get_order_use_case,
    get_list_user_orders_use_case,
    get_update_order_use_case,
)
from ecommerce.adapters.api.schemas import OrderRequest, OrderResponse

logger = structlog.get_logger()

# Every order endpoint requires a valid bearer token.
router = APIRouter(
    prefix="/api/order",
    tags=["Orders"],
    dependencies=[Depends(get_current_claims)],
)


def _lines(payload: OrderRequest) -> List[OrderLine]:
    return [OrderLine(product_id=i.product_id, quantity=i.quantity) for i in payload.items]


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
)
async def add_order(
    payload: OrderRequest,
    response: Response,
    claims: TokenClaims = Depends(get_current_claims),
    use_case: AddOrder = Depends(get_add_order_use_case),
):
    """
    Places an order for the authenticated user.

    Unit prices come from the catalog; the response carries the computed
    `totalAmount` and a `Location` header pointing at the new order.
    """
    try:
        order = await use_case.execute(payload.name, _lines(payload), claims.sub)
    except ValidationError as e:
        logger.warning("order_bad_request", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    response.headers["Location"] = f"/api/order/{order.id}"
    return OrderResponse.model_validate(order)


@router.get("/user/{user_id}", response_model=List[OrderResponse], summary="List a user's orders")
async def list_user_orders(
    user_id: UUID,
    use_case: ListUserOrders = Depends(get_list_user_orders_use_case),
):
    orders = await use_case.execute(user_id)
    return [OrderResponse.model_validate(order) for order in orders]


@router.get("/{order_id}", response_model=OrderResponse, summary="Fetch an order")
async def get_order(
    order_id: UUID,
    use_case: GetOrder = Depends(get_get_order_use_case),
):
    try:
        order = await use_case.execute(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return OrderResponse.model_validate(order)


@router.put("/{order_id}", response_model=OrderResponse, summary="Replace an order")
async def update_order(
    order_id: UUID,
    payload: OrderRequest,
    use_case: UpdateOrder = Depends(get_update_order_use_case),
):
    """Replaces the name and items of an order; the total is recomputed."""
    try:
        order = await use_case.execute(order_id, payload.name, _lines(payload))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return OrderResponse.model_validate(order)


@router.delete("/{order_id}", response_model=OrderResponse, summary="Delete an order")
async def delete_order(
    order_id: UUID,
    use_case: DeleteOrder = Depends(get_delete_order_use_case),
):
    """Removes the order and returns the value it had."""
    try:
        order = await use_case.execute(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return OrderResponse.model_validate(order)
